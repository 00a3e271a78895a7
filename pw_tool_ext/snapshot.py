"""
Date                    Author                          Change Details
17-10-2026              Debasish.P                      Page Snapshot Capture And Reference Lookup
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from playwright.async_api import Page, Error as PlaywrightError

from libs.dataclass.conceptual_objects import ElementRef, SnapshotEntry, snapshot_entry_from_json_obj
from pw_tool_ext.errors import ResolutionError

logger = logging.getLogger(__name__)

# Shared in-page registry: one key per DOM node per document, so handles from
# different evaluate calls can be compared by value on the Python side.
IDENTITY_JS = """
const __pwtRegistry = window.__pwTestTools || (window.__pwTestTools = {
  ids: new WeakMap(),
  next: 0,
  doc: Math.random().toString(36).slice(2),
  refs: new Map(),
});
const __pwtIdentity = (el) => {
  if (!__pwtRegistry.ids.has(el)) {
    __pwtRegistry.next += 1;
    __pwtRegistry.ids.set(el, `${__pwtRegistry.doc}:${__pwtRegistry.next}`);
  }
  return __pwtRegistry.ids.get(el);
};
"""

CAPTURE_JS = "(limit) => {" + IDENTITY_JS + """
  const maxItems = Math.max(1, Number(limit || 500));
  const norm = (value, max = 120) => String(value || "").replace(/\\s+/g, " ").trim().slice(0, max);
  const visible = (el) => {
    const style = window.getComputedStyle(el);
    if (!style || style.display === "none" || style.visibility === "hidden") return false;
    const rect = el.getBoundingClientRect();
    return rect.width > 0 && rect.height > 0;
  };
  const implicitRole = (el) => {
    const tag = el.tagName.toLowerCase();
    const type = (el.getAttribute("type") || "").toLowerCase();
    if (tag === "a" && el.hasAttribute("href")) return "link";
    if (tag === "button" || (tag === "input" && ["button", "submit", "reset"].includes(type))) return "button";
    if (tag === "input" && type === "checkbox") return "checkbox";
    if (tag === "input" && type === "radio") return "radio";
    if (tag === "input" || tag === "textarea") return "textbox";
    if (tag === "select") return "combobox";
    if (/^h[1-6]$/.test(tag)) return "heading";
    if (tag === "img") return "img";
    if (tag === "li") return "listitem";
    return "generic";
  };
  const nameOf = (el) => {
    const labelled = (el.getAttribute("aria-labelledby") || "").split(/\\s+/)
      .map((id) => id && document.getElementById(id))
      .filter(Boolean).map((node) => node.textContent).join(" ");
    const labels = "labels" in el && el.labels ? Array.from(el.labels).map((l) => l.textContent).join(" ") : "";
    return norm(el.getAttribute("aria-label") || labelled || labels || el.getAttribute("alt")
      || el.getAttribute("title") || el.getAttribute("placeholder") || el.innerText || "");
  };
  const candidates = Array.from(document.querySelectorAll(
    "a,button,input,textarea,select,summary,img,h1,h2,h3,h4,h5,h6,li,label,[role],[tabindex],[contenteditable='true']"
  ));
  __pwtRegistry.refs = new Map();
  const out = [];
  let counter = 0;
  for (const el of candidates) {
    if (out.length >= maxItems) break;
    if (!visible(el)) continue;
    counter += 1;
    const ref = `e${counter}`;
    __pwtRegistry.refs.set(ref, el);
    __pwtIdentity(el);
    out.push({ ref, role: el.getAttribute("role") || implicitRole(el), name: nameOf(el) });
  }
  return out;
}"""

RESOLVE_JS = "(ref) => {" + IDENTITY_JS + """
  const el = __pwtRegistry.refs.get(ref);
  if (!el || !el.isConnected) return null;
  return __pwtIdentity(el);
}"""


@dataclass
class PageSnapshot:
    """
    Structured capture of the visible, addressable elements of a page at one point in time.
    References are only meaningful until the next capture or navigation.
    """
    url: str
    title: str
    entries: List[SnapshotEntry] = field(default_factory=list)

    def has_ref(self, ref: str) -> bool:
        return any(e.ref == ref for e in self.entries)

    def to_text(self) -> str:
        lines = [f"- Page URL: {self.url}", f"- Page Title: {self.title}", "- Page Snapshot:"]
        lines.extend(e.to_line() for e in self.entries)
        return "\n".join(lines)


async def capture_snapshot(page: Page, limit: int = 500) -> PageSnapshot:
    try:
        raw_entries = await page.evaluate(CAPTURE_JS, limit)
        title = await page.title()
    except PlaywrightError as e:
        raise ResolutionError(f"Unable to capture page snapshot: {e.message}") from e

    entries = [entry for entry in (snapshot_entry_from_json_obj(o) for o in raw_entries) if entry]
    logger.info(f'snapshot captured for {page.url} with {len(entries)} element(s)')
    return PageSnapshot(url=page.url, title=title, entries=entries)


class SnapshotReferenceResolver:
    """ReferenceResolver backed by the snapshot registry living in the page."""

    def __init__(self, page: Page, snapshot: PageSnapshot):
        self.page = page
        self.snapshot = snapshot

    async def resolve(self, ref: str) -> Optional[ElementRef]:
        if not self.snapshot.has_ref(ref):
            logger.info(f'ref {ref} is not part of the current snapshot')
            return None
        try:
            key = await self.page.evaluate(RESOLVE_JS, ref)
        except PlaywrightError as e:
            raise ResolutionError(f"Unable to resolve reference {ref}: {e.message}") from e
        if key is None:
            logger.info(f'ref {ref} no longer points to a live element')
            return None
        return ElementRef(key)
