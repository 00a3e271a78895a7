"""
Date                    Author                          Change Details
17-10-2026              Debasish.P                      Browser Session, Tabs And Tool Context

"""
import logging
from typing import Optional

from playwright.async_api import async_playwright, Playwright, Browser, BrowserContext, Page, \
    Error as PlaywrightError

from pw_tool_ext.config import AppConfig, BrowserConfig
from pw_tool_ext.errors import PreconditionError, ResolutionError
from pw_tool_ext.locator import PlaywrightElementMatcher
from pw_tool_ext.snapshot import PageSnapshot, SnapshotReferenceResolver, capture_snapshot

logger = logging.getLogger(__name__)

NAV_WAIT_MAP = {
    "domReady": "domcontentloaded",
    "load": "load",
    "networkIdle": "networkidle",
}


class BrowserSession:
    def __init__(self, cfg: BrowserConfig):
        self.cfg = cfg
        self._pw: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._ctx: Optional[BrowserContext] = None

    @property
    def started(self) -> bool:
        return self._ctx is not None

    # ---------- lifecycle ----------
    async def start(self):
        self._pw = await async_playwright().start()
        engine = self.cfg.engine
        headless = self.cfg.headless
        slow_mo = self.cfg.slowMoMs

        if engine == "firefox":
            self._browser = await self._pw.firefox.launch(headless=headless, slow_mo=slow_mo)
        elif engine == "webkit":
            self._browser = await self._pw.webkit.launch(headless=headless, slow_mo=slow_mo)
        else:
            self._browser = await self._pw.chromium.launch(headless=headless, slow_mo=slow_mo)

        self._ctx = await self._browser.new_context(locale=self.cfg.locale, viewport=self.cfg.viewport)
        logger.info(f'browser started: {engine}, headless: {headless}')

    async def new_page(self) -> Page:
        if not self.started:
            await self.start()
        return await self._ctx.new_page()

    async def close(self):
        if self._ctx: await self._ctx.close()
        if self._browser: await self._browser.close()
        if self._pw: await self._pw.stop()
        self._ctx, self._browser, self._pw = None, None, None
        logger.info('browser closed')


class Tab:
    def __init__(self, page: Page):
        self.page = page
        self._snapshot: Optional[PageSnapshot] = None

    async def navigate(self, url: str, wait_type: str, timeout_ms: int):
        try:
            await self.page.goto(url, wait_until=NAV_WAIT_MAP.get(wait_type, "domcontentloaded"), timeout=timeout_ms)
        except PlaywrightError as e:
            raise ResolutionError(f"Navigation to {url} failed: {e.message}") from e
        # previous refs belong to the old document
        self._snapshot = None

    async def wait_for_network(self, timeout_ms: int):
        try:
            await self.page.wait_for_load_state("networkidle", timeout=timeout_ms)
        except PlaywrightError as e:
            # network never went idle within the budget; the page is still usable
            logger.warning(f'network did not settle within {timeout_ms}ms: {e.message}')

    async def capture_snapshot(self) -> PageSnapshot:
        self._snapshot = await capture_snapshot(self.page)
        return self._snapshot

    def snapshot_or_die(self) -> PageSnapshot:
        if self._snapshot is None:
            raise PreconditionError("No snapshot available. Capture a snapshot of the page first "
                                    "using the \"browser_snapshot\" tool.")
        return self._snapshot

    def element_matcher(self) -> PlaywrightElementMatcher:
        return PlaywrightElementMatcher(self.page)

    def reference_resolver(self) -> SnapshotReferenceResolver:
        return SnapshotReferenceResolver(self.page, self.snapshot_or_die())


class Context:
    """
    Per-server state handed explicitly to every tool handler: configuration, the browser session and the current tab.
    """

    def __init__(self, cfg: AppConfig, session: Optional[BrowserSession] = None):
        self.cfg = cfg
        self.session = session or BrowserSession(cfg.browser)
        self._current: Optional[Tab] = None

    def current_tab(self) -> Optional[Tab]:
        return self._current

    def current_tab_or_die(self) -> Tab:
        if self._current is None:
            raise PreconditionError("No open pages available. Use the \"browser_navigate\" tool "
                                    "to navigate to a page first.")
        return self._current

    async def ensure_tab(self) -> Tab:
        if self._current is None:
            page = await self.session.new_page()
            self._current = Tab(page)
        return self._current

    async def close(self):
        self._current = None
        if self.session.started:
            await self.session.close()
