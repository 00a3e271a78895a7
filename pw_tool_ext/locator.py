"""
Date                    Author                          Change Details
17-10-2026              Debasish.P                      Validate Locator Against Snapshot Reference

"""
import asyncio
import logging
from typing import List, Optional, Protocol

from playwright.async_api import Page, Error as PlaywrightError

from libs.dataclass.conceptual_objects import ElementRef, MatchResult
from pw_tool_ext.classifier import classify
from pw_tool_ext.errors import ParseError, ResolutionError
from pw_tool_ext.locator_parser import locator_or_selector_as_selector
from pw_tool_ext.snapshot import IDENTITY_JS

logger = logging.getLogger(__name__)

MATCH_JS = "(elements) => {" + IDENTITY_JS + """
  return elements.map((el) => __pwtIdentity(el));
}"""

# engine messages for selectors it could not parse
_SELECTOR_SYNTAX_HINTS = ("Unexpected token", "is not a valid selector", "Unknown engine", "Malformed")


class ElementMatcher(Protocol):
    async def match(self, selector: str) -> List[ElementRef]:
        ...


class ReferenceResolver(Protocol):
    async def resolve(self, ref: str) -> Optional[ElementRef]:
        ...


class PlaywrightElementMatcher:
    """Evaluates a native selector against the live document, returning matches in document order."""

    def __init__(self, page: Page):
        self.page = page

    async def match(self, selector: str) -> List[ElementRef]:
        try:
            keys = await self.page.locator(selector).evaluate_all(MATCH_JS)
        except PlaywrightError as e:
            if any(hint in e.message for hint in _SELECTOR_SYNTAX_HINTS):
                raise ParseError(f"Selector {selector} rejected by the engine: {e.message}") from e
            raise ResolutionError(f"Unable to evaluate selector {selector}: {e.message}") from e
        return [ElementRef(key) for key in keys]


class LocatorValidator:
    """
    Checks whether a locator expression evaluates to exactly the element a snapshot reference points at.

    Selector matching and reference lookup are independent reads and run concurrently;
    classification only happens once both have completed. Engine faults propagate, nothing is retried.
    """

    def __init__(self, matcher: ElementMatcher, resolver: ReferenceResolver, default_test_id_attribute: str):
        self.matcher = matcher
        self.resolver = resolver
        self.default_test_id_attribute = default_test_id_attribute

    async def validate(self, locator: str, ref: str, test_id_attribute_name: Optional[str] = None) -> MatchResult:
        selector = locator_or_selector_as_selector(locator, test_id_attribute_name or self.default_test_id_attribute)
        logger.debug(f'locator {locator} resolved to selector {selector}')

        matched, reference = await asyncio.gather(self.matcher.match(selector), self.resolver.resolve(ref))

        result = classify(matched, reference)
        logger.info(f'validate locator: {locator} ref: {ref} -> {result.outcome.name} ({result.match_count} match(es))')
        return result
