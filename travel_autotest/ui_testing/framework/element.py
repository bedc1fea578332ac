# ================================================================================
# Element Module
# ================================================================================
#
# A single immutable element type: a locator, a display name and the set of
# capabilities that decide which widget functions accept it.
#
# Key Features:
#   - Locator re-resolved on every call (never a cached handle)
#   - Passive queries absorb errors into False
#   - Actions wait for their precondition, log, and re-raise on failure
#   - Stale-element retry limited to detached-node errors
#   - Allure step for every action
#
# Usage:
#   search = Element("#search", "Search Box", capabilities=frozenset({Capability.TEXT}))
#   search.set_text(ctx, "Da Nang").wait_for_text(ctx, "Da Nang")
#
# ================================================================================

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, FrozenSet, Mapping, Optional, TypeVar

import allure
from loguru import logger
from playwright.sync_api import Locator
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from .errors import CapabilityError, WaitTimeoutError
from .session import SessionContext
from .wait import poll_until, retry_on_stale


T = TypeVar("T")

# Budget for a single non-waiting probe (element already known to exist)
PROBE_TIMEOUT_MS = 1000

TEXT_OF_JS = """el => {
    const tag = el.tagName.toLowerCase();
    if (tag === 'input' || tag === 'textarea') return el.value;
    if (tag === 'select') return el.selectedIndex >= 0 ? el.options[el.selectedIndex].text : '';
    return el.innerText;
}"""

CSS_VALUE_JS = "(el, prop) => window.getComputedStyle(el).getPropertyValue(prop)"

SCROLL_INTO_VIEW_JS = "el => el.scrollIntoView({block: 'center', inline: 'nearest'})"


class Capability(str, Enum):
    """Behaviours an element supports beyond the base contract."""
    TEXT = "text"
    PRESSABLE = "pressable"
    OPTIONS = "options"
    MULTI_OPTIONS = "multi_options"
    CHECKED = "checked"
    RANGE = "range"
    COUNTER = "counter"
    DATE = "date"
    FILE_INPUT = "file_input"
    DOWNLOAD = "download"
    RICH_TEXT = "rich_text"
    SEGMENTS = "segments"
    PAGES = "pages"
    EXPANDABLE = "expandable"
    FRAME = "frame"
    IMAGE = "image"
    ICON = "icon"
    TOOLTIP = "tooltip"
    COLLECTION = "collection"


@dataclass(frozen=True)
class Element:
    """
    Named element bound to a locator.

    Attributes:
        locator: CSS selector or XPath, resolved on every operation
        name: Human-readable name used in logs and reports
        kind: Display tag ("Button", "TextBox", ...); no behaviour attached
        capabilities: Capability flags checked by widget functions
        parts: Named sub-locators (e.g. "plus"/"minus" of a counter)
        settings: Per-widget options (e.g. date format)

    Every method takes the SessionContext to run in. Mutating methods return
    the element so calls can be chained.
    """
    locator: str
    name: str
    kind: str = "Element"
    capabilities: FrozenSet[Capability] = frozenset()
    parts: Mapping[str, str] = field(default_factory=dict, hash=False)
    settings: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "capabilities", frozenset(self.capabilities))
        object.__setattr__(self, "parts", MappingProxyType(dict(self.parts)))
        object.__setattr__(self, "settings", MappingProxyType(dict(self.settings)))

    def __str__(self) -> str:
        return f"{self.kind} '{self.name}' [{self.locator}]"

    # =========================================================================
    # Resolution
    # =========================================================================

    def has(self, capability: Capability) -> bool:
        return capability in self.capabilities

    def resolve(self, ctx: SessionContext) -> Locator:
        """Fresh Locator for this element in ``ctx``."""
        return ctx.locate(self.locator)

    def part(self, key: str) -> str:
        """Sub-locator registered under ``key``."""
        try:
            return self.parts[key]
        except KeyError:
            raise KeyError(f"{self} has no part '{key}'") from None

    def child(self, selector: str, name: Optional[str] = None, kind: str = "Element") -> "Element":
        """Plain element scoped inside this one."""
        return Element(
            locator=f"{self.locator} >> {selector}",
            name=name or f"{self.name} / {selector}",
            kind=kind,
        )

    def nth(self, index: int) -> "Element":
        """Same element definition pointing at the ``index``-th match."""
        return replace(
            self,
            locator=f"{self.locator} >> nth={index}",
            name=f"{self.name}[{index}]",
        )

    def _timeout(self, ctx: SessionContext, timeout: Optional[int]) -> int:
        return timeout if timeout is not None else ctx.timeouts.element_ms

    # =========================================================================
    # Passive queries (never raise)
    # =========================================================================

    def query(self, ctx: SessionContext, query: str, check: Callable[[Locator], bool]) -> bool:
        try:
            return bool(check(self.resolve(ctx)))
        except Exception as e:
            logger.warning(f"{self} - {query} check failed: {str(e)[:200]}")
            return False

    def exists(self, ctx: SessionContext) -> bool:
        return self.query(ctx, "exists", lambda loc: loc.count() > 0)

    def is_visible(self, ctx: SessionContext) -> bool:
        return self.query(ctx, "visible", lambda loc: loc.is_visible())

    is_displayed = is_visible

    def is_enabled(self, ctx: SessionContext) -> bool:
        return self.query(
            ctx, "enabled",
            lambda loc: loc.count() > 0 and loc.is_enabled(timeout=PROBE_TIMEOUT_MS),
        )

    def is_disabled(self, ctx: SessionContext) -> bool:
        return self.query(
            ctx, "disabled",
            lambda loc: loc.count() > 0 and not loc.is_enabled(timeout=PROBE_TIMEOUT_MS),
        )

    def is_read_only(self, ctx: SessionContext) -> bool:
        return self.query(
            ctx, "read-only",
            lambda loc: loc.count() > 0
            and loc.get_attribute("readonly", timeout=PROBE_TIMEOUT_MS) is not None,
        )

    def has_class(self, ctx: SessionContext, class_name: str) -> bool:
        def check(loc: Locator) -> bool:
            if loc.count() == 0:
                return False
            classes = loc.get_attribute("class", timeout=PROBE_TIMEOUT_MS) or ""
            return class_name in classes.split()

        return self.query(ctx, f"class '{class_name}'", check)

    def is_usable(self, ctx: SessionContext) -> bool:
        """Exists, enabled, and not flagged disabled by class or aria-disabled."""
        def check(loc: Locator) -> bool:
            if loc.count() == 0 or not loc.is_enabled(timeout=PROBE_TIMEOUT_MS):
                return False
            classes = (loc.get_attribute("class", timeout=PROBE_TIMEOUT_MS) or "").split()
            aria = loc.get_attribute("aria-disabled", timeout=PROBE_TIMEOUT_MS)
            return "disabled" not in classes and aria != "true"

        return self.query(ctx, "usable", check)

    # =========================================================================
    # Waits (raise WaitTimeoutError)
    # =========================================================================

    def _checks(self) -> Mapping[str, Callable[[Locator], bool]]:
        return {
            "visible": lambda loc: loc.is_visible(),
            "clickable": lambda loc: loc.is_visible() and loc.is_enabled(timeout=PROBE_TIMEOUT_MS),
            "exist": lambda loc: loc.count() > 0,
            "not visible": lambda loc: not loc.is_visible(),
        }

    def _wait(
        self,
        ctx: SessionContext,
        condition: str,
        check: Callable[[Locator], bool],
        timeout: Optional[int],
    ) -> "Element":
        timeout = self._timeout(ctx, timeout)
        logger.debug(f"{self} - waiting for {condition} (timeout {timeout}ms)")
        poll_until(
            lambda: check(self.resolve(ctx)),
            timeout,
            interval_ms=ctx.timeouts.poll_interval_ms,
            description=condition,
            target=str(self),
        )
        return self

    def wait_for_visible(self, ctx: SessionContext, timeout: Optional[int] = None) -> "Element":
        return self._wait(ctx, "visible", self._checks()["visible"], timeout)

    def wait_for_clickable(self, ctx: SessionContext, timeout: Optional[int] = None) -> "Element":
        return self._wait(ctx, "clickable", self._checks()["clickable"], timeout)

    def wait_for_exist(self, ctx: SessionContext, timeout: Optional[int] = None) -> "Element":
        return self._wait(ctx, "exist", self._checks()["exist"], timeout)

    def wait_for_not_visible(self, ctx: SessionContext, timeout: Optional[int] = None) -> "Element":
        return self._wait(ctx, "not visible", self._checks()["not visible"], timeout)

    def wait_for_text(self, ctx: SessionContext, text: str, timeout: Optional[int] = None) -> "Element":
        return self._wait(
            ctx, f"text '{text}'",
            lambda loc: loc.count() > 0 and _text_of(loc) == text,
            timeout,
        )

    def wait_for_text_contains(
        self, ctx: SessionContext, text: str, timeout: Optional[int] = None
    ) -> "Element":
        return self._wait(
            ctx, f"text containing '{text}'",
            lambda loc: loc.count() > 0 and text in _text_of(loc),
            timeout,
        )

    def wait_for_attribute(
        self, ctx: SessionContext, attribute: str, value: str, timeout: Optional[int] = None
    ) -> "Element":
        return self._wait(
            ctx, f"attribute {attribute}='{value}'",
            lambda loc: loc.count() > 0
            and loc.get_attribute(attribute, timeout=PROBE_TIMEOUT_MS) == value,
            timeout,
        )

    def wait_for_condition(
        self,
        ctx: SessionContext,
        predicate: Callable[[Locator], bool],
        description: str = "custom condition",
        timeout: Optional[int] = None,
    ) -> "Element":
        return self._wait(ctx, description, predicate, timeout)

    # =========================================================================
    # Actions (wait, act once, log, re-raise)
    # =========================================================================

    def perform(
        self,
        ctx: SessionContext,
        action: str,
        operation: Callable[[Locator], T],
        precondition: Optional[str] = "clickable",
        timeout: Optional[int] = None,
    ) -> T:
        """
        Run one Playwright operation against this element.

        Args:
            ctx: Session context to run in
            action: Human-readable action name for logs and Allure
            operation: Callable receiving the freshly resolved Locator
            precondition: "visible", "clickable", "exist" or None
            timeout: Precondition budget in milliseconds

        Returns:
            Whatever ``operation`` returns

        Raises:
            WaitTimeoutError: Precondition not met, or Playwright timed out
            StaleElementError: Element kept detaching across retries
        """
        timeout = self._timeout(ctx, timeout)
        check = self._checks()[precondition] if precondition else None

        def attempt() -> T:
            if check is not None:
                self._wait(ctx, precondition, check, timeout)
            return operation(self.resolve(ctx))

        with allure.step(f"{action}: {self.name}"):
            logger.info(f"{self} - {action}")
            try:
                result = retry_on_stale(attempt, target=str(self))
            except PlaywrightTimeoutError as e:
                error = WaitTimeoutError(str(self), action, timeout, e)
                logger.error(f"{self} - {action} failed: {error}")
                raise error from e
            except Exception as e:
                logger.error(f"{self} - {action} failed: {str(e)[:300]}")
                raise
            logger.debug(f"{self} - {action} succeeded")
            return result

    def click(self, ctx: SessionContext, timeout: Optional[int] = None) -> "Element":
        timeout = self._timeout(ctx, timeout)
        self.perform(ctx, "Click", lambda loc: loc.click(timeout=timeout), "clickable", timeout)
        return self

    def double_click(self, ctx: SessionContext, timeout: Optional[int] = None) -> "Element":
        timeout = self._timeout(ctx, timeout)
        self.perform(ctx, "Double click", lambda loc: loc.dblclick(timeout=timeout), "clickable", timeout)
        return self

    def right_click(self, ctx: SessionContext, timeout: Optional[int] = None) -> "Element":
        timeout = self._timeout(ctx, timeout)
        self.perform(
            ctx, "Right click",
            lambda loc: loc.click(button="right", timeout=timeout),
            "clickable", timeout,
        )
        return self

    def hover(self, ctx: SessionContext, timeout: Optional[int] = None) -> "Element":
        timeout = self._timeout(ctx, timeout)
        self.perform(ctx, "Hover", lambda loc: loc.hover(timeout=timeout), "visible", timeout)
        return self

    def set_text(self, ctx: SessionContext, value: str, timeout: Optional[int] = None) -> "Element":
        timeout = self._timeout(ctx, timeout)
        self.perform(
            ctx, f"Set text '{value[:50]}'",
            lambda loc: loc.fill(value, timeout=timeout),
            "clickable", timeout,
        )
        return self

    def get_text(self, ctx: SessionContext, timeout: Optional[int] = None) -> str:
        return self.perform(ctx, "Get text", _text_of, "visible", timeout)

    def get_attribute(
        self, ctx: SessionContext, attribute: str, timeout: Optional[int] = None
    ) -> Optional[str]:
        return self.perform(
            ctx, f"Get attribute '{attribute}'",
            lambda loc: loc.get_attribute(attribute, timeout=PROBE_TIMEOUT_MS),
            "exist", timeout,
        )

    def get_value(self, ctx: SessionContext, timeout: Optional[int] = None) -> str:
        return self.perform(
            ctx, "Get value",
            lambda loc: loc.input_value(timeout=PROBE_TIMEOUT_MS),
            "exist", timeout,
        )

    def get_css_value(self, ctx: SessionContext, prop: str, timeout: Optional[int] = None) -> str:
        return self.perform(
            ctx, f"Get CSS '{prop}'",
            lambda loc: loc.evaluate(CSS_VALUE_JS, prop),
            "exist", timeout,
        )

    def scroll_to(self, ctx: SessionContext, timeout: Optional[int] = None) -> "Element":
        timeout = self._timeout(ctx, timeout)
        self.perform(
            ctx, "Scroll to",
            lambda loc: loc.scroll_into_view_if_needed(timeout=timeout),
            "exist", timeout,
        )
        return self

    def scroll_into_view(self, ctx: SessionContext, timeout: Optional[int] = None) -> "Element":
        self.perform(ctx, "Scroll into view", lambda loc: loc.evaluate(SCROLL_INTO_VIEW_JS), "exist", timeout)
        return self


def _text_of(locator: Locator) -> str:
    """Visible text, or the value of form fields, stripped."""
    return (locator.evaluate(TEXT_OF_JS) or "").strip()


def require(element: Element, capability: Capability, operation: str) -> Element:
    """
    Check that ``element`` supports ``capability``.

    Raises:
        CapabilityError: If the capability is missing
    """
    if capability not in element.capabilities:
        raise CapabilityError(str(element), capability.value, operation)
    return element


__all__ = [
    "Capability",
    "Element",
    "PROBE_TIMEOUT_MS",
    "TEXT_OF_JS",
    "CSS_VALUE_JS",
    "SCROLL_INTO_VIEW_JS",
    "require",
]
