"""
Collapsible panels (EXPANDABLE capability) and iframes (FRAME capability).

Panel parts ``expand``, ``collapse`` and ``content`` are looked up inside the
panel. Entering a frame returns a new SessionContext; the caller's context
keeps pointing at the enclosing document.
"""

from __future__ import annotations

from typing import Callable, TypeVar

from loguru import logger

from ..element import Capability, Element, require
from ..session import SessionContext


T = TypeVar("T")

TITLE_LOCATOR = "[role='heading']"


# =============================================================================
# Panel
# =============================================================================

def _content(panel: Element) -> Element:
    return panel.child(panel.part("content"), f"{panel.name} content")


def is_expanded(panel: Element, ctx: SessionContext) -> bool:
    """Whether the panel content is visible."""
    require(panel, Capability.EXPANDABLE, "is_expanded")
    return _content(panel).is_visible(ctx)


def wait_for_expanded(panel: Element, ctx: SessionContext) -> Element:
    require(panel, Capability.EXPANDABLE, "wait_for_expanded")
    _content(panel).wait_for_visible(ctx)
    return panel


def wait_for_collapsed(panel: Element, ctx: SessionContext) -> Element:
    require(panel, Capability.EXPANDABLE, "wait_for_collapsed")
    _content(panel).wait_for_not_visible(ctx)
    return panel


def expand(panel: Element, ctx: SessionContext) -> Element:
    """Open the panel unless it already is; waits for the content."""
    require(panel, Capability.EXPANDABLE, "expand")
    if is_expanded(panel, ctx):
        logger.debug(f"{panel} - already expanded")
        return panel
    panel.child(panel.part("expand"), f"{panel.name} expand", kind="Button").click(ctx)
    return wait_for_expanded(panel, ctx)


def collapse(panel: Element, ctx: SessionContext) -> Element:
    """Close the panel unless it already is; waits for the content to hide."""
    require(panel, Capability.EXPANDABLE, "collapse")
    if not is_expanded(panel, ctx):
        logger.debug(f"{panel} - already collapsed")
        return panel
    panel.child(panel.part("collapse"), f"{panel.name} collapse", kind="Button").click(ctx)
    return wait_for_collapsed(panel, ctx)


def toggle_panel(panel: Element, ctx: SessionContext) -> Element:
    require(panel, Capability.EXPANDABLE, "toggle_panel")
    was_expanded = is_expanded(panel, ctx)
    if was_expanded:
        collapse(panel, ctx)
    else:
        expand(panel, ctx)
    logger.info(
        f"{panel} - toggled from {'expanded' if was_expanded else 'collapsed'} "
        f"to {'collapsed' if was_expanded else 'expanded'}"
    )
    return panel


def get_title(panel: Element, ctx: SessionContext) -> str:
    require(panel, Capability.EXPANDABLE, "get_title")
    return panel.child(TITLE_LOCATOR, f"{panel.name} title").get_text(ctx)


def get_content(panel: Element, ctx: SessionContext) -> str:
    require(panel, Capability.EXPANDABLE, "get_content")
    return _content(panel).get_text(ctx)


# =============================================================================
# Frame
# =============================================================================

def switch_to(frame: Element, ctx: SessionContext) -> SessionContext:
    """Wait for the iframe, scroll it into view and return a context inside it."""
    require(frame, Capability.FRAME, "switch_to")
    frame.wait_for_visible(ctx)
    frame.scroll_to(ctx)
    logger.info(f"{frame} - switched into frame")
    return ctx.in_frame(frame.locator)


def switch_back(frame: Element, ctx: SessionContext) -> SessionContext:
    """Context on the top-level document of the same tab."""
    require(frame, Capability.FRAME, "switch_back")
    logger.info(f"{frame} - switched back to main document")
    return ctx.main_frame()


def with_frame(frame: Element, ctx: SessionContext, actions: Callable[[SessionContext], T]) -> T:
    """Run ``actions`` with a context inside the frame and return its result."""
    require(frame, Capability.FRAME, "with_frame")
    return actions(switch_to(frame, ctx))


__all__ = [
    "TITLE_LOCATOR",
    "expand",
    "collapse",
    "toggle_panel",
    "is_expanded",
    "get_title",
    "get_content",
    "wait_for_expanded",
    "wait_for_collapsed",
    "switch_to",
    "switch_back",
    "with_frame",
]
