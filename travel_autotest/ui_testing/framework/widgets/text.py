"""Text input operations (TEXT capability)."""

from __future__ import annotations

from typing import Optional

from ..element import PROBE_TIMEOUT_MS, Capability, Element, require
from ..session import SessionContext


def set_text(box: Element, ctx: SessionContext, value: str) -> Element:
    """Replace the content of ``box`` with ``value``."""
    require(box, Capability.TEXT, "set_text")
    return box.set_text(ctx, value)


def clear_and_type(box: Element, ctx: SessionContext, value: str, delay_ms: int = 0) -> Element:
    """Clear the field, then type ``value`` key by key (fires key events)."""
    require(box, Capability.TEXT, "clear_and_type")

    def operation(loc):
        loc.fill("")
        loc.press_sequentially(value, delay=delay_ms)

    box.perform(ctx, f"Clear and type '{value[:50]}'", operation)
    return box


def append_text(box: Element, ctx: SessionContext, value: str) -> Element:
    """Type ``value`` after the current content."""
    require(box, Capability.TEXT, "append_text")

    def operation(loc):
        loc.press("End")
        loc.press_sequentially(value)

    box.perform(ctx, f"Append text '{value[:50]}'", operation)
    return box


def press_enter(box: Element, ctx: SessionContext) -> Element:
    require(box, Capability.TEXT, "press_enter")
    box.perform(ctx, "Press Enter", lambda loc: loc.press("Enter"), "visible")
    return box


def press_tab(box: Element, ctx: SessionContext) -> Element:
    require(box, Capability.TEXT, "press_tab")
    box.perform(ctx, "Press Tab", lambda loc: loc.press("Tab"), "visible")
    return box


def clear(box: Element, ctx: SessionContext) -> Element:
    require(box, Capability.TEXT, "clear")
    box.perform(ctx, "Clear", lambda loc: loc.fill(""))
    return box


def is_empty(box: Element, ctx: SessionContext) -> bool:
    require(box, Capability.TEXT, "is_empty")
    return box.get_value(ctx) == ""


def get_placeholder(box: Element, ctx: SessionContext) -> Optional[str]:
    require(box, Capability.TEXT, "get_placeholder")
    return box.perform(
        ctx, "Get placeholder",
        lambda loc: loc.get_attribute("placeholder", timeout=PROBE_TIMEOUT_MS),
        "exist",
    )


__all__ = [
    "set_text",
    "clear_and_type",
    "append_text",
    "press_enter",
    "press_tab",
    "clear",
    "is_empty",
    "get_placeholder",
]
