"""
Select-list operations.

OPTIONS covers single selects (dropdowns); MULTI_OPTIONS adds the
``<select multiple>`` operations of a list box. Indexes are 0-based in
rendering order.
"""

from __future__ import annotations

from typing import List, Sequence

from loguru import logger

from ..element import PROBE_TIMEOUT_MS, Capability, Element, require
from ..errors import ElementNotFoundError
from ..session import SessionContext


OPTION_TEXTS_JS = "el => Array.from(el.options).map(o => o.text.trim())"
OPTION_VALUES_JS = "el => Array.from(el.options).map(o => o.value)"
SELECTED_TEXTS_JS = "el => Array.from(el.selectedOptions).map(o => o.text.trim())"
SELECTED_VALUES_JS = "el => Array.from(el.selectedOptions).map(o => o.value)"


def _read(select: Element, ctx: SessionContext, script: str, what: str) -> List[str]:
    return select.perform(ctx, f"Get {what}", lambda loc: loc.evaluate(script), "exist")


def _missing(select: Element, kind: str, wanted: Sequence, available: Sequence) -> ElementNotFoundError:
    return ElementNotFoundError(
        f"{select}: no option with {kind} {list(wanted)!r} (available: {list(available)!r})",
        str(select),
    )


# =========================================================================
# Single selection
# =========================================================================

def select_by_visible_text(select: Element, ctx: SessionContext, text: str) -> Element:
    require(select, Capability.OPTIONS, "select_by_visible_text")

    def operation(loc):
        texts = loc.evaluate(OPTION_TEXTS_JS)
        if text not in texts:
            raise _missing(select, "text", [text], texts)
        loc.select_option(label=text, timeout=PROBE_TIMEOUT_MS)

    select.perform(ctx, f"Select by text '{text}'", operation)
    return select


def select_by_value(select: Element, ctx: SessionContext, value: str) -> Element:
    require(select, Capability.OPTIONS, "select_by_value")

    def operation(loc):
        values = loc.evaluate(OPTION_VALUES_JS)
        if value not in values:
            raise _missing(select, "value", [value], values)
        loc.select_option(value=value, timeout=PROBE_TIMEOUT_MS)

    select.perform(ctx, f"Select by value '{value}'", operation)
    return select


def select_by_index(select: Element, ctx: SessionContext, index: int) -> Element:
    require(select, Capability.OPTIONS, "select_by_index")

    def operation(loc):
        count = len(loc.evaluate(OPTION_VALUES_JS))
        if index < 0 or index >= count:
            raise IndexError(f"{select}: option index {index} out of range (options: {count})")
        loc.select_option(index=index, timeout=PROBE_TIMEOUT_MS)

    select.perform(ctx, f"Select by index {index}", operation)
    return select


def get_selected_text(select: Element, ctx: SessionContext) -> str:
    require(select, Capability.OPTIONS, "get_selected_text")
    selected = _read(select, ctx, SELECTED_TEXTS_JS, "selected text")
    return selected[0] if selected else ""


def get_selected_value(select: Element, ctx: SessionContext) -> str:
    require(select, Capability.OPTIONS, "get_selected_value")
    selected = _read(select, ctx, SELECTED_VALUES_JS, "selected value")
    return selected[0] if selected else ""


def get_all_options(select: Element, ctx: SessionContext) -> List[str]:
    require(select, Capability.OPTIONS, "get_all_options")
    return _read(select, ctx, OPTION_TEXTS_JS, "option texts")


def get_all_values(select: Element, ctx: SessionContext) -> List[str]:
    require(select, Capability.OPTIONS, "get_all_values")
    return _read(select, ctx, OPTION_VALUES_JS, "option values")


def has_option(select: Element, ctx: SessionContext, text: str) -> bool:
    return text in get_all_options(select, ctx)


def has_value(select: Element, ctx: SessionContext, value: str) -> bool:
    return value in get_all_values(select, ctx)


def get_options_count(select: Element, ctx: SessionContext) -> int:
    """Number of options; 0 when the list cannot be read."""
    require(select, Capability.OPTIONS, "get_options_count")
    try:
        return len(select.resolve(ctx).evaluate(OPTION_VALUES_JS))
    except Exception as e:
        logger.warning(f"{select} - could not count options: {str(e)[:200]}")
        return 0


# =========================================================================
# Multiple selection
# =========================================================================

def is_multiple(select: Element, ctx: SessionContext) -> bool:
    require(select, Capability.MULTI_OPTIONS, "is_multiple")
    return select.get_attribute(ctx, "multiple") is not None


def get_selected_texts(select: Element, ctx: SessionContext) -> List[str]:
    require(select, Capability.MULTI_OPTIONS, "get_selected_texts")
    return _read(select, ctx, SELECTED_TEXTS_JS, "selected texts")


def get_selected_values(select: Element, ctx: SessionContext) -> List[str]:
    require(select, Capability.MULTI_OPTIONS, "get_selected_values")
    return _read(select, ctx, SELECTED_VALUES_JS, "selected values")


def _merge(current: Sequence[str], extra: Sequence[str]) -> List[str]:
    merged = list(current)
    merged.extend(item for item in extra if item not in merged)
    return merged


def select_by_texts(select: Element, ctx: SessionContext, texts: Sequence[str]) -> Element:
    """Add the options labelled ``texts`` to the current selection."""
    require(select, Capability.MULTI_OPTIONS, "select_by_texts")

    def operation(loc):
        available = loc.evaluate(OPTION_TEXTS_JS)
        unknown = [t for t in texts if t not in available]
        if unknown:
            raise _missing(select, "texts", unknown, available)
        labels = _merge(loc.evaluate(SELECTED_TEXTS_JS), texts)
        loc.select_option(label=labels, timeout=PROBE_TIMEOUT_MS)

    select.perform(ctx, f"Select texts {list(texts)}", operation)
    return select


def select_by_values(select: Element, ctx: SessionContext, values: Sequence[str]) -> Element:
    """Add the options with ``values`` to the current selection."""
    require(select, Capability.MULTI_OPTIONS, "select_by_values")

    def operation(loc):
        available = loc.evaluate(OPTION_VALUES_JS)
        unknown = [v for v in values if v not in available]
        if unknown:
            raise _missing(select, "values", unknown, available)
        merged = _merge(loc.evaluate(SELECTED_VALUES_JS), values)
        loc.select_option(value=merged, timeout=PROBE_TIMEOUT_MS)

    select.perform(ctx, f"Select values {list(values)}", operation)
    return select


def deselect_all(select: Element, ctx: SessionContext) -> Element:
    require(select, Capability.MULTI_OPTIONS, "deselect_all")
    select.perform(ctx, "Deselect all", lambda loc: loc.select_option([], timeout=PROBE_TIMEOUT_MS))
    return select


def deselect_by_texts(select: Element, ctx: SessionContext, texts: Sequence[str]) -> Element:
    require(select, Capability.MULTI_OPTIONS, "deselect_by_texts")

    def operation(loc):
        remaining = [t for t in loc.evaluate(SELECTED_TEXTS_JS) if t not in texts]
        loc.select_option(label=remaining, timeout=PROBE_TIMEOUT_MS)

    select.perform(ctx, f"Deselect texts {list(texts)}", operation)
    return select


__all__ = [
    "select_by_visible_text",
    "select_by_value",
    "select_by_index",
    "get_selected_text",
    "get_selected_value",
    "get_all_options",
    "get_all_values",
    "has_option",
    "has_value",
    "get_options_count",
    "is_multiple",
    "get_selected_texts",
    "get_selected_values",
    "select_by_texts",
    "select_by_values",
    "deselect_all",
    "deselect_by_texts",
]
