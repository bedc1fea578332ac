"""Range input operations (RANGE capability)."""

from __future__ import annotations

from typing import Optional

from ..element import PROBE_TIMEOUT_MS, Capability, Element, require
from ..session import SessionContext


SET_RANGE_VALUE_JS = """(el, value) => {
    el.value = value;
    el.dispatchEvent(new Event('input', {bubbles: true}));
    el.dispatchEvent(new Event('change', {bubbles: true}));
    return el.value;
}"""


def format_number(value: float) -> str:
    """Render 4.0 as "4" and 2.5 as "2.5"."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def _number(raw: Optional[str], default: float) -> float:
    try:
        return float(raw) if raw not in (None, "") else default
    except ValueError:
        return default


def value_for_percent(percent: float, minimum: float, maximum: float, step: Optional[float]) -> float:
    """Value at ``percent`` of the range, snapped to ``step``."""
    value = minimum + (maximum - minimum) * percent / 100.0
    if step and step > 0:
        value = minimum + round((value - minimum) / step) * step
    return max(minimum, min(maximum, value))


def get_value(rng: Element, ctx: SessionContext) -> str:
    require(rng, Capability.RANGE, "get_value")
    return rng.get_value(ctx)


def get_min(rng: Element, ctx: SessionContext) -> str:
    require(rng, Capability.RANGE, "get_min")
    return format_number(_number(rng.get_attribute(ctx, "min"), 0))


def get_max(rng: Element, ctx: SessionContext) -> str:
    require(rng, Capability.RANGE, "get_max")
    return format_number(_number(rng.get_attribute(ctx, "max"), 100))


def slide_to(rng: Element, ctx: SessionContext, percent: float) -> Element:
    """
    Move the slider to ``percent`` of its range.

    Raises:
        ValueError: If ``percent`` is outside 0..100
    """
    require(rng, Capability.RANGE, "slide_to")
    if not 0 <= percent <= 100:
        raise ValueError(f"Percent must be between 0 and 100, got {percent}")

    def operation(loc):
        minimum = _number(loc.get_attribute("min", timeout=PROBE_TIMEOUT_MS), 0)
        maximum = _number(loc.get_attribute("max", timeout=PROBE_TIMEOUT_MS), 100)
        step = _number(loc.get_attribute("step", timeout=PROBE_TIMEOUT_MS), 0)
        value = value_for_percent(percent, minimum, maximum, step)
        return loc.evaluate(SET_RANGE_VALUE_JS, format_number(value))

    rng.perform(ctx, f"Slide to {percent}%", operation)
    return rng


def move_by_offset(rng: Element, ctx: SessionContext, pixels: int) -> Element:
    """Drag the slider thumb horizontally by ``pixels`` from its current position."""
    require(rng, Capability.RANGE, "move_by_offset")

    def operation(loc):
        box = loc.bounding_box()
        if box is None:
            raise ValueError(f"{rng} has no bounding box")
        minimum = _number(loc.get_attribute("min", timeout=PROBE_TIMEOUT_MS), 0)
        maximum = _number(loc.get_attribute("max", timeout=PROBE_TIMEOUT_MS), 100)
        current = _number(loc.input_value(timeout=PROBE_TIMEOUT_MS), minimum)
        ratio = (current - minimum) / (maximum - minimum) if maximum > minimum else 0.5
        x = box["x"] + box["width"] * ratio
        y = box["y"] + box["height"] / 2
        mouse = ctx.page.mouse
        mouse.move(x, y)
        mouse.down()
        mouse.move(x + pixels, y, steps=5)
        mouse.up()

    rng.perform(ctx, f"Move by {pixels}px", operation)
    return rng


__all__ = [
    "format_number",
    "value_for_percent",
    "get_value",
    "get_min",
    "get_max",
    "slide_to",
    "move_by_offset",
]
