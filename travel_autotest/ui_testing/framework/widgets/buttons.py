"""Button operations (PRESSABLE capability)."""

from __future__ import annotations

from ..element import Capability, Element, require
from ..session import SessionContext


SUBMIT_JS = """el => {
    if (el.form) {
        el.form.requestSubmit ? el.form.requestSubmit() : el.form.submit();
    } else {
        el.click();
    }
}"""

FOCUS_JS = "el => el.focus()"


def submit(btn: Element, ctx: SessionContext) -> Element:
    """Submit the button's form, or click it when it has none."""
    require(btn, Capability.PRESSABLE, "submit")
    btn.perform(ctx, "Submit", lambda loc: loc.evaluate(SUBMIT_JS))
    return btn


def focus(btn: Element, ctx: SessionContext) -> Element:
    require(btn, Capability.PRESSABLE, "focus")
    btn.perform(ctx, "Focus", lambda loc: loc.evaluate(FOCUS_JS), "visible")
    return btn


def press_and_hold(btn: Element, ctx: SessionContext) -> Element:
    """Move the mouse onto the button and keep the left button down."""
    require(btn, Capability.PRESSABLE, "press_and_hold")

    def operation(loc):
        loc.hover()
        ctx.page.mouse.down()

    btn.perform(ctx, "Press and hold", operation)
    return btn


def release(btn: Element, ctx: SessionContext) -> Element:
    """Release a mouse button held by :func:`press_and_hold`."""
    require(btn, Capability.PRESSABLE, "release")
    btn.perform(ctx, "Release", lambda loc: ctx.page.mouse.up(), None)
    return btn


def press_space(btn: Element, ctx: SessionContext) -> Element:
    require(btn, Capability.PRESSABLE, "press_space")
    btn.perform(ctx, "Press Space", lambda loc: loc.press("Space"))
    return btn


def press_enter(btn: Element, ctx: SessionContext) -> Element:
    require(btn, Capability.PRESSABLE, "press_enter")
    btn.perform(ctx, "Press Enter", lambda loc: loc.press("Enter"))
    return btn


__all__ = [
    "submit",
    "focus",
    "press_and_hold",
    "release",
    "press_space",
    "press_enter",
]
