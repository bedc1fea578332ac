"""
Two-state controls (CHECKED capability): checkboxes, radio buttons and
toggle switches.

State is read from the ``checked`` property first, then from
``aria-checked`` / ``aria-selected`` so custom switches built from plain
elements behave like native inputs.
"""

from __future__ import annotations

from ..element import Capability, Element, require
from ..session import SessionContext


IS_CHECKED_JS = """el => el.checked === true
    || el.selected === true
    || el.getAttribute('aria-checked') === 'true'
    || el.getAttribute('aria-selected') === 'true'"""


def is_checked(control: Element, ctx: SessionContext) -> bool:
    """Passive query: False when the control is missing or unreadable."""
    require(control, Capability.CHECKED, "is_checked")
    return control.query(
        ctx, "checked",
        lambda loc: loc.count() > 0 and bool(loc.evaluate(IS_CHECKED_JS)),
    )


def _set_state(control: Element, ctx: SessionContext, wanted: bool, action: str) -> Element:
    def operation(loc):
        if bool(loc.evaluate(IS_CHECKED_JS)) != wanted:
            loc.click()

    control.perform(ctx, action, operation)
    return control


def check(control: Element, ctx: SessionContext) -> Element:
    """Check the control; no-op when already checked."""
    require(control, Capability.CHECKED, "check")
    return _set_state(control, ctx, True, "Check")


def uncheck(control: Element, ctx: SessionContext) -> Element:
    """Uncheck the control; no-op when already unchecked."""
    require(control, Capability.CHECKED, "uncheck")
    return _set_state(control, ctx, False, "Uncheck")


def toggle(control: Element, ctx: SessionContext) -> Element:
    require(control, Capability.CHECKED, "toggle")
    control.perform(ctx, "Toggle", lambda loc: loc.click())
    return control


# Radio buttons

def select(radio: Element, ctx: SessionContext) -> Element:
    require(radio, Capability.CHECKED, "select")
    return _set_state(radio, ctx, True, "Select")


def is_selected(radio: Element, ctx: SessionContext) -> bool:
    return is_checked(radio, ctx)


# Toggle switches

def turn_on(switch: Element, ctx: SessionContext) -> Element:
    require(switch, Capability.CHECKED, "turn_on")
    return _set_state(switch, ctx, True, "Turn on")


def turn_off(switch: Element, ctx: SessionContext) -> Element:
    require(switch, Capability.CHECKED, "turn_off")
    return _set_state(switch, ctx, False, "Turn off")


def is_on(switch: Element, ctx: SessionContext) -> bool:
    return is_checked(switch, ctx)


__all__ = [
    "is_checked",
    "check",
    "uncheck",
    "toggle",
    "select",
    "is_selected",
    "turn_on",
    "turn_off",
    "is_on",
]
