"""
Plus/minus counters (COUNTER capability), e.g. the room and guest pickers of
booking forms.

Parts: ``plus``, ``minus`` and ``value``. The value is read from the text of
the ``value`` part, or from its ``value_attribute`` setting when given.
"""

from __future__ import annotations

import re

from loguru import logger

from ..element import Capability, Element, require
from ..errors import ElementError
from ..session import SessionContext
from ..wait import wait_until


_INTEGER = re.compile(r"-?\d+")


def _part(ctr: Element, key: str) -> Element:
    return Element(ctr.part(key), f"{ctr.name} {key}", kind="Button")


def get_value(ctr: Element, ctx: SessionContext) -> int:
    """
    Current counter value.

    Raises:
        ValueError: If the displayed value holds no integer
    """
    require(ctr, Capability.COUNTER, "get_value")
    display = _part(ctr, "value")
    attribute = ctr.settings.get("value_attribute")
    raw = display.get_attribute(ctx, attribute) if attribute else display.get_text(ctx)
    match = _INTEGER.search(raw or "")
    if match is None:
        raise ValueError(f"{ctr}: cannot read a number from {raw!r}")
    return int(match.group())


def can_increment(ctr: Element, ctx: SessionContext) -> bool:
    require(ctr, Capability.COUNTER, "can_increment")
    return _part(ctr, "plus").is_usable(ctx)


def can_decrement(ctr: Element, ctx: SessionContext) -> bool:
    require(ctr, Capability.COUNTER, "can_decrement")
    return _part(ctr, "minus").is_usable(ctx)


def increment(ctr: Element, ctx: SessionContext) -> Element:
    require(ctr, Capability.COUNTER, "increment")
    _part(ctr, "plus").click(ctx)
    return ctr


def decrement(ctr: Element, ctx: SessionContext) -> Element:
    require(ctr, Capability.COUNTER, "decrement")
    _part(ctr, "minus").click(ctx)
    return ctr


def set_value(ctr: Element, ctx: SessionContext, target: int) -> Element:
    """
    Click plus or minus until the counter shows ``target``.

    Raises:
        ElementError: If the counter stops changing before reaching ``target``
    """
    require(ctr, Capability.COUNTER, "set_value")
    current = get_value(ctr, ctx)
    logger.info(f"{ctr} - setting value {current} -> {target}")

    while current != target:
        step_up = current < target
        if not (can_increment(ctr, ctx) if step_up else can_decrement(ctr, ctx)):
            raise ElementError(
                f"{ctr}: cannot {'increase' if step_up else 'decrease'} past {current} (target {target})",
                str(ctr),
            )
        if step_up:
            increment(ctr, ctx)
        else:
            decrement(ctr, ctx)

        previous = current
        changed = wait_until(
            lambda: get_value(ctr, ctx) != previous,
            ctx.timeouts.default_ms,
            interval_ms=ctx.timeouts.poll_interval_ms,
            description=f"{ctr} value change",
        )
        current = get_value(ctr, ctx)
        if not changed:
            raise ElementError(f"{ctr}: value stuck at {current} (target {target})", str(ctr))

    return ctr


__all__ = [
    "get_value",
    "set_value",
    "increment",
    "decrement",
    "can_increment",
    "can_decrement",
]
