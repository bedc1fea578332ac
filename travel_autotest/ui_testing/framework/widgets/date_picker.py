"""
Calendar date pickers (DATE capability).

Settings:
    day_locator_format: locator of one calendar day, formatted with
        ``day``, ``month`` and ``year`` (e.g. "[data-date='{year}-{month:02d}-{day:02d}']")
    date_format: strftime format of the input value (default "%m/%d/%Y")
Parts:
    next / previous: month navigation buttons
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from loguru import logger

from ..element import Capability, Element, require
from ..element_types import DEFAULT_DATE_FORMAT
from ..session import SessionContext


def _date_format(picker: Element) -> str:
    return picker.settings.get("date_format") or DEFAULT_DATE_FORMAT


def day_element(picker: Element, day: date) -> Element:
    """Element of the calendar cell for ``day``."""
    locator = picker.settings["day_locator_format"].format(
        day=day.day, month=day.month, year=day.year
    )
    return Element(locator, f"{picker.name} day {day.isoformat()}", kind="Button")


def set_date(picker: Element, ctx: SessionContext, day: date) -> Element:
    """Open the calendar and click ``day``."""
    require(picker, Capability.DATE, "set_date")
    logger.info(f"{picker} - setting date {day.isoformat()}")
    picker.click(ctx)
    day_element(picker, day).click(ctx)
    return picker


def select_date(picker: Element, ctx: SessionContext, text: str) -> Element:
    """
    Parse ``text`` with the picker's date format, then :func:`set_date`.

    Raises:
        ValueError: If ``text`` does not match the date format
    """
    require(picker, Capability.DATE, "select_date")
    return set_date(picker, ctx, datetime.strptime(text, _date_format(picker)).date())


def get_selected_date(picker: Element, ctx: SessionContext) -> str:
    require(picker, Capability.DATE, "get_selected_date")
    return picker.get_value(ctx)


def get_selected_local_date(picker: Element, ctx: SessionContext) -> Optional[date]:
    """Selected date, or None when the input is empty or unparsable."""
    require(picker, Capability.DATE, "get_selected_local_date")
    raw = get_selected_date(picker, ctx).strip()
    if not raw:
        return None
    try:
        return datetime.strptime(raw, _date_format(picker)).date()
    except ValueError:
        logger.warning(f"{picker} - '{raw}' does not match format {_date_format(picker)}")
        return None


def clear_date(picker: Element, ctx: SessionContext) -> Element:
    require(picker, Capability.DATE, "clear_date")
    picker.perform(ctx, "Clear date", lambda loc: loc.fill(""))
    return picker


def is_date_enabled(picker: Element, ctx: SessionContext, day: date) -> bool:
    """Whether the calendar cell for ``day`` exists and is selectable."""
    require(picker, Capability.DATE, "is_date_enabled")
    return day_element(picker, day).is_usable(ctx)


def next_month(picker: Element, ctx: SessionContext) -> Element:
    require(picker, Capability.DATE, "next_month")
    Element(picker.part("next"), f"{picker.name} next month", kind="Button").click(ctx)
    return picker


def previous_month(picker: Element, ctx: SessionContext) -> Element:
    require(picker, Capability.DATE, "previous_month")
    Element(picker.part("previous"), f"{picker.name} previous month", kind="Button").click(ctx)
    return picker


__all__ = [
    "day_element",
    "set_date",
    "select_date",
    "get_selected_date",
    "get_selected_local_date",
    "clear_date",
    "is_date_enabled",
    "next_month",
    "previous_month",
]
