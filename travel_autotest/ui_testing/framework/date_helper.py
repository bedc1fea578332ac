"""
Date arithmetic for booking forms: check-in/check-out pairs, next weekday,
calendar formatting.

Weekdays use Python numbering (``calendar.MONDAY`` == 0 ... ``calendar.SUNDAY`` == 6).
Every function accepts an optional ``today`` so tests can pin the clock.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Optional, Tuple, Union

from loguru import logger

from .element_types import DEFAULT_DATE_FORMAT


DateLike = Union[date, datetime]

WEEKEND_START_DAYS = (calendar.FRIDAY, calendar.SATURDAY)


def _today(today: Optional[date]) -> date:
    return today if today is not None else date.today()


def day_name(day_of_week: int) -> str:
    """English name of ``day_of_week``, or "Unknown" outside 0..6."""
    if 0 <= day_of_week <= 6:
        return calendar.day_name[day_of_week]
    return "Unknown"


def days_until_next_day_of_week(day_of_week: int, today: Optional[date] = None) -> int:
    """Days until the next ``day_of_week``; 7 when today already is that day."""
    days = (day_of_week - _today(today).weekday()) % 7 or 7
    logger.debug(f"Days until next {day_name(day_of_week)}: {days}")
    return days


def next_day_of_week(day_of_week: int, today: Optional[date] = None) -> date:
    today = _today(today)
    return today + timedelta(days=days_until_next_day_of_week(day_of_week, today))


def future_date(days: int, base: Optional[date] = None) -> date:
    """``base`` (default today) plus ``days``."""
    return _today(base) + timedelta(days=days)


def format_date(value: DateLike, fmt: str = DEFAULT_DATE_FORMAT) -> str:
    return value.strftime(fmt)


def days_between(first: DateLike, second: DateLike) -> int:
    """Absolute number of whole days between two dates."""
    return abs((second - first).days)


def calculate_hotel_dates(
    check_in_offset: int,
    nights: int,
    today: Optional[date] = None,
) -> Tuple[date, date]:
    """
    Check-in ``check_in_offset`` days from today, check-out ``nights`` later.

    Returns:
        (check_in, check_out)
    """
    check_in = future_date(check_in_offset, today)
    check_out = future_date(nights, check_in)
    logger.info(
        f"Hotel dates: check-in {format_date(check_in)}, check-out {format_date(check_out)}"
    )
    return check_in, check_out


def calculate_weekend_stay(
    start_day: int,
    nights: int,
    today: Optional[date] = None,
) -> Tuple[date, date]:
    """
    Stay starting on the next Friday or Saturday.

    Raises:
        ValueError: If ``start_day`` is neither Friday nor Saturday
    """
    if start_day not in WEEKEND_START_DAYS:
        raise ValueError(
            f"Weekend start day must be Friday or Saturday, got {day_name(start_day)}"
        )
    check_in = next_day_of_week(start_day, today)
    check_out = future_date(nights, check_in)
    logger.info(
        f"Weekend stay: check-in {format_date(check_in)} ({day_name(start_day)}), "
        f"check-out {format_date(check_out)}"
    )
    return check_in, check_out


def parse_date(text: str, fmt: str = DEFAULT_DATE_FORMAT) -> date:
    return datetime.strptime(text, fmt).date()


__all__ = [
    "day_name",
    "days_until_next_day_of_week",
    "next_day_of_week",
    "future_date",
    "format_date",
    "parse_date",
    "days_between",
    "calculate_hotel_dates",
    "calculate_weekend_stay",
    "WEEKEND_START_DAYS",
]
