"""
Calendar helpers for weekly aggregation, monthly ranges and pay periods.

Weeks start on Monday.  All functions are pure and take explicit dates;
nothing here reads the clock.
"""

from __future__ import annotations

import calendar
from collections.abc import Iterator
from datetime import date, timedelta


def week_start(day: date) -> date:
    """Monday of the week containing *day*."""
    return day - timedelta(days=day.weekday())


def week_end(day: date) -> date:
    """Sunday of the week containing *day*."""
    return week_start(day) + timedelta(days=6)


def iter_weeks(start: date, end: date) -> Iterator[date]:
    """Yield each Monday from the week of *start* to the week of *end*."""
    current = week_start(start)
    last = week_start(end)
    while current <= last:
        yield current
        current += timedelta(days=7)


def month_range(year: int, month: int) -> tuple[date, date]:
    """First and last day of a calendar month."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def subtract_months(day: date, months: int) -> date:
    """Shift *day* back by whole months, clamping to the target month's end."""
    index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


MAX_PAY_PERIOD_START_DAY = 28


def pay_period(year: int, month: int, start_day: int = 1) -> tuple[date, date]:
    """Pay period opening on day *start_day* of the given month.

    It closes the day before *start_day* in the following month, so
    ``start_day=25`` over January runs 01-25 .. 02-24.  ``start_day=1`` is
    the calendar month.  Start days above 28 do not exist in February and
    are rejected.
    """
    if not 1 <= start_day <= MAX_PAY_PERIOD_START_DAY:
        raise ValueError(
            f"start_day must be 1..{MAX_PAY_PERIOD_START_DAY}, got {start_day}"
        )
    if start_day == 1:
        return month_range(year, month)
    next_year, next_month = (year + 1, 1) if month == 12 else (year, month + 1)
    return date(year, month, start_day), date(next_year, next_month, start_day - 1)


def period_containing(
    day: date, *, weekly: bool = False, start_day: int = 1
) -> tuple[date, date]:
    """The weekly (Monday-Sunday) or monthly pay period that contains *day*."""
    if weekly:
        return week_start(day), week_end(day)
    if day.day >= start_day:
        return pay_period(day.year, day.month, start_day)
    previous = subtract_months(day.replace(day=1), 1)
    return pay_period(previous.year, previous.month, start_day)
