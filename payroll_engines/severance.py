"""
Severance Pay Engine - statutory retirement allowance.

An employee with at least one year (365 calendar days, both ends
inclusive) of service is owed 30 days' average wage per year of service.
The average daily wage is the last three months' pay plus a 3/12 share
of the annual bonus, divided by the calendar days in those three months.

Pure functions; amounts are integer won and the final payout is
truncated to 10 won.

Usage:
    from payroll_engines.severance import calculate_severance

    result = calculate_severance(date(2023, 3, 1), date(2025, 2, 28), 6_000_000)
    print(result.severance_pay)
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from payroll_engines.worktime import raw_minutes
from payroll_kernel.domain.calendar import subtract_months
from payroll_kernel.domain.records import Shift
from payroll_kernel.domain.values import floor_to_ten, prorate, won

MINIMUM_SERVICE_DAYS = 365
SEVERANCE_DAYS_PER_YEAR = 30


@dataclass(frozen=True)
class SeveranceResult:
    total_days: int
    days_in_three_months: int
    average_daily_wage: int
    severance_pay: int
    eligible: bool


def service_days(hire_date: date, resign_date: date) -> int:
    """Calendar days of service, both ends inclusive; 0 when reversed."""
    days = (resign_date - hire_date).days + 1
    return days if days > 0 else 0


def calculate_severance(
    hire_date: date,
    resign_date: date,
    three_month_pay: int,
    annual_bonus: int = 0,
) -> SeveranceResult:
    total_days = service_days(hire_date, resign_date)
    window_days = (resign_date - subtract_months(resign_date, 3)).days

    if total_days < MINIMUM_SERVICE_DAYS or window_days <= 0:
        return SeveranceResult(
            total_days=total_days,
            days_in_three_months=window_days,
            average_daily_wage=0,
            severance_pay=0,
            eligible=False,
        )

    wage_base = Decimal(won(three_month_pay)) + Decimal(won(annual_bonus)) * 3 / 12
    daily = wage_base / window_days
    payout = daily * SEVERANCE_DAYS_PER_YEAR * total_days / MINIMUM_SERVICE_DAYS

    return SeveranceResult(
        total_days=total_days,
        days_in_three_months=window_days,
        average_daily_wage=int(daily),
        severance_pay=floor_to_ten(payout),
        eligible=True,
    )


def three_month_wage_total(
    shifts: Iterable[Shift], hourly_wage: int, resign_date: date
) -> int:
    """Raw-minute wages of shifts dated in ``[resign - 3 months, resign]``."""
    window_start = subtract_months(resign_date, 3)
    wage = won(hourly_wage)
    return sum(
        prorate(raw_minutes(s.start_time, s.end_time), wage)
        for s in shifts
        if window_start <= s.work_date <= resign_date
    )
