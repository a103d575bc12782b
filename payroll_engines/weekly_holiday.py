"""
Weekly-holiday allowance (``payroll_engines.weekly_holiday``).

Responsibility
--------------
Eligibility and amount of the statutory weekly-holiday allowance: an
employee who works at least 15 hours in a Monday-Sunday week is paid
8 hours' wage scaled by ``min(hours, 40) / 40``.

Architecture position
---------------------
**Engines layer** -- pure functional core.  ZERO I/O.

Invariants enforced
-------------------
* Threshold and cap are applied to *effective* (break-deducted) minutes
  accumulated over the whole week, spillover days included.
* The allowance belongs to the week's Sunday: a week is paid only when
  that Sunday lies inside the requested range.
* An employee separated before the Sunday is ineligible for that week.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta

from payroll_kernel.domain.rates import StatutoryRates
from payroll_kernel.domain.records import Employee, ResolvedPolicy
from payroll_kernel.domain.values import won

_DEFAULT_RATES = StatutoryRates()


@dataclass(frozen=True)
class WeeklyHolidayOutcome:
    """Evaluation of one employee-week."""

    week_start: date
    week_end: date
    week_minutes: int
    capped_minutes: int
    potential_pay: int
    pay: int
    reason: str

    @property
    def emits_entry(self) -> bool:
        return self.potential_pay > 0


def weekly_holiday_pay(
    week_minutes: int,
    hourly_wage: int,
    rates: StatutoryRates = _DEFAULT_RATES,
) -> int:
    """floor(min(minutes, cap) / cap * paid_hours * wage), 0 below threshold."""
    wage = won(hourly_wage)
    if week_minutes < rates.weekly_threshold_minutes or wage <= 0:
        return 0
    capped = min(week_minutes, rates.weekly_cap_minutes)
    return capped * rates.weekly_paid_hours * wage // rates.weekly_cap_minutes


def evaluate_week(
    employee: Employee,
    week_start: date,
    week_minutes: int,
    start_date: date,
    end_date: date,
    policy: ResolvedPolicy,
    rates: StatutoryRates = _DEFAULT_RATES,
) -> WeeklyHolidayOutcome:
    """Decide the weekly-holiday allowance for one week of one employee."""
    week_end = week_start + timedelta(days=6)
    capped = min(week_minutes, rates.weekly_cap_minutes)

    def outcome(potential: int, reason: str) -> WeeklyHolidayOutcome:
        return WeeklyHolidayOutcome(
            week_start=week_start,
            week_end=week_end,
            week_minutes=week_minutes,
            capped_minutes=capped,
            potential_pay=potential,
            pay=potential if policy.pay_weekly else 0,
            reason=reason,
        )

    if not start_date <= week_end <= end_date:
        return outcome(0, "sunday_outside_range")
    if employee.is_fixed_pay:
        return outcome(0, "fixed_pay_type")
    if employee.is_separated_before(week_end):
        return outcome(0, "separated")
    if week_minutes < rates.weekly_threshold_minutes:
        return outcome(0, "below_threshold")
    if won(employee.hourly_wage) <= 0:
        return outcome(0, "no_hourly_wage")

    potential = weekly_holiday_pay(week_minutes, employee.hourly_wage, rates)
    return outcome(potential, "eligible" if policy.pay_weekly else "disabled_by_policy")
