"""
Per-shift pay decomposition (``payroll_engines.shift_pay``).

Responsibility
--------------
Split one shift into base pay and the three 50% premiums (night,
overtime, holiday work), given the employee's wage basis and the
resolved store policy.

Architecture position
---------------------
**Engines layer** -- pure functional core.  ZERO I/O.

Invariants enforced
-------------------
* The shift's pay type is the shift-level override when present, else
  the employee's resolved pay type.
* Break deduction applies only to hourly shifts with auto-deduct on.
  Monthly shifts always count raw minutes as effective.
* Daily and monthly shifts earn no premiums.
* Every premium has a potential value (what it would pay) and an actual
  value (potential when the policy enables it, else exactly 0).
"""

from __future__ import annotations

from dataclasses import dataclass

from payroll_engines import worktime
from payroll_kernel.domain.rates import StatutoryRates
from payroll_kernel.domain.records import Employee, PayType, ResolvedPolicy, Shift
from payroll_kernel.domain.values import prorate, won


@dataclass(frozen=True)
class ShiftPay:
    """Minute counts and pay amounts for a single shift."""

    pay_type: PayType
    raw_minutes: int
    break_minutes: int
    effective_minutes: int
    night_minutes: int
    overtime_minutes: int
    base_pay: int
    potential_night_pay: int
    potential_overtime_pay: int
    potential_holiday_work_pay: int
    night_pay: int
    overtime_pay: int
    holiday_work_pay: int


def shift_pay_type(shift: Shift, employee: Employee) -> PayType:
    return shift.pay_type or employee.resolved_pay_type


def daily_amount(shift: Shift, employee: Employee) -> int:
    """Shift-level daily amount, else the employee's configured daily wage."""
    if shift.daily_pay_amount is not None:
        return won(shift.daily_pay_amount)
    return won(employee.daily_wage)


def decompose_shift(
    shift: Shift,
    employee: Employee,
    policy: ResolvedPolicy,
    rates: StatutoryRates,
) -> ShiftPay:
    pay_type = shift_pay_type(shift, employee)
    hourly = pay_type == PayType.HOURLY
    wage = won(employee.hourly_wage)

    raw = worktime.raw_minutes(shift.start_time, shift.end_time)
    deduct = hourly and policy.auto_deduct_break
    brk = worktime.break_minutes(raw, rates) if deduct else 0
    effective = raw - brk

    night = worktime.night_minutes(shift.start_time, shift.end_time, rates)
    overtime = worktime.overtime_minutes(effective, rates)

    if pay_type == PayType.MONTHLY:
        base = 0
    elif pay_type == PayType.DAILY:
        base = daily_amount(shift, employee)
    else:
        base = prorate(effective, wage)

    if hourly:
        potential_night = prorate(night, wage, rates.premium_rate)
        potential_overtime = prorate(overtime, wage, rates.premium_rate)
        potential_holiday = (
            prorate(effective, wage, rates.premium_rate) if shift.is_holiday_work else 0
        )
    else:
        potential_night = potential_overtime = potential_holiday = 0

    return ShiftPay(
        pay_type=pay_type,
        raw_minutes=raw,
        break_minutes=brk,
        effective_minutes=effective,
        night_minutes=night,
        overtime_minutes=overtime,
        base_pay=base,
        potential_night_pay=potential_night,
        potential_overtime_pay=potential_overtime,
        potential_holiday_work_pay=potential_holiday,
        night_pay=potential_night if policy.pay_night else 0,
        overtime_pay=potential_overtime if policy.pay_overtime else 0,
        holiday_work_pay=potential_holiday if policy.pay_holiday else 0,
    )
