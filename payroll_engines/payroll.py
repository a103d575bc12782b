"""
Payroll Engine (``payroll_engines.payroll``).

Responsibility
--------------
Produce one itemized payroll result per employee for a calendar range:
base pay, night/overtime/holiday-work premiums, weekly-holiday
allowance, withholding and net pay.

Architecture position
---------------------
**Engines layer** -- pure functional core.  ZERO I/O, ZERO database,
ZERO clock reads.  Inputs are already-fetched records; the caller owns
fetching a consistent snapshot and rendering the output.

Algorithm
---------
1. Context window: weeks run Monday-Sunday from the week containing
   ``start_date`` to the week containing ``end_date``.  Shifts in the
   spillover days before ``start_date`` (and after ``end_date`` within the
   last week) are read for weekly totals only.
2. Per employee, per week: decompose each shift; emit a WORK entry only
   when the shift date is inside ``[start_date, end_date]``; add its
   effective minutes to the week total unless excluded; then evaluate
   the weekly-holiday allowance for the week's Sunday.
3. Monthly employees get one MONTHLY_BASE entry dated ``start_date``.
4. Gross is the ledger total, replaced by a confirmed payout when the
   override carries one, plus any signed adjustment.
5. Withholding and net pay.

Invariants enforced
-------------------
* Determinism: identical inputs produce identical (frozen) results.
* No WORK entry is dated outside ``[start_date, end_date]``.
* Never raises for malformed records: missing amounts coalesce to 0 and
  missing policy flags fall back to their defaults.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Sequence
from datetime import date, timedelta

from payroll_engines.policy import index_overrides, resolve_policy
from payroll_engines.shift_pay import ShiftPay, decompose_shift
from payroll_engines.tracer import traced_engine
from payroll_engines.weekly_holiday import WeeklyHolidayOutcome, evaluate_week
from payroll_engines.withholding import calculate_withholding
from payroll_engines.worktime import minute_of_day
from payroll_kernel.domain.calendar import iter_weeks, week_end, week_start
from payroll_kernel.domain.ledger import (
    LedgerEntry,
    LedgerEntryType,
    PayrollResult,
    PayrollTotals,
    sort_ledger,
)
from payroll_kernel.domain.rates import StatutoryRates
from payroll_kernel.domain.records import (
    Employee,
    PayType,
    PolicyOverride,
    ResolvedPolicy,
    Shift,
    StoreSettings,
)
from payroll_kernel.domain.values import won
from payroll_kernel.logging_config import get_logger

logger = get_logger("engines.payroll")

ENGINE_NAME = "payroll"
ENGINE_VERSION = "1.0"


def _shift_order(shift: Shift) -> tuple:
    """Total order over shift fields, so input order never leaks into the ledger."""
    return (
        shift.work_date,
        minute_of_day(shift.start_time),
        minute_of_day(shift.end_time),
        shift.is_holiday_work,
        shift.exclude_from_weekly_pay,
        shift.pay_type.value if shift.pay_type is not None else "",
        shift.daily_pay_amount if shift.daily_pay_amount is not None else -1,
    )


def _group_shifts(
    shifts: Iterable[Shift], window_start: date, window_end: date
) -> dict[str, tuple[Shift, ...]]:
    """Shifts per employee inside the context window, in ``_shift_order``."""
    grouped: dict[str, list[Shift]] = defaultdict(list)
    for shift in shifts:
        if window_start <= shift.work_date <= window_end:
            grouped[shift.employee_id].append(shift)
    return {
        emp_id: tuple(sorted(items, key=_shift_order))
        for emp_id, items in grouped.items()
    }


def _work_entry(shift: Shift, pay: ShiftPay) -> LedgerEntry:
    return LedgerEntry(
        entry_type=LedgerEntryType.WORK,
        entry_date=shift.work_date,
        employee_id=shift.employee_id,
        start_time=shift.start_time,
        end_time=shift.end_time,
        pay_type=pay.pay_type,
        is_holiday_work=shift.is_holiday_work,
        raw_minutes=pay.raw_minutes,
        break_minutes=pay.break_minutes,
        effective_minutes=pay.effective_minutes,
        night_minutes=pay.night_minutes,
        overtime_minutes=pay.overtime_minutes,
        base_pay=pay.base_pay,
        night_pay=pay.night_pay,
        overtime_pay=pay.overtime_pay,
        holiday_work_pay=pay.holiday_work_pay,
        potential_night_pay=pay.potential_night_pay,
        potential_overtime_pay=pay.potential_overtime_pay,
        potential_holiday_work_pay=pay.potential_holiday_work_pay,
    )


def _weekly_entry(employee_id: str, outcome: WeeklyHolidayOutcome) -> LedgerEntry:
    return LedgerEntry(
        entry_type=LedgerEntryType.WEEKLY,
        entry_date=outcome.week_end,
        employee_id=employee_id,
        weekly_holiday_pay=outcome.pay,
        potential_weekly_holiday_pay=outcome.potential_pay,
        week_start=outcome.week_start,
        week_minutes=outcome.week_minutes,
        capped_week_minutes=outcome.capped_minutes,
    )


def _process_week(
    employee: Employee,
    monday: date,
    shifts: Sequence[Shift],
    start_date: date,
    end_date: date,
    policy: ResolvedPolicy,
    rates: StatutoryRates,
) -> tuple[LedgerEntry, ...]:
    """Ledger entries contributed by one Monday-Sunday week."""
    sunday = monday + timedelta(days=6)
    entries: list[LedgerEntry] = []
    week_minutes = 0

    for shift in shifts:
        if not monday <= shift.work_date <= sunday:
            continue
        pay = decompose_shift(shift, employee, policy, rates)
        if start_date <= shift.work_date <= end_date:
            entries.append(_work_entry(shift, pay))
        if not shift.exclude_from_weekly_pay:
            week_minutes += pay.effective_minutes

    outcome = evaluate_week(
        employee, monday, week_minutes, start_date, end_date, policy, rates
    )
    if outcome.emits_entry:
        entries.append(_weekly_entry(employee.id, outcome))
    return tuple(entries)


def compute_employee_payroll(
    employee: Employee,
    shifts: Sequence[Shift],
    start_date: date,
    end_date: date,
    policy: ResolvedPolicy,
    rates: StatutoryRates,
) -> PayrollResult:
    """Payroll for a single employee whose shifts are already selected."""
    entries: list[LedgerEntry] = []
    for monday in iter_weeks(start_date, end_date):
        entries.extend(
            _process_week(employee, monday, shifts, start_date, end_date, policy, rates)
        )

    pay_type = employee.resolved_pay_type
    if pay_type == PayType.MONTHLY and start_date <= end_date:
        entries.append(
            LedgerEntry(
                entry_type=LedgerEntryType.MONTHLY_BASE,
                entry_date=start_date,
                employee_id=employee.id,
                pay_type=PayType.MONTHLY,
                base_pay=won(employee.monthly_wage),
            )
        )

    ledger = sort_ledger(entries)
    totals = PayrollTotals.from_ledger(ledger)
    computed_gross = totals.gross
    payable = policy.monthly_override if policy.monthly_override is not None else computed_gross
    gross = max(0, payable + policy.adjustment)
    tax = calculate_withholding(gross, employee.employment_type, policy.no_tax_deduction, rates)

    logger.debug(
        "employee_payroll_computed",
        extra={
            "employee_id": employee.id,
            "pay_type": pay_type.value,
            "ledger_entries": len(ledger),
            "computed_gross": computed_gross,
            "gross_pay": gross,
            "withholding": tax.total,
            "override_applied": policy.override_applied,
        },
    )

    return PayrollResult(
        employee_id=employee.id,
        name=employee.name,
        pay_type=pay_type,
        employment_type=employee.employment_type,
        hourly_wage=won(employee.hourly_wage),
        policy=policy,
        totals=totals,
        computed_gross=computed_gross,
        gross_pay=gross,
        tax=tax,
        net_pay=gross - tax.total,
        ledger=ledger,
    )


@traced_engine(ENGINE_NAME, ENGINE_VERSION, fingerprint_fields=("start_date", "end_date"))
def compute_payroll(
    start_date: date,
    end_date: date,
    employees: Sequence[Employee],
    shifts: Iterable[Shift],
    store_settings: StoreSettings | None = None,
    overrides: Iterable[PolicyOverride] | None = None,
    rates: StatutoryRates | None = None,
) -> tuple[PayrollResult, ...]:
    """
    Compute payroll for every employee over ``[start_date, end_date]``.

    Args:
        start_date: First day of the requested range (inclusive).
        end_date: Last day of the requested range (inclusive).
        employees: Roster; results are returned in this order.
        shifts: Shift records.  Need not be pre-filtered; anything outside
            the Monday-Sunday context window is ignored.
        store_settings: Store-wide pay policy (None = all defaults).
        overrides: Per-employee policy overrides, at most one per employee.
        rates: Statutory rates; the built-in defaults when None.

    Returns:
        One frozen PayrollResult per employee.
    """
    rates = rates or StatutoryRates()
    shifts_by_employee = _group_shifts(shifts, week_start(start_date), week_end(end_date))
    override_index = index_overrides(overrides)

    results = tuple(
        compute_employee_payroll(
            employee,
            shifts_by_employee.get(employee.id, ()),
            start_date,
            end_date,
            resolve_policy(store_settings, override_index.get(employee.id)),
            rates,
        )
        for employee in employees
    )

    logger.info(
        "payroll_computed",
        extra={
            "start_date": start_date.isoformat(),
            "end_date": end_date.isoformat(),
            "employee_count": len(results),
            "gross_total": sum(r.gross_pay for r in results),
            "net_total": sum(r.net_pay for r in results),
            "rates_version": rates.version,
        },
    )
    return results
