"""
Tests for payroll domain value objects and helpers.

Covers:
- Amount and flag coalescing (won, signed_won, flag)
- Exact floors (floor_to_ten, prorate)
- Calendar helpers (weeks, months, pay periods)
- Record defaults (pay type inference, separation, override applied)
- StatutoryRates consistency checks
"""

from datetime import date
from decimal import Decimal

import pytest

from payroll_kernel.domain.calendar import (
    iter_weeks,
    month_range,
    pay_period,
    period_containing,
    subtract_months,
    week_end,
    week_start,
)
from payroll_kernel.domain.ledger import (
    LedgerEntry,
    LedgerEntryType,
    PayrollTotals,
    TaxBreakdown,
    sort_ledger,
)
from payroll_kernel.domain.rates import StatutoryRates, TaxBracket
from payroll_kernel.domain.records import (
    Employee,
    PayType,
    PolicyOverride,
)
from payroll_kernel.domain.values import flag, floor_to_ten, prorate, signed_won, won


class TestCoalescing:
    """Missing or malformed inputs resolve to safe values."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (None, 0),
            (0, 0),
            (-500, 0),
            (True, 0),
            ("10030", 0),
            (10_030, 10_030),
            (Decimal("9860.7"), 9_860),
        ],
    )
    def test_won(self, value, expected):
        assert won(value) == expected

    def test_signed_won_keeps_deductions(self):
        assert signed_won(-50_000) == -50_000
        assert signed_won(None) == 0
        assert signed_won(False) == 0

    def test_flag_first_non_none_wins(self):
        assert flag(None, False, default=True) is False
        assert flag(True, False, default=False) is True
        assert flag(None, None, default=True) is True

    def test_flag_is_strict_bool(self):
        assert flag(1, default=False) is True


class TestExactFloors:
    """Floors are computed without float rounding."""

    def test_floor_to_ten(self):
        assert floor_to_ten(12_345) == 12_340
        assert floor_to_ten(Decimal("89999.99")) == 89_990
        assert floor_to_ten(9) == 0
        assert floor_to_ten(-100) == 0

    def test_prorate_hourly(self):
        # 470 minutes at 10,000/hour
        assert prorate(470, 10_000) == 78_333

    def test_prorate_premium(self):
        # 90 minutes at 10,030/hour at 50%
        assert prorate(90, 10_030, Decimal("0.5")) == 7_522

    def test_prorate_non_positive_inputs(self):
        assert prorate(0, 10_000) == 0
        assert prorate(60, 0) == 0
        assert prorate(-60, 10_000) == 0


class TestCalendar:
    """Monday-Sunday weeks and month ranges."""

    def test_week_bounds(self):
        # 2025-03-05 is a Wednesday
        assert week_start(date(2025, 3, 5)) == date(2025, 3, 3)
        assert week_end(date(2025, 3, 5)) == date(2025, 3, 9)

    def test_sunday_belongs_to_preceding_monday(self):
        assert week_start(date(2025, 3, 9)) == date(2025, 3, 3)

    def test_iter_weeks_covers_context_window(self):
        weeks = list(iter_weeks(date(2025, 3, 1), date(2025, 3, 31)))
        assert weeks[0] == date(2025, 2, 24)
        assert weeks[-1] == date(2025, 3, 31)
        assert len(weeks) == 6
        assert len(set(weeks)) == len(weeks)

    def test_iter_weeks_reversed_range_is_empty(self):
        assert list(iter_weeks(date(2025, 3, 31), date(2025, 3, 1))) == []

    def test_month_range_leap_year(self):
        assert month_range(2024, 2) == (date(2024, 2, 1), date(2024, 2, 29))

    def test_subtract_months_clamps(self):
        assert subtract_months(date(2025, 5, 31), 3) == date(2025, 2, 28)
        assert subtract_months(date(2025, 2, 15), 3) == date(2024, 11, 15)


class TestPayPeriods:
    """Monthly periods opening on a fixed day, and weekly periods."""

    def test_first_of_month_is_calendar_month(self):
        assert pay_period(2025, 2, 1) == (date(2025, 2, 1), date(2025, 2, 28))

    def test_runs_to_day_before_in_next_month(self):
        assert pay_period(2025, 1, 25) == (date(2025, 1, 25), date(2025, 2, 24))

    def test_crosses_year_end(self):
        assert pay_period(2024, 12, 10) == (date(2024, 12, 10), date(2025, 1, 9))

    def test_start_day_28_through_february(self):
        assert pay_period(2025, 1, 28) == (date(2025, 1, 28), date(2025, 2, 27))
        assert pay_period(2024, 2, 28) == (date(2024, 2, 28), date(2024, 3, 27))

    @pytest.mark.parametrize("start_day", [0, 29, 31])
    def test_start_day_out_of_range(self, start_day):
        with pytest.raises(ValueError):
            pay_period(2025, 3, start_day)

    def test_containing_on_and_after_start_day(self):
        assert period_containing(date(2025, 3, 25), start_day=25) == (date(2025, 3, 25), date(2025, 4, 24))
        assert period_containing(date(2025, 3, 31), start_day=25) == (date(2025, 3, 25), date(2025, 4, 24))

    def test_containing_before_start_day_uses_previous_month(self):
        assert period_containing(date(2025, 3, 24), start_day=25) == (date(2025, 2, 25), date(2025, 3, 24))
        assert period_containing(date(2025, 1, 5), start_day=10) == (date(2024, 12, 10), date(2025, 1, 9))

    def test_containing_default_is_calendar_month(self):
        assert period_containing(date(2025, 2, 14)) == (date(2025, 2, 1), date(2025, 2, 28))

    def test_containing_weekly(self):
        # 2025-03-01 is a Saturday
        assert period_containing(date(2025, 3, 1), weekly=True) == (date(2025, 2, 24), date(2025, 3, 2))


class TestRecords:
    """Record-level derived properties."""

    def test_explicit_pay_type_wins(self):
        emp = Employee(id="e1", monthly_wage=2_000_000, pay_type=PayType.HOURLY)
        assert emp.resolved_pay_type == PayType.HOURLY

    def test_pay_type_inferred_from_fixed_wages(self):
        assert Employee(id="e1", monthly_wage=2_000_000).resolved_pay_type == PayType.MONTHLY
        assert Employee(id="e2", daily_wage=80_000).resolved_pay_type == PayType.DAILY
        assert Employee(id="e3", hourly_wage=10_030).resolved_pay_type == PayType.HOURLY

    def test_fixed_pay(self):
        assert Employee(id="e1", daily_wage=80_000).is_fixed_pay
        assert not Employee(id="e2", hourly_wage=10_030).is_fixed_pay

    def test_separated_before(self):
        emp = Employee(id="e1", end_date=date(2025, 3, 12))
        assert emp.is_separated_before(date(2025, 3, 16))
        assert not emp.is_separated_before(date(2025, 3, 12))
        assert not Employee(id="e2").is_separated_before(date(2025, 3, 16))

    def test_override_applied(self):
        assert not PolicyOverride(employee_id="e1").is_applied
        assert PolicyOverride(employee_id="e1", pay_night=False).is_applied
        assert PolicyOverride(employee_id="e1", adjustment=-10_000).is_applied
        assert PolicyOverride(employee_id="e1", monthly_override=0).is_applied


class TestLedgerTypes:
    """Ordering and totals of ledger entries."""

    def test_weekly_sorts_after_work_on_same_day(self):
        sunday = date(2025, 3, 9)
        weekly = LedgerEntry(LedgerEntryType.WEEKLY, sunday, "e1", weekly_holiday_pay=1)
        work = LedgerEntry(LedgerEntryType.WORK, sunday, "e1", base_pay=1)
        earlier = LedgerEntry(LedgerEntryType.WORK, date(2025, 3, 8), "e1")
        assert sort_ledger([weekly, work, earlier]) == (earlier, work, weekly)

    def test_totals_minutes_from_work_rows_only(self):
        ledger = (
            LedgerEntry(LedgerEntryType.WORK, date(2025, 3, 3), "e1",
                        effective_minutes=480, base_pay=80_000, night_pay=5_000),
            LedgerEntry(LedgerEntryType.WEEKLY, date(2025, 3, 9), "e1",
                        week_minutes=2_400, weekly_holiday_pay=80_000),
        )
        totals = PayrollTotals.from_ledger(ledger)
        assert totals.work_minutes == 480
        assert totals.gross == 165_000

    def test_tax_breakdown_total(self):
        tax = TaxBreakdown(pension=90_000, health=70_900, income_tax=21_600, local_tax=2_160)
        assert tax.total == 184_660


class TestStatutoryRates:
    """Consistency checks on rate construction."""

    def test_defaults_are_valid(self):
        rates = StatutoryRates()
        assert rates.weekly_threshold_minutes == 900
        assert rates.weekly_cap_minutes == 2_400

    def test_night_window_must_wrap(self):
        with pytest.raises(ValueError, match="wrap midnight"):
            StatutoryRates(night_start_minute=60, night_end_minute=360)

    def test_cap_below_threshold_rejected(self):
        with pytest.raises(ValueError):
            StatutoryRates(weekly_cap_minutes=600)

    def test_unsorted_brackets_rejected(self):
        with pytest.raises(ValueError):
            StatutoryRates(
                income_tax_brackets=(
                    TaxBracket(2_000_000, 21_600, Decimal("0.05")),
                    TaxBracket(1_060_000, 0, Decimal("0.015")),
                )
            )

    def test_break_tiers_longest_first(self):
        with pytest.raises(ValueError):
            StatutoryRates(break_tiers=((240, 30), (480, 60)))
