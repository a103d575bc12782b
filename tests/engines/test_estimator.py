"""
Tests for the quick estimators.

Covers:
- Single-week allowance estimate
- Monthly salary estimate with flat deduction modes
"""

from decimal import Decimal

import pytest

from payroll_engines.estimator import (
    SalaryEstimate,
    TaxMode,
    deduction_rate,
    estimate_salary,
    estimate_weekly_holiday_pay,
)
from payroll_kernel.domain.rates import StatutoryRates
from payroll_kernel.domain.records import EmploymentType


class TestWeeklyEstimate:

    @pytest.mark.parametrize(
        "minutes,expected",
        [(0, 0), (899, 0), (900, 30_000), (2_400, 80_000), (3_600, 80_000)],
    )
    def test_formula(self, minutes, expected):
        assert estimate_weekly_holiday_pay(10_000, minutes) == expected

    def test_custom_threshold(self):
        rates = StatutoryRates(weekly_threshold_minutes=600)
        assert estimate_weekly_holiday_pay(10_000, 600, rates) == 20_000


class TestSalaryEstimate:

    def test_full_month_freelance(self):
        estimate = estimate_salary(
            10_000, 9_600, weekly_minutes=[2_400] * 4, tax_mode=TaxMode.FREELANCE,
        )
        assert estimate.base_pay == 1_600_000
        assert estimate.weekly_pay == 320_000
        assert estimate.allowance_pay == 0
        assert estimate.gross == 1_920_000
        assert estimate.deduction == 63_360
        assert estimate.net_pay == 1_856_640

    def test_weekly_truncated_once(self):
        # 33,433.33 per week; summed before truncating
        estimate = estimate_salary(10_030, 0, weekly_minutes=[1_000] * 3, tax_mode=TaxMode.NONE)
        assert estimate.weekly_pay == 100_300
        assert 3 * estimate_weekly_holiday_pay(10_030, 1_000) == 100_299

    def test_premium_allowance(self):
        estimate = estimate_salary(
            10_000, 0, night_minutes=120, overtime_minutes=60, tax_mode=TaxMode.NONE,
        )
        assert estimate.allowance_pay == 15_000
        assert estimate.deduction == 0

    def test_four_insurance_flat_rate(self):
        estimate = estimate_salary(10_000, 6_000)
        assert estimate.gross == 1_000_000
        assert estimate.deduction == 94_000

    @pytest.mark.parametrize("wage", [0, None, -5_000])
    def test_missing_wage_is_all_zero(self, wage):
        assert estimate_salary(wage, 9_600, [2_400]) == SalaryEstimate(0, 0, 0, 0, 0, 0)


class TestDeductionRate:

    def test_modes(self):
        assert deduction_rate(TaxMode.NONE) == 0
        assert deduction_rate(TaxMode.FREELANCE) == Decimal("0.033")
        assert deduction_rate(TaxMode.FOUR_INSURANCE) == Decimal("0.094")

    @pytest.mark.parametrize("employment_type", list(EmploymentType))
    def test_mode_shares_employment_spelling(self, employment_type):
        mode = TaxMode.of(employment_type)
        assert mode.value == employment_type.value
        assert mode is not TaxMode.NONE
