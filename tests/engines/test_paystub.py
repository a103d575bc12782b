"""
Tests for the pay-stub preview.

Covers:
- Toggles derived from policy reproduce engine totals
- Toggling a premium on uses its potential amount
- Effective-rate withholding approximation
- Confirmed payouts stay the payable gross under any toggles
"""

from dataclasses import replace
from datetime import date, time, timedelta
from decimal import Decimal

from payroll_engines.payroll import compute_payroll
from payroll_engines.paystub import PayToggles, preview_paystub, recompute_with_toggles
from payroll_kernel.domain.records import (
    Employee,
    EmploymentType,
    PolicyOverride,
    ResolvedPolicy,
    Shift,
    StoreSettings,
)


def _result(store=None, employment_type=EmploymentType.FREELANCE, overrides=()):
    employee = Employee(id="e1", hourly_wage=10_000, employment_type=employment_type)
    shifts = [
        Shift("e1", date(2025, 3, 3) + timedelta(days=i), time(18, 0), time(2, 0))
        for i in range(5)
    ]
    (result,) = compute_payroll(date(2025, 3, 1), date(2025, 3, 31), [employee], shifts, store, overrides)
    return result


class TestPayToggles:

    def test_from_policy(self):
        policy = ResolvedPolicy(is_five_plus=True, pay_night=True, pay_weekly=False)
        toggles = PayToggles.from_policy(policy)
        assert toggles.include_base
        assert toggles.include_night
        assert not toggles.include_overtime
        assert not toggles.include_weekly


class TestRecompute:

    def test_policy_toggles_reproduce_engine(self):
        result = _result(StoreSettings(is_five_plus=True, pay_night=True))
        preview = preview_paystub(result)
        assert preview.totals == result.totals
        assert preview.gross_pay == result.gross_pay
        assert preview.withholding == result.tax.total
        assert preview.net_pay == result.net_pay

    def test_enabling_disabled_premium_uses_potential(self):
        # night pay is off for the store; preview includes it
        result = _result(StoreSettings(is_five_plus=False, pay_night=True))
        assert result.totals.night_pay == 0

        preview = preview_paystub(result, PayToggles())
        # 5 shifts x 240 night minutes x 5,000/h
        assert preview.totals.night_pay == 100_000
        assert preview.gross_pay == result.gross_pay + 100_000

    def test_excluding_weekly(self):
        result = _result()
        toggles = replace(PayToggles.from_policy(result.policy), include_weekly=False)
        preview = preview_paystub(result, toggles)
        assert result.totals.weekly_holiday_pay > 0
        assert preview.totals.weekly_holiday_pay == 0
        assert preview.gross_pay == result.gross_pay - result.totals.weekly_holiday_pay

    def test_effective_rate_withholding(self):
        preview = recompute_with_toggles(
            (),
            PayToggles(),
            original_gross=1_000_000,
            original_withholding=33_000,
            adjustment=500_000,
        )
        assert preview.gross_pay == 500_000
        assert preview.effective_rate == Decimal("0.033")
        assert preview.withholding == 16_500
        assert preview.net_pay == 483_500

    def test_withholding_truncated_to_ten(self):
        preview = recompute_with_toggles(
            (), PayToggles(), original_gross=3, original_withholding=1, adjustment=1_000,
        )
        # 1000 / 3 = 333.3 -> 330
        assert preview.withholding == 330

    def test_zero_original_gross(self):
        preview = recompute_with_toggles(
            (), PayToggles(), original_gross=0, original_withholding=0, adjustment=10_000,
        )
        assert preview.withholding == 0
        assert preview.net_pay == 10_000

    def test_four_insurance_preview_approximates(self):
        result = _result(employment_type=EmploymentType.FOUR_INSURANCE)
        preview = preview_paystub(result, PayToggles(include_weekly=False))
        expected = preview.gross_pay * result.tax.total // (result.gross_pay * 10) * 10
        assert preview.withholding == expected


class TestConfirmedPayPreview:

    def _confirmed(self, adjustment=0):
        override = PolicyOverride(employee_id="e1", monthly_override=1_000_000, adjustment=adjustment)
        return _result(overrides=[override])

    def test_default_preview_matches_result(self):
        result = self._confirmed()
        preview = preview_paystub(result)
        assert result.gross_pay == 1_000_000
        assert preview.gross_pay == 1_000_000
        assert preview.withholding == result.tax.total == 33_000
        assert preview.net_pay == result.net_pay

    def test_toggles_itemize_but_keep_payout(self):
        result = self._confirmed()
        preview = preview_paystub(result, PayToggles(include_weekly=False, include_base=False))
        assert preview.totals.base_pay == 0
        assert preview.totals.weekly_holiday_pay == 0
        assert preview.gross_pay == 1_000_000
        assert preview.withholding == 33_000

    def test_adjustment_on_top_of_payout(self):
        result = self._confirmed(adjustment=-100_000)
        preview = preview_paystub(result)
        assert preview.gross_pay == result.gross_pay == 900_000
        assert preview.withholding == result.tax.total == 29_700

    def test_explicit_confirmed_pay(self):
        preview = recompute_with_toggles(
            (),
            PayToggles(),
            original_gross=1_000_000,
            original_withholding=33_000,
            adjustment=50_000,
            confirmed_pay=1_000_000,
        )
        assert preview.gross_pay == 1_050_000
        assert preview.withholding == 34_650
