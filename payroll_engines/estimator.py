"""
Quick estimators (``payroll_engines.estimator``).

Stand-alone calculators that work from hour totals the user types in
rather than from shift records: a weekly-holiday allowance estimate and
a monthly salary estimate with a flat-rate deduction.

The salary estimate deliberately uses flat deduction rates (3.3% for
freelancers, 9.4% as an approximation of the four insurances plus
income tax) instead of the bracketed withholding engine.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from payroll_kernel.domain.rates import StatutoryRates
from payroll_kernel.domain.records import EmploymentType
from payroll_kernel.domain.values import floor_to_ten, prorate, won

_DEFAULT_RATES = StatutoryRates()


class TaxMode(str, Enum):
    """Deduction regime of an estimate; spelled like ``EmploymentType``."""

    NONE = "none"
    FREELANCE = EmploymentType.FREELANCE.value
    FOUR_INSURANCE = EmploymentType.FOUR_INSURANCE.value

    @classmethod
    def of(cls, employment_type: EmploymentType) -> "TaxMode":
        return cls(employment_type.value)


@dataclass(frozen=True)
class SalaryEstimate:
    base_pay: int
    weekly_pay: int
    allowance_pay: int
    gross: int
    deduction: int
    net_pay: int


def _weekly_numerator(minutes: int, wage: int, rates: StatutoryRates) -> int:
    if minutes < rates.weekly_threshold_minutes:
        return 0
    return min(minutes, rates.weekly_cap_minutes) * rates.weekly_paid_hours * wage


def estimate_weekly_holiday_pay(
    hourly_wage: int,
    weekly_minutes: int,
    rates: StatutoryRates = _DEFAULT_RATES,
) -> int:
    """Allowance for a single week of ``weekly_minutes`` effective work."""
    wage = won(hourly_wage)
    return _weekly_numerator(weekly_minutes, wage, rates) // rates.weekly_cap_minutes


def deduction_rate(tax_mode: TaxMode, rates: StatutoryRates = _DEFAULT_RATES) -> Decimal:
    if tax_mode == TaxMode.FREELANCE:
        return rates.estimator_freelance_rate
    if tax_mode == TaxMode.FOUR_INSURANCE:
        return rates.estimator_four_insurance_rate
    return Decimal(0)


def estimate_salary(
    hourly_wage: int,
    total_minutes: int,
    weekly_minutes: Iterable[int] = (),
    night_minutes: int = 0,
    overtime_minutes: int = 0,
    holiday_minutes: int = 0,
    tax_mode: TaxMode = TaxMode.FOUR_INSURANCE,
    rates: StatutoryRates = _DEFAULT_RATES,
) -> SalaryEstimate:
    """
    Estimate a month's pay from hour totals.

    Args:
        hourly_wage: Hourly wage in won.
        total_minutes: All paid work minutes in the month.
        weekly_minutes: Effective minutes per week, one value per week.
        night_minutes: Minutes eligible for the night premium.
        overtime_minutes: Minutes eligible for the overtime premium.
        holiday_minutes: Minutes eligible for the holiday-work premium.
        tax_mode: Flat deduction regime.
        rates: Supplies thresholds, the premium rate and flat deduction rates.

    Returns:
        SalaryEstimate.  All zero when the wage is missing.
    """
    wage = won(hourly_wage)
    if wage <= 0:
        return SalaryEstimate(0, 0, 0, 0, 0, 0)

    base = prorate(total_minutes, wage)
    # truncated once over all weeks
    weekly = (
        sum(_weekly_numerator(m, wage, rates) for m in weekly_minutes)
        // rates.weekly_cap_minutes
    )
    premium_minutes = max(0, night_minutes) + max(0, overtime_minutes) + max(0, holiday_minutes)
    allowance = prorate(premium_minutes, wage, rates.premium_rate)

    gross = base + weekly + allowance
    deduction = floor_to_ten(Decimal(gross) * deduction_rate(tax_mode, rates))
    return SalaryEstimate(
        base_pay=base,
        weekly_pay=weekly,
        allowance_pay=allowance,
        gross=gross,
        deduction=deduction,
        net_pay=gross - deduction,
    )
