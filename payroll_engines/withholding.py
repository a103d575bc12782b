"""
Withholding Engine - employee-side deductions on gross pay.

Supports the two regimes used for hourly and freelance staff:

* Four-insurance: national pension, health insurance, long-term care
  (a share of the health premium), employment insurance, progressive
  income tax and local income tax.
* 3.3% freelance: 3% income tax plus 10% local tax on that.

Every line is truncated to 10 won.  Pure functions, rates provided as a
``StatutoryRates`` parameter.

Usage:
    from payroll_engines.withholding import calculate_withholding
    from payroll_kernel.domain import EmploymentType

    tax = calculate_withholding(2_000_000, EmploymentType.FOUR_INSURANCE)
    print(tax.total)
"""

from __future__ import annotations

from decimal import Decimal

from payroll_kernel.domain.ledger import TaxBreakdown
from payroll_kernel.domain.rates import StatutoryRates
from payroll_kernel.domain.records import EmploymentType
from payroll_kernel.domain.values import floor_to_ten

_DEFAULT_RATES = StatutoryRates()


def income_tax(gross: int, rates: StatutoryRates = _DEFAULT_RATES) -> int:
    """Progressive monthly income tax for the four-insurance regime."""
    for bracket in reversed(rates.income_tax_brackets):
        if gross > bracket.lower:
            tax = bracket.base_tax + (Decimal(gross - bracket.lower) * bracket.rate)
            return floor_to_ten(tax)
    return 0


def local_tax(income: int, rates: StatutoryRates = _DEFAULT_RATES) -> int:
    return floor_to_ten(Decimal(income) * rates.local_tax)


def four_insurance_withholding(
    gross: int, rates: StatutoryRates = _DEFAULT_RATES
) -> TaxBreakdown:
    health = floor_to_ten(Decimal(gross) * rates.health)
    income = income_tax(gross, rates)
    return TaxBreakdown(
        pension=floor_to_ten(Decimal(gross) * rates.pension),
        health=health,
        long_term_care=floor_to_ten(Decimal(health) * rates.long_term_care),
        employment=floor_to_ten(Decimal(gross) * rates.employment),
        income_tax=income,
        local_tax=local_tax(income, rates),
    )


def freelance_withholding(
    gross: int, rates: StatutoryRates = _DEFAULT_RATES
) -> TaxBreakdown:
    income = floor_to_ten(Decimal(gross) * rates.freelance_income_tax)
    return TaxBreakdown(income_tax=income, local_tax=local_tax(income, rates))


def calculate_withholding(
    gross: int,
    employment_type: EmploymentType,
    no_tax_deduction: bool = False,
    rates: StatutoryRates = _DEFAULT_RATES,
) -> TaxBreakdown:
    """
    Itemized withholding for a gross amount.

    Args:
        gross: Gross pay for the range, in won.
        employment_type: Withholding regime.
        no_tax_deduction: Store/employee policy disabling withholding.
        rates: Statutory rates to apply.

    Returns:
        TaxBreakdown; all zero when withholding is disabled or gross <= 0.
    """
    if no_tax_deduction or gross <= 0:
        return TaxBreakdown()
    if employment_type == EmploymentType.FOUR_INSURANCE:
        return four_insurance_withholding(gross, rates)
    return freelance_withholding(gross, rates)
