"""
Statutory rates -- the Korean payroll constants the engines compute with.

Responsibility:
    Immutable value object bundling every rate, threshold and bracket the
    engines need.  Defaults match the 2024/2025 employee-side rates, so
    engines work without configuration; ``payroll_config`` builds
    alternative instances from versioned YAML rate sets.

Architecture position:
    Kernel > Domain -- pure data, zero I/O.  Engines receive a
    ``StatutoryRates`` as a parameter and never load configuration.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class TaxBracket:
    """One row of the progressive monthly income-tax table.

    Tax for a gross above ``lower`` is ``base_tax + (gross - lower) * rate``.
    """

    lower: int
    base_tax: int
    rate: Decimal


DEFAULT_INCOME_TAX_BRACKETS: tuple[TaxBracket, ...] = (
    TaxBracket(1_060_000, 0, Decimal("0.015")),
    TaxBracket(1_500_000, 6_600, Decimal("0.03")),
    TaxBracket(2_000_000, 21_600, Decimal("0.05")),
    TaxBracket(3_000_000, 71_600, Decimal("0.07")),
    TaxBracket(4_000_000, 141_600, Decimal("0.09")),
    TaxBracket(5_000_000, 231_600, Decimal("0.12")),
    TaxBracket(7_000_000, 471_600, Decimal("0.15")),
)


@dataclass(frozen=True)
class StatutoryRates:
    """Rates, thresholds and brackets for one effective period."""

    version: str = "builtin"

    # Four-insurance employee share
    pension: Decimal = Decimal("0.045")
    health: Decimal = Decimal("0.03545")
    long_term_care: Decimal = Decimal("0.1295")  # of the health premium
    employment: Decimal = Decimal("0.009")

    # 3.3% freelance withholding
    freelance_income_tax: Decimal = Decimal("0.03")
    local_tax: Decimal = Decimal("0.1")  # of income tax

    income_tax_brackets: tuple[TaxBracket, ...] = DEFAULT_INCOME_TAX_BRACKETS

    # Premiums (night, overtime, holiday work)
    premium_rate: Decimal = Decimal("0.5")
    night_start_minute: int = 22 * 60
    night_end_minute: int = 6 * 60
    daily_overtime_threshold_minutes: int = 480

    # Weekly-holiday allowance
    weekly_threshold_minutes: int = 900
    weekly_cap_minutes: int = 2400
    weekly_paid_hours: int = 8

    # (minimum raw minutes, unpaid break minutes), longest first
    break_tiers: tuple[tuple[int, int], ...] = ((480, 60), (240, 30))

    # Flat approximations used by the quick salary estimator
    estimator_freelance_rate: Decimal = Decimal("0.033")
    estimator_four_insurance_rate: Decimal = Decimal("0.094")

    def __post_init__(self) -> None:
        if self.night_start_minute <= self.night_end_minute:
            raise ValueError("night window must wrap midnight")
        if self.weekly_cap_minutes < self.weekly_threshold_minutes:
            raise ValueError("weekly_cap_minutes cannot be below the threshold")
        lowers = [b.lower for b in self.income_tax_brackets]
        if lowers != sorted(lowers):
            raise ValueError("income_tax_brackets must be sorted by lower bound")
        tiers = [minimum for minimum, _ in self.break_tiers]
        if tiers != sorted(tiers, reverse=True):
            raise ValueError("break_tiers must be sorted longest first")
