"""
Pay-stub preview (``payroll_engines.paystub``).

Responsibility
--------------
Recompute totals, withholding and net pay over an already-materialized
ledger when the user includes or excludes individual pay categories.
The full range computation is not re-run.

Architecture position
---------------------
**Engines layer** -- pure functional core.  ZERO I/O.

Invariants enforced
-------------------
* A toggled-on premium contributes its *potential* amount; toggled off
  it contributes exactly 0.  Base pay has no potential/actual split.
* Withholding reuses the original effective rate
  (``original_withholding / original_gross``) instead of re-running the
  brackets, truncated to 10 won.  An original gross of 0 yields 0.
* ``PayToggles.from_policy`` reproduces the engine's own totals.
* A confirmed payout replaces the re-totaled gross, as in the engine.
  Toggles still itemize ``totals`` but do not move the payable amount.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from payroll_kernel.domain.ledger import LedgerEntry, PayrollResult, PayrollTotals
from payroll_kernel.domain.records import ResolvedPolicy


@dataclass(frozen=True)
class PayToggles:
    """Per-category inclusion switches for a pay-stub preview."""

    include_base: bool = True
    include_night: bool = True
    include_overtime: bool = True
    include_holiday_work: bool = True
    include_weekly: bool = True

    @classmethod
    def from_policy(cls, policy: ResolvedPolicy) -> "PayToggles":
        return cls(
            include_base=True,
            include_night=policy.pay_night,
            include_overtime=policy.pay_overtime,
            include_holiday_work=policy.pay_holiday,
            include_weekly=policy.pay_weekly,
        )


@dataclass(frozen=True)
class PaystubPreview:
    """Totals and withholding after applying toggles."""

    totals: PayrollTotals
    gross_pay: int
    withholding: int
    net_pay: int
    effective_rate: Decimal


def _toggled_totals(
    ledger: tuple[LedgerEntry, ...], toggles: PayToggles
) -> PayrollTotals:
    def pick(on: bool, values: list[int]) -> int:
        return sum(values) if on else 0

    computed = PayrollTotals.from_ledger(ledger)
    return PayrollTotals(
        work_minutes=computed.work_minutes,
        night_minutes=computed.night_minutes,
        overtime_minutes=computed.overtime_minutes,
        base_pay=pick(toggles.include_base, [e.base_pay for e in ledger]),
        night_pay=pick(toggles.include_night, [e.potential_night_pay for e in ledger]),
        overtime_pay=pick(
            toggles.include_overtime, [e.potential_overtime_pay for e in ledger]
        ),
        holiday_work_pay=pick(
            toggles.include_holiday_work,
            [e.potential_holiday_work_pay for e in ledger],
        ),
        weekly_holiday_pay=pick(
            toggles.include_weekly, [e.potential_weekly_holiday_pay for e in ledger]
        ),
    )


def recompute_with_toggles(
    ledger: tuple[LedgerEntry, ...],
    toggles: PayToggles,
    *,
    original_gross: int,
    original_withholding: int,
    adjustment: int = 0,
    confirmed_pay: int | None = None,
) -> PaystubPreview:
    """
    Re-total a ledger under new inclusion toggles.

    Args:
        ledger: Ledger of a previously computed PayrollResult.
        toggles: Categories to include.
        original_gross: Gross pay the withholding was computed on.
        original_withholding: Total withholding on ``original_gross``.
        adjustment: Signed bonus/deduction added to the payable gross.
        confirmed_pay: Confirmed payout; when set it is the payable gross
            instead of the toggled totals.

    Returns:
        PaystubPreview with the approximated withholding.
    """
    totals = _toggled_totals(ledger, toggles)
    payable = totals.gross if confirmed_pay is None else confirmed_pay
    gross = max(0, payable + adjustment)

    if original_gross <= 0:
        rate = Decimal(0)
        withholding = 0
    else:
        rate = Decimal(original_withholding) / Decimal(original_gross)
        withholding = (gross * original_withholding) // (original_gross * 10) * 10

    return PaystubPreview(
        totals=totals,
        gross_pay=gross,
        withholding=withholding,
        net_pay=gross - withholding,
        effective_rate=rate,
    )


def preview_paystub(
    result: PayrollResult, toggles: PayToggles | None = None
) -> PaystubPreview:
    """Preview a PayrollResult; ``None`` toggles follow the employee's policy."""
    return recompute_with_toggles(
        result.ledger,
        toggles or PayToggles.from_policy(result.policy),
        original_gross=result.gross_pay,
        original_withholding=result.tax.total,
        adjustment=result.adjustment,
        confirmed_pay=result.confirmed_pay,
    )
