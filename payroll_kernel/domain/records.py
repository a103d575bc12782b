"""
Payroll input records (``payroll_kernel.domain.records``).

Responsibility
--------------
Frozen dataclass value objects for the inputs the payroll engine reads:
employees, shifts, store-wide pay policy and per-employee policy
overrides.  These are supplied by the data-access collaborator and are
read-only from the engine's perspective.

Invariants enforced
-------------------
* All records are ``frozen=True``.
* Money is integer won; optional amounts stay ``None`` until the engine
  coalesces them (see ``payroll_kernel.domain.values``).
* Policy flags are ``bool | None``.  ``None`` means "not set here" and
  falls through the precedence chain override > store > default.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from enum import Enum


class PayType(str, Enum):
    """Basis of base-pay computation."""

    HOURLY = "hourly"
    DAILY = "daily"
    MONTHLY = "monthly"


class EmploymentType(str, Enum):
    """Withholding regime."""

    FREELANCE = "freelance"  # 3.3% business-income withholding
    FOUR_INSURANCE = "four_insurance"


class PayRuleType(str, Enum):
    """How a store cuts its pay periods."""

    MONTH = "month"  # day N of a month to day N-1 of the next
    WEEK = "week"  # Monday to Sunday


@dataclass(frozen=True)
class Employee:
    """An employee and their compensation policy."""

    id: str
    name: str = ""
    hourly_wage: int | None = None
    daily_wage: int | None = None
    monthly_wage: int | None = None
    pay_type: PayType | None = None
    employment_type: EmploymentType = EmploymentType.FREELANCE
    hire_date: date | None = None
    end_date: date | None = None

    @property
    def resolved_pay_type(self) -> PayType:
        """Explicit pay type, else inferred from the configured fixed wages."""
        if self.pay_type is not None:
            return self.pay_type
        if self.monthly_wage is not None and self.monthly_wage > 0:
            return PayType.MONTHLY
        if self.daily_wage is not None and self.daily_wage > 0:
            return PayType.DAILY
        return PayType.HOURLY

    @property
    def is_fixed_pay(self) -> bool:
        return self.resolved_pay_type in (PayType.DAILY, PayType.MONTHLY)

    def is_separated_before(self, day: date) -> bool:
        return self.end_date is not None and self.end_date < day


@dataclass(frozen=True)
class Shift:
    """A single scheduled work interval.

    ``end_time`` earlier than ``start_time`` means the shift ends on the
    next day.
    """

    employee_id: str
    work_date: date
    start_time: time
    end_time: time
    is_holiday_work: bool = False
    exclude_from_weekly_pay: bool = False
    pay_type: PayType | None = None
    daily_pay_amount: int | None = None


@dataclass(frozen=True)
class StoreSettings:
    """Store-wide default pay policy and pay-period rule.

    ``pay_rule_start_day`` (1-28) only applies to the monthly rule; unset
    means the calendar month.
    """

    store_id: str | None = None
    is_five_plus: bool | None = None
    pay_weekly: bool | None = None
    pay_night: bool | None = None
    pay_overtime: bool | None = None
    pay_holiday: bool | None = None
    auto_deduct_break: bool | None = None
    no_tax_deduction: bool | None = None
    pay_rule_type: PayRuleType | None = None
    pay_rule_start_day: int | None = None


POLICY_FLAGS: tuple[str, ...] = (
    "is_five_plus",
    "pay_weekly",
    "pay_night",
    "pay_overtime",
    "pay_holiday",
    "auto_deduct_break",
    "no_tax_deduction",
)


@dataclass(frozen=True)
class PolicyOverride:
    """Per-employee exception to the store policy.

    ``monthly_override`` is a confirmed payout that replaces the computed
    gross.  ``adjustment`` is a signed bonus (+) or deduction (-) added to
    gross before withholding.
    """

    employee_id: str
    store_id: str | None = None
    is_five_plus: bool | None = None
    pay_weekly: bool | None = None
    pay_night: bool | None = None
    pay_overtime: bool | None = None
    pay_holiday: bool | None = None
    auto_deduct_break: bool | None = None
    no_tax_deduction: bool | None = None
    monthly_override: int | None = None
    adjustment: int = 0

    @property
    def is_applied(self) -> bool:
        if any(getattr(self, name) is not None for name in POLICY_FLAGS):
            return True
        return self.monthly_override is not None or self.adjustment != 0


@dataclass(frozen=True)
class ResolvedPolicy:
    """Effective pay policy for one employee after precedence resolution.

    The premium switches already include the five-or-more-employees gate.
    Field defaults here are a bare value object; ``resolve_policy`` is what
    applies the store defaults (break deduction on, weekly pay on).
    """

    is_five_plus: bool = False
    pay_weekly: bool = True
    pay_night: bool = False
    pay_overtime: bool = False
    pay_holiday: bool = False
    auto_deduct_break: bool = False
    no_tax_deduction: bool = False
    monthly_override: int | None = None
    adjustment: int = 0
    override_applied: bool = False
