"""
Payroll output types (``payroll_kernel.domain.ledger``).

Responsibility
--------------
Frozen value objects for what the payroll engine produces: itemized
ledger entries, per-category totals, the withholding breakdown and the
per-employee result.  Computed fresh on every invocation; nothing here
is persisted by the engine.

Invariants enforced
-------------------
* All types are ``frozen=True`` and hold tuples, never lists.
* ``potential_*`` amounts are what a premium would pay if enabled; the
  matching actual amount is either equal to it or zero.
* Ledger ordering: date ascending, WEEKLY entries after all other entries
  on the same date.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from enum import Enum

from payroll_kernel.domain.records import EmploymentType, PayType, ResolvedPolicy


class LedgerEntryType(str, Enum):
    """Kinds of ledger rows."""

    WORK = "WORK"
    WEEKLY = "WEEKLY"
    MONTHLY_BASE = "MONTHLY_BASE"


@dataclass(frozen=True)
class LedgerEntry:
    """One itemized payroll row."""

    entry_type: LedgerEntryType
    entry_date: date
    employee_id: str

    # WORK rows
    start_time: time | None = None
    end_time: time | None = None
    pay_type: PayType | None = None
    is_holiday_work: bool = False
    raw_minutes: int = 0
    break_minutes: int = 0
    effective_minutes: int = 0
    night_minutes: int = 0
    overtime_minutes: int = 0

    base_pay: int = 0
    night_pay: int = 0
    overtime_pay: int = 0
    holiday_work_pay: int = 0
    weekly_holiday_pay: int = 0

    potential_night_pay: int = 0
    potential_overtime_pay: int = 0
    potential_holiday_work_pay: int = 0
    potential_weekly_holiday_pay: int = 0

    # WEEKLY rows
    week_start: date | None = None
    week_minutes: int = 0
    capped_week_minutes: int = 0

    @property
    def total_pay(self) -> int:
        return (
            self.base_pay
            + self.night_pay
            + self.overtime_pay
            + self.holiday_work_pay
            + self.weekly_holiday_pay
        )

    @property
    def sort_key(self) -> tuple[date, int]:
        return (self.entry_date, 1 if self.entry_type == LedgerEntryType.WEEKLY else 0)


def sort_ledger(entries: list[LedgerEntry] | tuple[LedgerEntry, ...]) -> tuple[LedgerEntry, ...]:
    """Order entries by date, WEEKLY last within a date (stable)."""
    return tuple(sorted(entries, key=lambda e: e.sort_key))


@dataclass(frozen=True)
class PayrollTotals:
    """Per-category sums over the range-bounded ledger."""

    work_minutes: int = 0
    night_minutes: int = 0
    overtime_minutes: int = 0
    base_pay: int = 0
    night_pay: int = 0
    overtime_pay: int = 0
    holiday_work_pay: int = 0
    weekly_holiday_pay: int = 0

    @property
    def gross(self) -> int:
        return (
            self.base_pay
            + self.night_pay
            + self.overtime_pay
            + self.holiday_work_pay
            + self.weekly_holiday_pay
        )

    @classmethod
    def from_ledger(cls, ledger: tuple[LedgerEntry, ...]) -> "PayrollTotals":
        work = [e for e in ledger if e.entry_type == LedgerEntryType.WORK]
        return cls(
            work_minutes=sum(e.effective_minutes for e in work),
            night_minutes=sum(e.night_minutes for e in work),
            overtime_minutes=sum(e.overtime_minutes for e in work),
            base_pay=sum(e.base_pay for e in ledger),
            night_pay=sum(e.night_pay for e in ledger),
            overtime_pay=sum(e.overtime_pay for e in ledger),
            holiday_work_pay=sum(e.holiday_work_pay for e in ledger),
            weekly_holiday_pay=sum(e.weekly_holiday_pay for e in ledger),
        )


@dataclass(frozen=True)
class TaxBreakdown:
    """Itemized withholding, each line floored to 10 won."""

    pension: int = 0
    health: int = 0
    long_term_care: int = 0
    employment: int = 0
    income_tax: int = 0
    local_tax: int = 0

    @property
    def total(self) -> int:
        return (
            self.pension
            + self.health
            + self.long_term_care
            + self.employment
            + self.income_tax
            + self.local_tax
        )


@dataclass(frozen=True)
class PayrollResult:
    """Payroll summary and itemized ledger for one employee."""

    employee_id: str
    name: str
    pay_type: PayType
    employment_type: EmploymentType
    hourly_wage: int
    policy: ResolvedPolicy
    totals: PayrollTotals
    computed_gross: int
    gross_pay: int
    tax: TaxBreakdown
    net_pay: int
    ledger: tuple[LedgerEntry, ...]

    @property
    def override_applied(self) -> bool:
        return self.policy.override_applied

    @property
    def confirmed_pay(self) -> int | None:
        return self.policy.monthly_override

    @property
    def adjustment(self) -> int:
        return self.policy.adjustment

    def entries_of(self, entry_type: LedgerEntryType) -> tuple[LedgerEntry, ...]:
        return tuple(e for e in self.ledger if e.entry_type == entry_type)
