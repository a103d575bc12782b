"""
Payroll domain value objects.

Pure data and pure helpers, zero I/O.  Imported by engines, ingestion
and services; imports nothing outside the standard library.
"""

from payroll_kernel.domain.calendar import (
    iter_weeks,
    month_range,
    subtract_months,
    week_end,
    week_start,
)
from payroll_kernel.domain.dtos import ValidationError
from payroll_kernel.domain.ledger import (
    LedgerEntry,
    LedgerEntryType,
    PayrollResult,
    PayrollTotals,
    TaxBreakdown,
    sort_ledger,
)
from payroll_kernel.domain.rates import StatutoryRates, TaxBracket
from payroll_kernel.domain.records import (
    Employee,
    EmploymentType,
    PayType,
    PolicyOverride,
    ResolvedPolicy,
    Shift,
    StoreSettings,
)
from payroll_kernel.domain.values import flag, floor_to_ten, prorate, signed_won, won

__all__ = [
    "Employee",
    "EmploymentType",
    "LedgerEntry",
    "LedgerEntryType",
    "PayType",
    "PayrollResult",
    "PayrollTotals",
    "PolicyOverride",
    "ResolvedPolicy",
    "Shift",
    "StatutoryRates",
    "StoreSettings",
    "TaxBracket",
    "TaxBreakdown",
    "ValidationError",
    "flag",
    "floor_to_ten",
    "iter_weeks",
    "month_range",
    "prorate",
    "signed_won",
    "sort_ledger",
    "subtract_months",
    "week_end",
    "week_start",
    "won",
]
