"""
Module: payroll_engines
Responsibility:
    Package entrypoint that re-exports the public symbols of the pure
    payroll calculation engines.  This is the import surface for the
    service layer and the CLI.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import payroll_kernel (and sibling engine modules).
    MUST NOT import payroll_config, payroll_ingestion or payroll_services.

Invariants enforced:
    - Purity: engines NEVER call ``datetime.now()`` or ``date.today()``.
      Dates are always explicit parameters.
    - Exact arithmetic: money is integer won, rates are ``Decimal``;
      every floor is computed without binary floats.
    - Determinism: identical inputs always produce identical outputs.

Failure modes:
    - None for malformed records: missing amounts and flags coalesce to
      safe defaults and zero out only the affected contribution.

Audit relevance:
    ``compute_payroll`` is traced via ``@traced_engine`` (see
    ``payroll_engines.tracer``), emitting PAYROLL_ENGINE_TRACE records
    with engine name, version, input fingerprint and duration.

Usage:
    from payroll_engines import compute_payroll, preview_paystub
    from payroll_engines.severance import calculate_severance
"""

from payroll_engines.estimator import (
    SalaryEstimate,
    TaxMode,
    estimate_salary,
    estimate_weekly_holiday_pay,
)
from payroll_engines.payroll import compute_employee_payroll, compute_payroll
from payroll_engines.paystub import (
    PaystubPreview,
    PayToggles,
    preview_paystub,
    recompute_with_toggles,
)
from payroll_engines.policy import DEFAULT_FLAGS, index_overrides, resolve_policy
from payroll_engines.severance import (
    SeveranceResult,
    calculate_severance,
    three_month_wage_total,
)
from payroll_engines.shift_pay import ShiftPay, decompose_shift
from payroll_engines.tracer import compute_input_fingerprint, traced_engine
from payroll_engines.weekly_holiday import (
    WeeklyHolidayOutcome,
    evaluate_week,
    weekly_holiday_pay,
)
from payroll_engines.withholding import calculate_withholding

__all__ = [
    "DEFAULT_FLAGS",
    "PayToggles",
    "PaystubPreview",
    "SalaryEstimate",
    "SeveranceResult",
    "ShiftPay",
    "TaxMode",
    "WeeklyHolidayOutcome",
    "calculate_severance",
    "calculate_withholding",
    "compute_employee_payroll",
    "compute_input_fingerprint",
    "compute_payroll",
    "decompose_shift",
    "estimate_salary",
    "estimate_weekly_holiday_pay",
    "evaluate_week",
    "index_overrides",
    "preview_paystub",
    "recompute_with_toggles",
    "resolve_policy",
    "three_month_wage_total",
    "traced_engine",
    "weekly_holiday_pay",
]
