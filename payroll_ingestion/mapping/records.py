"""
Record mappers: raw source rows to typed payroll records.

Each ``map_*`` function applies a fixed table of ``FieldSpec`` entries to
one raw row.  Source column names follow the storage schema
(``hourly_wage``, ``employment_type``, ``exclude_holiday_pay``, ...) and
their camelCase equivalents are accepted as aliases.

* A malformed optional field yields a ``ValidationError`` and is left
  unset, so the record still maps (the engine treats it as missing).
* A missing or malformed required field yields a ``ValidationError`` and
  drops the record (``success=False``, ``record=None``).

Architecture: payroll_ingestion/mapping. ZERO I/O. Imports only from
payroll_kernel/domain/.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from functools import partial
from typing import Any

from payroll_ingestion.mapping.coercion import (
    CoercionResult,
    coerce_bool,
    coerce_date,
    coerce_employment_type,
    coerce_int,
    coerce_pay_rule_start_day,
    coerce_pay_rule_type,
    coerce_pay_type,
    coerce_str,
    coerce_time,
)
from payroll_kernel.domain.dtos import ValidationError
from payroll_kernel.domain.records import (
    Employee,
    PolicyOverride,
    Shift,
    StoreSettings,
)

Coercer = Callable[[Any, str], CoercionResult]


@dataclass(frozen=True)
class FieldSpec:
    """Target field, accepted source keys (first present wins), coercer."""

    target: str
    sources: tuple[str, ...]
    coerce: Coercer
    required: bool = False


@dataclass(frozen=True)
class MappingResult:
    """Result of mapping one raw row to a typed record."""

    success: bool
    record: Any = None
    errors: tuple[ValidationError, ...] = field(default_factory=tuple)


_signed_int = partial(coerce_int, allow_negative=True)


def _flag_specs() -> tuple[FieldSpec, ...]:
    return (
        FieldSpec("is_five_plus", ("is_five_plus", "isFivePlus"), coerce_bool),
        FieldSpec("pay_weekly", ("pay_weekly", "payWeekly"), coerce_bool),
        FieldSpec("pay_night", ("pay_night", "payNight"), coerce_bool),
        FieldSpec("pay_overtime", ("pay_overtime", "payOvertime"), coerce_bool),
        FieldSpec("pay_holiday", ("pay_holiday", "payHoliday"), coerce_bool),
        FieldSpec(
            "auto_deduct_break", ("auto_deduct_break", "autoDeductBreak"), coerce_bool
        ),
        FieldSpec(
            "no_tax_deduction", ("no_tax_deduction", "noTaxDeduction"), coerce_bool
        ),
    )


EMPLOYEE_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("id", ("id", "employee_id", "employeeId"), coerce_str, required=True),
    FieldSpec("name", ("name",), coerce_str),
    FieldSpec("hourly_wage", ("hourly_wage", "hourlyWage"), coerce_int),
    FieldSpec("daily_wage", ("daily_wage", "dailyWage"), coerce_int),
    FieldSpec("monthly_wage", ("monthly_wage", "monthlyWage"), coerce_int),
    FieldSpec("pay_type", ("pay_type", "payType"), coerce_pay_type),
    FieldSpec(
        "employment_type", ("employment_type", "employmentType"), coerce_employment_type
    ),
    FieldSpec("hire_date", ("hire_date", "hireDate"), coerce_date),
    FieldSpec(
        "end_date", ("end_date", "endDate", "resign_date", "resignDate"), coerce_date
    ),
)

SHIFT_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("employee_id", ("employee_id", "employeeId"), coerce_str, required=True),
    FieldSpec("work_date", ("date", "work_date", "workDate"), coerce_date, required=True),
    FieldSpec("start_time", ("start_time", "startTime"), coerce_time, required=True),
    FieldSpec("end_time", ("end_time", "endTime"), coerce_time, required=True),
    FieldSpec("is_holiday_work", ("is_holiday_work", "isHolidayWork"), coerce_bool),
    FieldSpec(
        "exclude_from_weekly_pay",
        ("exclude_holiday_pay", "exclude_from_weekly_pay", "excludeFromWeeklyPay"),
        coerce_bool,
    ),
    FieldSpec("pay_type", ("pay_type", "payType"), coerce_pay_type),
    FieldSpec("daily_pay_amount", ("daily_pay_amount", "dailyPayAmount"), coerce_int),
)

STORE_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("store_id", ("store_id", "storeId", "id"), coerce_str),
    *_flag_specs(),
    FieldSpec("pay_rule_type", ("pay_rule_type", "payRuleType"), coerce_pay_rule_type),
    FieldSpec(
        "pay_rule_start_day",
        ("pay_rule_start_day", "payRuleStartDay"),
        coerce_pay_rule_start_day,
    ),
)

OVERRIDE_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("employee_id", ("employee_id", "employeeId"), coerce_str, required=True),
    FieldSpec("store_id", ("store_id", "storeId"), coerce_str),
    *_flag_specs(),
    FieldSpec("monthly_override", ("monthly_override", "monthlyOverride"), coerce_int),
    FieldSpec("adjustment", ("adjustment", "bonus"), _signed_int),
)


def _lookup(row: dict[str, Any], sources: tuple[str, ...]) -> tuple[str, Any]:
    for key in sources:
        if key in row and row[key] is not None:
            return key, row[key]
    return sources[0], None


def apply_field_specs(
    row: Any,
    specs: tuple[FieldSpec, ...],
    record_type: str,
) -> tuple[dict[str, Any], list[ValidationError], bool]:
    """
    Coerce every spec'd field of ``row``.

    Returns:
        (values, errors, required_ok).  ``values`` only holds fields that
        coerced to a non-None value.
    """
    if not isinstance(row, dict):
        error = ValidationError(
            code="INVALID_RECORD",
            message=f"Expected an object, got {type(row).__name__}",
            details={"record_type": record_type},
        )
        return {}, [error], False

    values: dict[str, Any] = {}
    errors: list[ValidationError] = []
    required_ok = True

    for spec in specs:
        source, raw = _lookup(row, spec.sources)
        result = spec.coerce(raw, spec.target)
        if not result.success:
            errors.append(
                ValidationError(
                    code=result.error.code,
                    message=f"{result.error.message} (column {source!r})",
                    field=spec.target,
                    details={"record_type": record_type},
                )
            )
            if spec.required:
                required_ok = False
            continue
        if result.value is None:
            if spec.required:
                errors.append(
                    ValidationError(
                        code="MISSING_REQUIRED_FIELD",
                        message=f"Required field {spec.sources[0]!r} is missing",
                        field=spec.target,
                        details={"record_type": record_type},
                    )
                )
                required_ok = False
            continue
        values[spec.target] = result.value

    return values, errors, required_ok


def _map(
    row: Any,
    specs: tuple[FieldSpec, ...],
    record_type: str,
    factory: Callable[..., Any],
) -> MappingResult:
    values, errors, required_ok = apply_field_specs(row, specs, record_type)
    if not required_ok:
        return MappingResult(success=False, errors=tuple(errors))
    return MappingResult(success=True, record=factory(**values), errors=tuple(errors))


def map_employee(row: Any) -> MappingResult:
    return _map(row, EMPLOYEE_FIELDS, "employee", Employee)


def map_shift(row: Any) -> MappingResult:
    return _map(row, SHIFT_FIELDS, "shift", Shift)


def map_store_settings(row: Any) -> MappingResult:
    if row is None:
        return MappingResult(success=True, record=StoreSettings())
    return _map(row, STORE_FIELDS, "store", StoreSettings)


def map_override(row: Any) -> MappingResult:
    return _map(row, OVERRIDE_FIELDS, "override", PolicyOverride)
