"""Pure mapping from raw source rows to typed payroll records."""

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
from payroll_ingestion.mapping.records import (
    FieldSpec,
    MappingResult,
    map_employee,
    map_override,
    map_shift,
    map_store_settings,
)

__all__ = [
    "CoercionResult",
    "FieldSpec",
    "MappingResult",
    "coerce_bool",
    "coerce_date",
    "coerce_employment_type",
    "coerce_int",
    "coerce_pay_rule_start_day",
    "coerce_pay_rule_type",
    "coerce_pay_type",
    "coerce_str",
    "coerce_time",
    "map_employee",
    "map_override",
    "map_shift",
    "map_store_settings",
]
