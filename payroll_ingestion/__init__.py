"""
Payroll ingestion: the data-access boundary.

Reads payroll bundles from disk (``adapters``) and maps loosely-typed
rows into the frozen records the engines consume (``mapping``).
Malformed values become ``ValidationError`` DTOs rather than exceptions,
so one bad shift never aborts a whole payroll run.
"""

from payroll_ingestion.adapters import JsonBundleAdapter, PayrollBundle
from payroll_ingestion.mapping import (
    MappingResult,
    map_employee,
    map_override,
    map_shift,
    map_store_settings,
)

__all__ = [
    "JsonBundleAdapter",
    "MappingResult",
    "PayrollBundle",
    "map_employee",
    "map_override",
    "map_shift",
    "map_store_settings",
]
