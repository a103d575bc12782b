"""Source adapters for payroll bundles (file I/O only)."""

from payroll_ingestion.adapters.json_adapter import JsonBundleAdapter, PayrollBundle

__all__ = [
    "JsonBundleAdapter",
    "PayrollBundle",
]
