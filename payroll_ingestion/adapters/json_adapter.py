"""
JSON bundle adapter.

Reads a payroll bundle exported from the scheduling store: one JSON
object holding the roster, the shifts, the store settings and the
per-employee overrides::

    {
      "store":     {"id": "...", "is_five_plus": true, "pay_rule_start_day": 25, ...},
      "employees": [{"id": "...", "hourly_wage": 10030, ...}, ...],
      "shifts":    [{"employee_id": "...", "date": "2025-03-03", ...}, ...],
      "overrides": [{"employee_id": "...", "pay_night": false, ...}, ...]
    }

Rows are returned raw; typing happens in ``payroll_ingestion.mapping``.
Section names may also be given as ``schedules`` (for shifts),
``store_settings`` and ``employee_settings`` (for overrides).

Architecture: payroll_ingestion/adapters. File I/O only.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

_SECTION_ALIASES: dict[str, tuple[str, ...]] = {
    "employees": ("employees",),
    "shifts": ("shifts", "schedules"),
    "store": ("store", "store_settings", "storeSettings"),
    "overrides": ("overrides", "employee_settings", "employeeSettings"),
}


@dataclass(frozen=True)
class PayrollBundle:
    """Raw rows of one payroll bundle."""

    employees: tuple[dict[str, Any], ...] = ()
    shifts: tuple[dict[str, Any], ...] = ()
    store: dict[str, Any] | None = None
    overrides: tuple[dict[str, Any], ...] = ()
    source: str = ""
    skipped_rows: int = field(default=0)


def _section(data: dict[str, Any], name: str) -> Any:
    for key in _SECTION_ALIASES[name]:
        if key in data:
            return data[key]
    return None


def _rows(value: Any) -> tuple[tuple[dict[str, Any], ...], int]:
    """Keep dict rows; count anything else as skipped."""
    if not isinstance(value, list):
        return (), 0
    rows = tuple(item for item in value if isinstance(item, dict))
    return rows, len(value) - len(rows)


class JsonBundleAdapter:
    """Read a payroll bundle JSON file."""

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def read(self, source_path: Path) -> PayrollBundle:
        """
        Raises:
            FileNotFoundError: if the file does not exist.
            json.JSONDecodeError: if the file is not valid JSON.
            ValueError: if the top level is not an object.
        """
        with Path(source_path).open("r", encoding=self.encoding) as f:
            data = json.load(f)
        return self.parse(data, source=str(source_path))

    def parse(self, data: Any, source: str = "") -> PayrollBundle:
        if not isinstance(data, dict):
            raise ValueError(f"Payroll bundle must be a JSON object: {source}")

        employees, skipped_employees = _rows(_section(data, "employees"))
        shifts, skipped_shifts = _rows(_section(data, "shifts"))
        overrides, skipped_overrides = _rows(_section(data, "overrides"))
        store = _section(data, "store")

        return PayrollBundle(
            employees=employees,
            shifts=shifts,
            store=store if isinstance(store, dict) else None,
            overrides=overrides,
            source=source,
            skipped_rows=skipped_employees + skipped_shifts + skipped_overrides,
        )
