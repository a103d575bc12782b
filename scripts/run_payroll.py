#!/usr/bin/env python3
"""
Compute payroll for a store from a JSON bundle.

Reads a bundle of employees, shifts, store settings and overrides (see
``payroll_ingestion.adapters.json_adapter``), runs payroll for a month
or an explicit date range and prints a per-employee summary with the
itemized ledger, or the full result as JSON.

Usage:
    python3 scripts/run_payroll.py <bundle.json> (--month YYYY-MM | --period D | --start D --end D) [options]

Examples:
    # March 2025 payroll, human-readable
    python3 scripts/run_payroll.py store.json --month 2025-03

    # The store's own pay period (pay_rule_type / pay_rule_start_day) around a date
    python3 scripts/run_payroll.py store.json --period 2025-03-10

    # Arbitrary range, machine-readable
    python3 scripts/run_payroll.py store.json --start 2025-03-01 --end 2025-03-15 --json

    # Reject the bundle if any record is malformed
    python3 scripts/run_payroll.py store.json --month 2025-03 --strict

Exit codes:
    0  success
    2  invalid input (bad arguments, unreadable bundle, bad range,
       malformed records under --strict, no rate set for the date)
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from datetime import date, time
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any

# Project root on sys.path
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from payroll_ingestion.adapters import JsonBundleAdapter  # noqa: E402
from payroll_kernel.domain.calendar import month_range  # noqa: E402
from payroll_kernel.domain.ledger import LedgerEntryType, PayrollResult  # noqa: E402
from payroll_kernel.exceptions import PayrollKernelError  # noqa: E402
from payroll_kernel.logging_config import configure_logging  # noqa: E402
from payroll_services import PayrollRun, PayrollService  # noqa: E402

EXIT_OK = 0
EXIT_INVALID_INPUT = 2


class _ArgumentError(Exception):
    pass


def _parse_month(value: str) -> tuple[int, int]:
    try:
        year_text, month_text = value.split("-")
        year, month = int(year_text), int(month_text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM, got {value!r}") from exc
    if not 1 <= month <= 12:
        raise argparse.ArgumentTypeError(f"month out of range: {value!r}")
    return year, month


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}") from exc


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        raise _ArgumentError(message)


def _build_parser() -> argparse.ArgumentParser:
    parser = _Parser(
        description="Compute shift payroll from a JSON bundle.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("bundle", type=Path, help="Path to the payroll bundle JSON file.")
    parser.add_argument(
        "--month", type=_parse_month, default=None, help="Calendar month (YYYY-MM)."
    )
    parser.add_argument(
        "--period",
        type=_parse_date,
        default=None,
        help="Pay period containing this date, per the store's pay rule (YYYY-MM-DD).",
    )
    parser.add_argument("--start", type=_parse_date, default=None, help="Range start (YYYY-MM-DD).")
    parser.add_argument("--end", type=_parse_date, default=None, help="Range end (YYYY-MM-DD).")
    parser.add_argument(
        "--rates-as-of",
        type=_parse_date,
        default=None,
        help="Select the statutory rate set effective on this date (default: range start).",
    )
    parser.add_argument("--store-id", default=None, help="Store id for log correlation.")
    parser.add_argument("--strict", action="store_true", help="Fail on any malformed record.")
    parser.add_argument("--json", action="store_true", help="Print results as JSON.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log INFO to stderr.")
    return parser


def _resolve_range(args: argparse.Namespace) -> tuple[date, date] | None:
    """Explicit range, or None when it depends on the bundle's pay rule."""
    chosen = [
        args.month is not None,
        args.period is not None,
        args.start is not None or args.end is not None,
    ]
    if sum(chosen) > 1:
        raise _ArgumentError("use only one of --month, --period or --start/--end")
    if args.month is not None:
        return month_range(*args.month)
    if args.period is not None:
        return None
    if args.start is None or args.end is None:
        raise _ArgumentError("either --month, --period or both --start and --end are required")
    return args.start, args.end


def _json_default(obj: Any) -> Any:
    if isinstance(obj, (date, time)):
        return obj.isoformat()
    if isinstance(obj, Decimal):
        return str(obj)
    if isinstance(obj, Enum):
        return obj.value
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def result_to_dict(result: PayrollResult) -> dict[str, Any]:
    data = dataclasses.asdict(result)
    data["tax"]["total"] = result.tax.total
    data["totals"]["gross"] = result.totals.gross
    return data


def run_to_dict(run: PayrollRun) -> dict[str, Any]:
    return {
        "start_date": run.start_date,
        "end_date": run.end_date,
        "rates_version": run.rates_version,
        "correlation_id": run.correlation_id,
        "gross_total": run.gross_total,
        "net_total": run.net_total,
        "results": [result_to_dict(r) for r in run.results],
        "validation_errors": [e.to_dict() for e in run.validation_errors],
    }


def _minutes(value: int) -> str:
    return f"{value // 60}h{value % 60:02d}m"


def _print_result(result: PayrollResult) -> None:
    print(f"{result.name or result.employee_id} ({result.pay_type.value}, {result.employment_type.value})")
    for entry in result.ledger:
        if entry.entry_type == LedgerEntryType.WORK:
            print(
                f"  {entry.entry_date}  {entry.start_time:%H:%M}-{entry.end_time:%H:%M}"
                f"  {_minutes(entry.effective_minutes):>7}  {entry.total_pay:>12,}"
            )
        elif entry.entry_type == LedgerEntryType.WEEKLY:
            print(
                f"  {entry.entry_date}  weekly holiday   {_minutes(entry.capped_week_minutes):>7}"
                f"  {entry.weekly_holiday_pay:>12,}"
            )
        else:
            print(f"  {entry.entry_date}  monthly base              {entry.base_pay:>12,}")
    totals = result.totals
    print(f"  base {totals.base_pay:,}  night {totals.night_pay:,}  overtime {totals.overtime_pay:,}"
          f"  holiday {totals.holiday_work_pay:,}  weekly {totals.weekly_holiday_pay:,}")
    if result.confirmed_pay is not None or result.adjustment:
        print(f"  confirmed {result.confirmed_pay}  adjustment {result.adjustment:+,}")
    print(f"  gross {result.gross_pay:,}  withholding {result.tax.total:,}  net {result.net_pay:,}")
    print()


def _print_run(run: PayrollRun) -> None:
    print(f"Payroll {run.start_date} .. {run.end_date}  (rates {run.rates_version})")
    print()
    for result in run.results:
        _print_result(result)
    print(f"Total gross {run.gross_total:,}  net {run.net_total:,}")
    if run.validation_errors:
        print(f"{len(run.validation_errors)} record(s) had validation errors:", file=sys.stderr)
        for error in run.validation_errors[:20]:
            print(f"  [{error.code}] {error.field}: {error.message} {error.details}", file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    try:
        args = _build_parser().parse_args(argv)
        date_range = _resolve_range(args)
    except _ArgumentError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    configure_logging(level=logging.INFO if args.verbose else logging.WARNING)

    try:
        bundle = JsonBundleAdapter().read(args.bundle)
    except (OSError, ValueError) as exc:
        print(f"ERROR: Cannot read bundle {args.bundle}: {exc}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    service = PayrollService()
    start_date, end_date = date_range or service.period_for(args.period, bundle.store)
    try:
        run = service.run_bundle(
            bundle,
            start_date,
            end_date,
            store_id=args.store_id,
            strict=args.strict,
            rates_as_of=args.rates_as_of,
        )
    except PayrollKernelError as exc:
        print(f"ERROR [{exc.code}]: {exc}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    if args.json:
        print(json.dumps(run_to_dict(run), default=_json_default, ensure_ascii=False, indent=2))
    else:
        _print_run(run)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
