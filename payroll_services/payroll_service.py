"""
payroll_services.payroll_service -- Payroll run orchestration.

Responsibility:
    Turn raw store data (employee, shift, store-setting and override rows)
    into a payroll run: map rows to typed records, validate the request,
    resolve the statutory rates in force, invoke the pure payroll engine
    and package the results with any record-level validation errors.

Architecture position:
    Services -- orchestration over ingestion, config and engines.
    Composes ``payroll_ingestion.mapping`` (row typing),
    ``payroll_config.get_statutory_rates`` (effective-dated rates) and
    ``payroll_engines.compute_payroll`` (calculation).  Holds no state
    between runs.

Invariants enforced:
    - A run covers a non-empty range: ``start_date <= end_date``.
    - A record whose required fields are missing is dropped, never
      guessed; its ValidationError is returned with the run.
    - Every run carries a correlation id bound into ``LogContext`` so
      engine and config traces of the run can be joined.

Failure modes:
    - InvalidPayrollRangeError if ``start_date > end_date``.
    - RecordValidationError in strict mode when any row fails mapping.
    - RateSetNotFoundError / InvalidRateSetError when no explicit rates
      were injected and configuration cannot supply them.

Usage:
    from payroll_services import PayrollService

    service = PayrollService()
    run = service.run_month(2025, 3, employees, shifts, store, overrides)
    # or the store's own pay period around a date
    run = service.run_period(date(2025, 3, 10), employees, shifts, store, overrides)
    for result in run.results:
        print(result.name, result.net_pay)
"""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any
from uuid import uuid4

from payroll_config import get_statutory_rates
from payroll_engines import compute_payroll
from payroll_ingestion.adapters import PayrollBundle
from payroll_ingestion.mapping import (
    MappingResult,
    map_employee,
    map_override,
    map_shift,
    map_store_settings,
)
from payroll_kernel.domain.calendar import MAX_PAY_PERIOD_START_DAY, month_range, period_containing
from payroll_kernel.domain.dtos import ValidationError
from payroll_kernel.domain.ledger import PayrollResult
from payroll_kernel.domain.rates import StatutoryRates
from payroll_kernel.domain.records import (
    Employee,
    PayRuleType,
    PolicyOverride,
    Shift,
    StoreSettings,
)
from payroll_kernel.exceptions import InvalidPayrollRangeError, RecordValidationError
from payroll_kernel.logging_config import LogContext, get_logger

logger = get_logger("services.payroll")


@dataclass(frozen=True)
class PayrollRun:
    """Outcome of one payroll run."""

    start_date: date
    end_date: date
    results: tuple[PayrollResult, ...]
    validation_errors: tuple[ValidationError, ...]
    rates_version: str
    correlation_id: str

    @property
    def gross_total(self) -> int:
        return sum(r.gross_pay for r in self.results)

    @property
    def net_total(self) -> int:
        return sum(r.net_pay for r in self.results)

    def result_for(self, employee_id: str) -> PayrollResult | None:
        for result in self.results:
            if result.employee_id == employee_id:
                return result
        return None


def _map_rows(
    rows: Iterable[Any],
    record_type: type,
    mapper: Callable[[Any], MappingResult],
    errors: list[ValidationError],
) -> list[Any]:
    """Typed records pass through; raw rows are mapped and errors collected."""
    records: list[Any] = []
    for index, row in enumerate(rows or ()):
        if isinstance(row, record_type):
            records.append(row)
            continue
        mapped = mapper(row)
        for error in mapped.errors:
            details = dict(error.details or {})
            details["row"] = index
            errors.append(
                ValidationError(
                    code=error.code,
                    message=error.message,
                    field=error.field,
                    details=details,
                )
            )
        if mapped.success:
            records.append(mapped.record)
    return records


class PayrollService:
    """
    Runs payroll for one store over a date range.

    Contract:
        Receives optional ``StatutoryRates`` (or a rate-set directory) via
        constructor injection.  Without explicit rates, the set effective
        on the range start is loaded from ``payroll_config``.
    Guarantees:
        - ``run`` returns results in roster order, one per mapped employee.
        - Identical inputs and rates yield identical results.
    Non-goals:
        - Does not fetch rows from storage; callers pass them in.
        - Does not persist or render results.
    """

    def __init__(
        self,
        rates: StatutoryRates | None = None,
        config_dir: Path | None = None,
    ):
        self._rates = rates
        self._config_dir = config_dir

    def rates_for(self, as_of: date) -> StatutoryRates:
        if self._rates is not None:
            return self._rates
        return get_statutory_rates(as_of, self._config_dir)

    def run(
        self,
        start_date: date,
        end_date: date,
        employees: Iterable[Any],
        shifts: Iterable[Any],
        store: Any = None,
        overrides: Iterable[Any] = (),
        *,
        store_id: str | None = None,
        strict: bool = False,
        rates_as_of: date | None = None,
        correlation_id: str | None = None,
    ) -> PayrollRun:
        """
        Map, validate and compute one payroll run.

        Args:
            start_date: First day of the range (inclusive).
            end_date: Last day of the range (inclusive).
            employees: Employee rows (dicts) or ``Employee`` records.
            shifts: Shift rows or ``Shift`` records.
            store: Store-settings row, ``StoreSettings`` or None.
            overrides: Override rows or ``PolicyOverride`` records.
            store_id: Store identifier for log correlation.
            strict: Raise instead of dropping malformed records.
            rates_as_of: Date used to select the rate set; defaults to
                ``start_date``.
            correlation_id: Run id for log correlation; generated if None.

        Returns:
            PayrollRun.

        Raises:
            InvalidPayrollRangeError: If ``start_date > end_date``.
            RecordValidationError: In strict mode, if any row fails mapping.
        """
        if start_date > end_date:
            raise InvalidPayrollRangeError(start_date, end_date)

        correlation_id = correlation_id or str(uuid4())
        with LogContext.bind(correlation_id=correlation_id, store_id=store_id):
            t0 = time.monotonic()
            logger.info(
                "payroll_run_started",
                extra={
                    "start_date": start_date.isoformat(),
                    "end_date": end_date.isoformat(),
                    "strict": strict,
                },
            )

            errors: list[ValidationError] = []
            employee_records = _map_rows(employees, Employee, map_employee, errors)
            shift_records = _map_rows(shifts, Shift, map_shift, errors)
            override_records = _map_rows(overrides, PolicyOverride, map_override, errors)
            store_records = _map_rows([store], StoreSettings, map_store_settings, errors)
            store_settings = store_records[0] if store_records else StoreSettings()

            if errors:
                logger.warning(
                    "payroll_records_rejected",
                    extra={
                        "error_count": len(errors),
                        "codes": sorted({e.code for e in errors}),
                    },
                )
                if strict:
                    raise RecordValidationError(tuple(errors))

            roster = {e.id for e in employee_records}
            orphaned = sum(1 for s in shift_records if s.employee_id not in roster)
            if orphaned:
                logger.info("shifts_without_employee_ignored", extra={"count": orphaned})

            rates = self.rates_for(rates_as_of or start_date)
            results = compute_payroll(
                start_date,
                end_date,
                employee_records,
                shift_records,
                store_settings,
                override_records,
                rates,
            )

            run = PayrollRun(
                start_date=start_date,
                end_date=end_date,
                results=results,
                validation_errors=tuple(errors),
                rates_version=rates.version,
                correlation_id=correlation_id,
            )
            logger.info(
                "payroll_run_completed",
                extra={
                    "employee_count": len(results),
                    "gross_total": run.gross_total,
                    "net_total": run.net_total,
                    "validation_error_count": len(errors),
                    "rates_version": rates.version,
                    "duration_ms": round((time.monotonic() - t0) * 1000, 2),
                },
            )
            return run

    def run_month(
        self,
        year: int,
        month: int,
        employees: Iterable[Any],
        shifts: Iterable[Any],
        store: Any = None,
        overrides: Iterable[Any] = (),
        **kwargs: Any,
    ) -> PayrollRun:
        """``run`` over the whole calendar month."""
        start_date, end_date = month_range(year, month)
        return self.run(start_date, end_date, employees, shifts, store, overrides, **kwargs)

    def period_for(self, day: date, store: Any = None) -> tuple[date, date]:
        """
        The store's pay period containing ``day``.

        A weekly rule gives the Monday-Sunday week.  A monthly rule runs
        from ``pay_rule_start_day`` to the day before it in the next month;
        an unset or unusable start day means the calendar month.  Store
        rows are mapped here only to read the rule; mapping errors surface
        from the run itself.
        """
        if isinstance(store, StoreSettings):
            settings = store
        else:
            settings = map_store_settings(store).record or StoreSettings()

        start_day = settings.pay_rule_start_day or 1
        if not 1 <= start_day <= MAX_PAY_PERIOD_START_DAY:
            logger.warning(
                "pay_rule_start_day_ignored",
                extra={"pay_rule_start_day": start_day},
            )
            start_day = 1
        return period_containing(
            day,
            weekly=settings.pay_rule_type == PayRuleType.WEEK,
            start_day=start_day,
        )

    def run_period(
        self,
        day: date,
        employees: Iterable[Any],
        shifts: Iterable[Any],
        store: Any = None,
        overrides: Iterable[Any] = (),
        **kwargs: Any,
    ) -> PayrollRun:
        """``run`` over the store's pay period containing ``day``."""
        start_date, end_date = self.period_for(day, store)
        return self.run(start_date, end_date, employees, shifts, store, overrides, **kwargs)

    def run_bundle(
        self,
        bundle: PayrollBundle,
        start_date: date,
        end_date: date,
        **kwargs: Any,
    ) -> PayrollRun:
        """``run`` over the sections of a loaded ``PayrollBundle``."""
        if kwargs.get("store_id") is None and bundle.store:
            store_id = bundle.store.get("id") or bundle.store.get("store_id")
            kwargs["store_id"] = str(store_id) if store_id is not None else None
        return self.run(
            start_date,
            end_date,
            bundle.employees,
            bundle.shifts,
            bundle.store,
            bundle.overrides,
            **kwargs,
        )
