"""
Typed exception hierarchy for the payroll kernel.

Every error carries a machine-readable ``code`` class attribute and keeps
its context as attributes, so callers catch by type and log structured
fields instead of parsing messages.

    PayrollKernelError (base)
    |
    +-- ConfigurationError
    |   +-- RateSetNotFoundError
    |   +-- InvalidRateSetError
    |
    +-- ValidationFailure
        +-- InvalidPayrollRangeError
        +-- RecordValidationError

Category        | Code                     | When Raised
----------------|--------------------------|------------------------------------------
Configuration   | RATE_SET_NOT_FOUND       | No YAML rate set effective on the date
                | INVALID_RATE_SET         | Rate set is malformed or inconsistent
----------------|--------------------------|------------------------------------------
Validation      | INVALID_PAYROLL_RANGE    | start_date is after end_date
                | RECORD_VALIDATION_FAILED | Strict run received malformed records

The calculation engines never raise these: malformed or missing record
fields degrade to zero-valued computation.  Only the configuration and
service layers raise.
"""

from __future__ import annotations

from datetime import date
from typing import Any


class PayrollKernelError(Exception):
    """
    Base exception for all payroll kernel errors.

    All subclasses must have a ``code`` class attribute.
    """

    code: str = "PAYROLL_KERNEL_ERROR"


# Configuration errors


class ConfigurationError(PayrollKernelError):
    """Base exception for statutory-rate configuration errors."""

    code: str = "CONFIGURATION_ERROR"


class RateSetNotFoundError(ConfigurationError):
    """No rate set is effective on the requested date."""

    code: str = "RATE_SET_NOT_FOUND"

    def __init__(self, as_of_date: date, config_dir: str):
        self.as_of_date = as_of_date.isoformat()
        self.config_dir = config_dir
        super().__init__(
            f"No statutory rate set effective on {self.as_of_date} in {config_dir}"
        )


class InvalidRateSetError(ConfigurationError):
    """A rate set file is malformed or internally inconsistent."""

    code: str = "INVALID_RATE_SET"

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Invalid rate set {source}: {reason}")


# Validation errors


class ValidationFailure(PayrollKernelError):
    """Base exception for rejected payroll requests."""

    code: str = "VALIDATION_FAILURE"


class InvalidPayrollRangeError(ValidationFailure):
    """The requested payroll range is empty (start after end)."""

    code: str = "INVALID_PAYROLL_RANGE"

    def __init__(self, start_date: date, end_date: date):
        self.start_date = start_date.isoformat()
        self.end_date = end_date.isoformat()
        super().__init__(
            f"Payroll range start {self.start_date} is after end {self.end_date}"
        )


class RecordValidationError(ValidationFailure):
    """A strict payroll run received records that failed mapping."""

    code: str = "RECORD_VALIDATION_FAILED"

    def __init__(self, errors: tuple[Any, ...]):
        self.errors = errors
        self.error_count = len(errors)
        super().__init__(f"{self.error_count} record validation error(s)")
