"""
payroll_config -- single public entrypoint for statutory rate configuration.

Responsibility:
    Provides the way to obtain the statutory rates in force on a date
    through ``get_statutory_rates()``.  Returns a frozen
    ``StatutoryRates`` -- the only artifact engines ever see.

Architecture position:
    Configuration -- YAML-driven rate sets.  Sits above
    ``payroll_kernel`` and below ``payroll_services``.  Neither the kernel
    nor the engines may import from ``payroll_config``.

Invariants enforced:
    - Effective dating: the set with the latest ``effective_from`` that
      covers ``as_of`` wins.
    - Deterministic identity: the same YAML always yields the same
      checksum.

Failure modes:
    - ``RateSetNotFoundError`` -- the directory is missing or no set is
      effective on the requested date.
    - ``InvalidRateSetError`` -- a set file is malformed.

Audit relevance:
    Every successful ``get_statutory_rates()`` call emits a
    ``PAYROLL_CONFIG_TRACE`` log entry with the rate-set version,
    checksum, effective window and source file, tying a payroll run to
    the exact rates that governed it.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path

from payroll_config.loader import RateSet, load_rate_sets
from payroll_kernel.domain.rates import StatutoryRates
from payroll_kernel.exceptions import RateSetNotFoundError
from payroll_kernel.logging_config import get_logger

_logger = get_logger("config")

# Default rate sets directory
_DEFAULT_CONFIG_DIR = Path(__file__).parent / "sets"


def find_rate_set(as_of: date, config_dir: Path | None = None) -> RateSet:
    """Rate set in force on ``as_of``.

    Raises:
        RateSetNotFoundError: If the directory does not exist or no set
            covers the date.
        InvalidRateSetError: If any set file fails to parse.
    """
    sets_dir = config_dir or _DEFAULT_CONFIG_DIR
    if not sets_dir.is_dir():
        raise RateSetNotFoundError(as_of, str(sets_dir))

    candidates = [s for s in load_rate_sets(sets_dir) if s.covers(as_of)]
    if not candidates:
        raise RateSetNotFoundError(as_of, str(sets_dir))
    return candidates[-1]


def get_statutory_rates(as_of: date, config_dir: Path | None = None) -> StatutoryRates:
    """The public configuration entrypoint.

    Args:
        as_of: Date the rates must be effective on (usually the payroll
            range start).
        config_dir: Override path to the rate sets directory.
            Defaults to payroll_config/sets/.

    Returns:
        StatutoryRates for the matching set.
    """
    rate_set = find_rate_set(as_of, config_dir)

    _logger.info(
        "PAYROLL_CONFIG_TRACE",
        extra={
            "trace_type": "PAYROLL_CONFIG_TRACE",
            "rate_set_version": rate_set.rates.version,
            "checksum": rate_set.checksum,
            "effective_from": rate_set.effective_from.isoformat(),
            "effective_to": (
                rate_set.effective_to.isoformat() if rate_set.effective_to else None
            ),
            "source": rate_set.source,
            "as_of": as_of.isoformat(),
        },
    )
    return rate_set.rates


__all__ = ["RateSet", "find_rate_set", "get_statutory_rates"]
