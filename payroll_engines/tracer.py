"""
payroll_engines.tracer -- ``@traced_engine`` and the PAYROLL_ENGINE_TRACE record.

Responsibility:
    Wrap an engine entrypoint so that every call logs one
    ``PAYROLL_ENGINE_TRACE`` record: engine name and version, the calling
    function, a fingerprint of selected arguments and the wall time spent.
    Two runs over the same payroll range share a fingerprint, which is how
    repeated previews of the same month are recognised in the logs.

Architecture position:
    Engines -- support code for the pure calculation layer.  The wrapper
    reads the arguments and emits a log record; it never alters them or
    the result.

Invariants enforced:
    - The fingerprint is the first 16 hex chars of SHA-256 over a
      canonical JSON document: dataclasses become field dicts, enums
      their values, dates ISO strings, Decimals strings, mapping keys
      are sorted.
    - Arguments are bound against the function signature, so positional
      and keyword calls fingerprint identically.

Failure modes:
    - A fingerprint field the caller left at its default is recorded as
      ``null``.

Usage:
    from payroll_engines.tracer import traced_engine

    @traced_engine("payroll", "1.0", fingerprint_fields=("start_date", "end_date"))
    def compute_payroll(start_date, end_date, employees, shifts, ...):
        ...
"""

from __future__ import annotations

import dataclasses
import functools
import hashlib
import inspect
import json
import time
from collections.abc import Callable, Mapping
from datetime import date, time as time_of_day
from decimal import Decimal
from enum import Enum
from typing import Any

from payroll_kernel.logging_config import get_logger

logger = get_logger("engines.tracer")

TRACE_TYPE = "PAYROLL_ENGINE_TRACE"


def canonical_form(value: Any) -> Any:
    """JSON-compatible, order-stable representation of an engine argument."""
    # str-valued enums must not fall through as plain str
    if isinstance(value, Enum):
        return value.value
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, (date, time_of_day)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            f.name: canonical_form(getattr(value, f.name))
            for f in dataclasses.fields(value)
        }
    if isinstance(value, Mapping):
        return {str(k): canonical_form(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [canonical_form(v) for v in value]
    return str(value)


def compute_input_fingerprint(
    fingerprint_fields: tuple[str, ...],
    arguments: Mapping[str, Any],
) -> str:
    """16-hex-char SHA-256 prefix over the selected arguments."""
    document = {name: canonical_form(arguments.get(name)) for name in fingerprint_fields}
    encoded = json.dumps(document, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(encoded.encode("utf-8")).hexdigest()[:16]


def traced_engine(
    engine_name: str,
    engine_version: str,
    fingerprint_fields: tuple[str, ...] = (),
) -> Callable:
    """Decorate a pure engine entrypoint with PAYROLL_ENGINE_TRACE logging."""

    def decorator(func: Callable) -> Callable:
        signature = inspect.signature(func)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            fingerprint = ""
            if fingerprint_fields:
                arguments = signature.bind_partial(*args, **kwargs).arguments
                fingerprint = compute_input_fingerprint(fingerprint_fields, arguments)

            started = time.perf_counter()
            result = func(*args, **kwargs)
            elapsed_ms = (time.perf_counter() - started) * 1000

            logger.info(
                TRACE_TYPE,
                extra={
                    "trace_type": TRACE_TYPE,
                    "engine_name": engine_name,
                    "engine_version": engine_version,
                    "function": func.__qualname__,
                    "input_fingerprint": fingerprint,
                    "duration_ms": round(elapsed_ms, 2),
                },
            )
            return result

        return wrapper

    return decorator
