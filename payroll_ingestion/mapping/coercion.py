"""
Value coercion: loosely-typed source values to typed record fields.

Source rows come from JSON exports and spreadsheets, so the same field
may arrive as ``"1"``, ``1``, ``true`` or ``"10,030"``.  Each coercer is a
pure function returning a ``CoercionResult``; a failed coercion carries a
``ValidationError`` and never raises.  ``None`` and blank strings are
"unset" (success with ``value=None``), not errors.

Architecture: payroll_ingestion/mapping. ZERO I/O. Imports only from
payroll_kernel/domain/.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import Any

from payroll_kernel.domain.calendar import MAX_PAY_PERIOD_START_DAY
from payroll_kernel.domain.dtos import ValidationError
from payroll_kernel.domain.records import EmploymentType, PayRuleType, PayType

TRUE_TOKENS = frozenset({"true", "1", "yes", "on", "y"})
FALSE_TOKENS = frozenset({"false", "0", "no", "off", "n"})


@dataclass(frozen=True)
class CoercionResult:
    """Result of coercing a raw value to a target type."""

    success: bool
    value: Any = None
    error: ValidationError | None = None


def _unset(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _failure(code: str, message: str, field: str) -> CoercionResult:
    return CoercionResult(
        success=False, error=ValidationError(code=code, message=message, field=field)
    )


def coerce_str(value: Any, field: str = "") -> CoercionResult:
    if _unset(value):
        return CoercionResult(success=True)
    if isinstance(value, (dict, list)):
        return _failure("INVALID_STRING", f"Expected text, got {type(value).__name__}", field)
    return CoercionResult(success=True, value=str(value).strip())


def coerce_bool(value: Any, field: str = "") -> CoercionResult:
    """True for ``True/"true"/"1"/1/"yes"/"on"`` (case-insensitive)."""
    if _unset(value):
        return CoercionResult(success=True)
    if isinstance(value, bool):
        return CoercionResult(success=True, value=value)
    if isinstance(value, int):
        if value in (0, 1):
            return CoercionResult(success=True, value=bool(value))
        return _failure("INVALID_BOOLEAN", f"Cannot coerce to boolean: {value!r}", field)
    token = str(value).strip().lower()
    if token in TRUE_TOKENS:
        return CoercionResult(success=True, value=True)
    if token in FALSE_TOKENS:
        return CoercionResult(success=True, value=False)
    return _failure("INVALID_BOOLEAN", f"Cannot coerce to boolean: {value!r}", field)


def coerce_int(
    value: Any, field: str = "", *, allow_negative: bool = False
) -> CoercionResult:
    """Whole won amounts; thousands separators are accepted."""
    if _unset(value):
        return CoercionResult(success=True)
    if isinstance(value, bool):
        return _failure("INVALID_INTEGER", f"Cannot coerce to integer: {value!r}", field)
    try:
        number = Decimal(str(value).replace(",", "").strip())
    except InvalidOperation:
        return _failure("INVALID_INTEGER", f"Cannot coerce to integer: {value!r}", field)
    if not number.is_finite() or number != number.to_integral_value():
        return _failure("INVALID_INTEGER", f"Not a whole amount: {value!r}", field)
    if number < 0 and not allow_negative:
        return _failure("NEGATIVE_AMOUNT", f"Amount cannot be negative: {value!r}", field)
    return CoercionResult(success=True, value=int(number))


def coerce_date(value: Any, field: str = "") -> CoercionResult:
    """ISO dates; a full ISO timestamp keeps only its date part."""
    if _unset(value):
        return CoercionResult(success=True)
    if isinstance(value, datetime):
        return CoercionResult(success=True, value=value.date())
    if isinstance(value, date):
        return CoercionResult(success=True, value=value)
    text = str(value).strip()
    try:
        return CoercionResult(success=True, value=date.fromisoformat(text))
    except ValueError:
        pass
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return _failure("INVALID_DATE_FORMAT", f"Cannot parse date: {value!r}", field)
    return CoercionResult(success=True, value=parsed.date())


def coerce_time(value: Any, field: str = "") -> CoercionResult:
    """``HH:MM`` or ``HH:MM:SS``; ``24:00`` is midnight (end of day)."""
    if _unset(value):
        return CoercionResult(success=True)
    if isinstance(value, time):
        return CoercionResult(success=True, value=value.replace(second=0, microsecond=0))
    parts = str(value).strip().split(":")
    if len(parts) not in (2, 3) or not all(p.isdigit() for p in parts):
        return _failure("INVALID_TIME_FORMAT", f"Cannot parse time: {value!r}", field)
    hour, minute = int(parts[0]), int(parts[1])
    second = int(parts[2]) if len(parts) == 3 else 0
    if hour == 24 and minute == 0 and second == 0:
        return CoercionResult(success=True, value=time(0, 0))
    if hour > 23 or minute > 59 or second > 59:
        return _failure("INVALID_TIME_FORMAT", f"Time out of range: {value!r}", field)
    return CoercionResult(success=True, value=time(hour, minute))


def coerce_pay_type(value: Any, field: str = "") -> CoercionResult:
    if _unset(value):
        return CoercionResult(success=True)
    token = str(value).strip().lower()
    try:
        return CoercionResult(success=True, value=PayType(token))
    except ValueError:
        return _failure("INVALID_PAY_TYPE", f"Unknown pay type: {value!r}", field)


def coerce_employment_type(value: Any, field: str = "") -> CoercionResult:
    """Anything mentioning ``four`` is four-insurance; everything else freelance."""
    if _unset(value):
        return CoercionResult(success=True, value=EmploymentType.FREELANCE)
    if isinstance(value, EmploymentType):
        return CoercionResult(success=True, value=value)
    if "four" in str(value).lower():
        return CoercionResult(success=True, value=EmploymentType.FOUR_INSURANCE)
    return CoercionResult(success=True, value=EmploymentType.FREELANCE)


def coerce_pay_rule_type(value: Any, field: str = "") -> CoercionResult:
    if _unset(value):
        return CoercionResult(success=True)
    try:
        return CoercionResult(success=True, value=PayRuleType(str(value).strip().lower()))
    except ValueError:
        return _failure("INVALID_PAY_RULE", f"Unknown pay rule: {value!r}", field)


def coerce_pay_rule_start_day(value: Any, field: str = "") -> CoercionResult:
    """Day of month a monthly pay period opens on; 0 means unset."""
    result = coerce_int(value, field)
    if not result.success or result.value is None:
        return result
    if result.value == 0:
        return CoercionResult(success=True)
    if not 1 <= result.value <= MAX_PAY_PERIOD_START_DAY:
        return _failure(
            "INVALID_PAY_RULE",
            f"Pay period start day must be 1..{MAX_PAY_PERIOD_START_DAY}: {value!r}",
            field,
        )
    return result
