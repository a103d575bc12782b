"""
Values -- explicit default-resolution for optional payroll inputs.

Responsibility:
    Provides the single coalescing step that turns optional, possibly
    missing record fields into the concrete values the engines compute
    with.  Engines call these helpers at the point of use instead of
    scattering truthiness checks.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    - Money is integer won.  Missing, negative or non-numeric amounts
      coalesce to 0.
    - Policy flags resolve to strict ``bool``; the first non-None
      candidate wins, otherwise the supplied default.
    - Floors toward zero on non-negative operands use exact integer or
      Decimal arithmetic, never binary floats.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any


def won(value: Any) -> int:
    """Coalesce an optional amount to a non-negative integer won value."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value if value > 0 else 0
    if isinstance(value, Decimal):
        return int(value) if value > 0 else 0
    return 0


def signed_won(value: Any) -> int:
    """Coalesce an optional signed amount (bonus or deduction) to int."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, (int, Decimal)):
        return int(value)
    return 0


def flag(*candidates: bool | None, default: bool) -> bool:
    """Return the first non-None candidate as a strict bool."""
    for candidate in candidates:
        if candidate is not None:
            return bool(candidate)
    return default


def floor_to_ten(amount: Decimal | int) -> int:
    """Truncate a non-negative amount to the nearest 10 won below."""
    if amount <= 0:
        return 0
    return int(Decimal(amount) // 10) * 10


def prorate(minutes: int, wage: int, rate: Decimal = Decimal("1")) -> int:
    """floor(minutes / 60 * wage * rate) computed exactly."""
    if minutes <= 0 or wage <= 0 or rate <= 0:
        return 0
    return int((Decimal(minutes) * wage * rate) // 60)
