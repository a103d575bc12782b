"""
Boundary DTOs shared across layers.

``ValidationError`` is the value-level error representation produced by
the ingestion mappers and collected by the service layer.  It is data,
not an exception; strict callers wrap a batch of them in
``payroll_kernel.exceptions.RecordValidationError``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ValidationError:
    """
    A single validation error.

    Contract:
        Carries a machine-readable code, human-readable message, optional
        field name, and optional details dict (record type, record id).

    Non-goals:
        - Does NOT raise -- it IS the error representation.
    """

    code: str
    message: str
    field: str | None = None
    details: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "field": self.field,
            "details": self.details,
        }
