"""
Pay-policy resolution (``payroll_engines.policy``).

Resolves the effective policy for one employee from three layers:
a per-employee ``PolicyOverride`` field (when not None), the store's
``StoreSettings`` field (when not None), then the hardcoded default.
Night, overtime and holiday-work premiums additionally require the
resolved five-or-more-employees flag.
"""

from __future__ import annotations

from collections.abc import Iterable

from payroll_kernel.domain.records import PolicyOverride, ResolvedPolicy, StoreSettings
from payroll_kernel.domain.values import flag, signed_won
from payroll_kernel.logging_config import get_logger

logger = get_logger("engines.policy")

DEFAULT_FLAGS: dict[str, bool] = {
    "is_five_plus": False,
    "pay_weekly": True,
    "pay_night": False,
    "pay_overtime": False,
    "pay_holiday": False,
    "auto_deduct_break": True,
    "no_tax_deduction": False,
}


def _resolve_flag(
    name: str,
    store: StoreSettings | None,
    override: PolicyOverride | None,
) -> bool:
    return flag(
        getattr(override, name, None),
        getattr(store, name, None),
        default=DEFAULT_FLAGS[name],
    )


def resolve_policy(
    store: StoreSettings | None,
    override: PolicyOverride | None = None,
) -> ResolvedPolicy:
    """Apply override > store > default precedence to every policy field."""
    resolved = {name: _resolve_flag(name, store, override) for name in DEFAULT_FLAGS}
    five_plus = resolved["is_five_plus"]

    monthly_override = None
    adjustment = 0
    if override is not None:
        if override.monthly_override is not None:
            monthly_override = max(0, signed_won(override.monthly_override))
        adjustment = signed_won(override.adjustment)

    return ResolvedPolicy(
        is_five_plus=five_plus,
        pay_weekly=resolved["pay_weekly"],
        pay_night=five_plus and resolved["pay_night"],
        pay_overtime=five_plus and resolved["pay_overtime"],
        pay_holiday=five_plus and resolved["pay_holiday"],
        auto_deduct_break=resolved["auto_deduct_break"],
        no_tax_deduction=resolved["no_tax_deduction"],
        monthly_override=monthly_override,
        adjustment=adjustment,
        override_applied=override is not None and override.is_applied,
    )


def index_overrides(overrides: Iterable[PolicyOverride] | None) -> dict[str, PolicyOverride]:
    """Map employee id to its override; the first override per employee wins."""
    index: dict[str, PolicyOverride] = {}
    for override in overrides or ():
        if override.employee_id in index:
            logger.warning(
                "duplicate_policy_override_ignored",
                extra={"employee_id": override.employee_id},
            )
            continue
        index[override.employee_id] = override
    return index
