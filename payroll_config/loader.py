"""
Rate-set Loader (``payroll_config.loader``).

Responsibility
--------------
Loads statutory rate-set YAML files and parses them into
``StatutoryRates`` value objects.  Callers go through
``payroll_config.get_statutory_rates()``; this module is the parsing
tooling underneath it.

Architecture position
---------------------
**Config layer** -- infrastructure tooling.  Depends on
``payroll_kernel.domain`` for the target type and on PyYAML.  Engines
never import this module; they receive the parsed ``StatutoryRates``.

Invariants enforced
-------------------
* Rates are parsed through ``str`` into ``Decimal`` so YAML floats never
  leak binary rounding into payroll arithmetic.
* Every parse failure surfaces as ``InvalidRateSetError`` naming the
  source file; no silent defaults for ``version`` or ``effective_from``.
* ``compute_checksum`` is a deterministic SHA-256 over the canonical
  JSON form of the raw document.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML / missing keys / bad values  -> ``InvalidRateSetError``.
"""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass
from datetime import date, time
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import yaml

from payroll_kernel.domain.rates import StatutoryRates, TaxBracket
from payroll_kernel.exceptions import InvalidRateSetError

_DEFAULTS = StatutoryRates()


@dataclass(frozen=True)
class RateSet:
    """A parsed rate-set file with its effective window."""

    rates: StatutoryRates
    effective_from: date
    effective_to: date | None
    checksum: str
    source: str

    def covers(self, as_of: date) -> bool:
        if as_of < self.effective_from:
            return False
        return self.effective_to is None or as_of <= self.effective_to


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def compute_checksum(data: dict[str, Any]) -> str:
    """SHA-256 of the canonical JSON serialization of ``data``."""
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()


def parse_date(value: Any) -> date:
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value)
    raise ValueError(f"Cannot parse date from {value!r}")


def parse_decimal(value: Any, default: Decimal) -> Decimal:
    if value is None:
        return default
    if isinstance(value, bool):
        raise ValueError(f"Cannot parse rate from {value!r}")
    try:
        return Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"Cannot parse rate from {value!r}") from exc


def parse_minute_of_day(value: Any, default: int) -> int:
    """Accept ``"22:00"`` style strings or an integer minute of day."""
    if value is None:
        return default
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    parsed = time.fromisoformat(str(value))
    return parsed.hour * 60 + parsed.minute


def parse_brackets(rows: Any) -> tuple[TaxBracket, ...]:
    if rows is None:
        return _DEFAULTS.income_tax_brackets
    return tuple(
        TaxBracket(
            lower=int(row["lower"]),
            base_tax=int(row["base_tax"]),
            rate=parse_decimal(row["rate"], Decimal(0)),
        )
        for row in rows
    )


def parse_break_tiers(rows: Any) -> tuple[tuple[int, int], ...]:
    if rows is None:
        return _DEFAULTS.break_tiers
    return tuple((int(row["min_minutes"]), int(row["break_minutes"])) for row in rows)


def parse_rates(data: dict[str, Any]) -> StatutoryRates:
    """Build ``StatutoryRates``; absent sections keep the built-in values."""
    insurance = data.get("insurance") or {}
    withholding = data.get("withholding") or {}
    premiums = data.get("premiums") or {}
    weekly = data.get("weekly_holiday") or {}
    estimator = data.get("estimator") or {}

    return StatutoryRates(
        version=str(data["version"]),
        pension=parse_decimal(insurance.get("pension"), _DEFAULTS.pension),
        health=parse_decimal(insurance.get("health"), _DEFAULTS.health),
        long_term_care=parse_decimal(
            insurance.get("long_term_care"), _DEFAULTS.long_term_care
        ),
        employment=parse_decimal(insurance.get("employment"), _DEFAULTS.employment),
        freelance_income_tax=parse_decimal(
            withholding.get("freelance_income_tax"), _DEFAULTS.freelance_income_tax
        ),
        local_tax=parse_decimal(withholding.get("local_tax"), _DEFAULTS.local_tax),
        income_tax_brackets=parse_brackets(withholding.get("income_tax_brackets")),
        premium_rate=parse_decimal(premiums.get("rate"), _DEFAULTS.premium_rate),
        night_start_minute=parse_minute_of_day(
            premiums.get("night_start"), _DEFAULTS.night_start_minute
        ),
        night_end_minute=parse_minute_of_day(
            premiums.get("night_end"), _DEFAULTS.night_end_minute
        ),
        daily_overtime_threshold_minutes=int(
            premiums.get(
                "daily_overtime_threshold_minutes",
                _DEFAULTS.daily_overtime_threshold_minutes,
            )
        ),
        weekly_threshold_minutes=int(
            weekly.get("threshold_minutes", _DEFAULTS.weekly_threshold_minutes)
        ),
        weekly_cap_minutes=int(weekly.get("cap_minutes", _DEFAULTS.weekly_cap_minutes)),
        weekly_paid_hours=int(weekly.get("paid_hours", _DEFAULTS.weekly_paid_hours)),
        break_tiers=parse_break_tiers(data.get("breaks")),
        estimator_freelance_rate=parse_decimal(
            estimator.get("freelance_rate"), _DEFAULTS.estimator_freelance_rate
        ),
        estimator_four_insurance_rate=parse_decimal(
            estimator.get("four_insurance_rate"),
            _DEFAULTS.estimator_four_insurance_rate,
        ),
    )


def parse_rate_set(data: dict[str, Any], source: str) -> RateSet:
    """
    Parse a raw rate-set document.

    Raises:
        InvalidRateSetError: on missing required keys, unparseable values,
            or rates that fail ``StatutoryRates`` consistency checks.
    """
    try:
        rates = parse_rates(data)
        effective_from = parse_date(data["effective_from"])
        effective_to = (
            parse_date(data["effective_to"]) if data.get("effective_to") else None
        )
    except KeyError as exc:
        raise InvalidRateSetError(source, f"missing key {exc.args[0]!r}") from exc
    except (TypeError, ValueError) as exc:
        raise InvalidRateSetError(source, str(exc)) from exc

    if effective_to is not None and effective_to < effective_from:
        raise InvalidRateSetError(source, "effective_to precedes effective_from")

    return RateSet(
        rates=rates,
        effective_from=effective_from,
        effective_to=effective_to,
        checksum=compute_checksum(data),
        source=source,
    )


def load_rate_set(path: Path) -> RateSet:
    try:
        data = load_yaml_file(path)
    except yaml.YAMLError as exc:
        raise InvalidRateSetError(str(path), f"malformed YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise InvalidRateSetError(str(path), "top level must be a mapping")
    return parse_rate_set(data, str(path))


def load_rate_sets(config_dir: Path) -> tuple[RateSet, ...]:
    """Every ``*.yaml`` rate set in ``config_dir``, ordered by effective_from."""
    sets = [load_rate_set(path) for path in sorted(config_dir.glob("*.yaml"))]
    return tuple(sorted(sets, key=lambda s: s.effective_from))
