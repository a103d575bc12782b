"""
Work-time arithmetic (``payroll_engines.worktime``).

Responsibility
--------------
Minute-level arithmetic on shift intervals: raw duration (with midnight
wrap), statutory unpaid-break deduction, night-window overlap and daily
overtime minutes.

Architecture position
---------------------
**Engines layer** -- pure functional core.  ZERO I/O, ZERO clock reads.

Invariants enforced
-------------------
* A shift whose end precedes its start ends on the next day, so raw
  duration is always in ``[0, 1440)``.
* Night minutes are computed in closed form and equal the per-minute
  count of ``t`` in ``[start, end)`` with ``t mod 1440`` inside the
  night window.
"""

from __future__ import annotations

from datetime import time

from payroll_kernel.domain.rates import StatutoryRates

MINUTES_PER_DAY = 24 * 60

_DEFAULT_RATES = StatutoryRates()


def minute_of_day(t: time) -> int:
    return t.hour * 60 + t.minute


def shift_interval(start: time, end: time) -> tuple[int, int]:
    """Return ``(start_minute, end_minute)`` with end pushed past midnight if needed."""
    start_min = minute_of_day(start)
    end_min = minute_of_day(end)
    if end_min < start_min:
        end_min += MINUTES_PER_DAY
    return start_min, end_min


def raw_minutes(start: time, end: time) -> int:
    start_min, end_min = shift_interval(start, end)
    return end_min - start_min


def break_minutes(raw: int, rates: StatutoryRates = _DEFAULT_RATES) -> int:
    """Unpaid break for a shift of *raw* minutes (0 / 30 / 60 by default)."""
    for minimum, deduction in rates.break_tiers:
        if raw >= minimum:
            return deduction
    return 0


def _overlap(a_start: int, a_end: int, b_start: int, b_end: int) -> int:
    return max(0, min(a_end, b_end) - max(a_start, b_start))


def night_minutes(start: time, end: time, rates: StatutoryRates = _DEFAULT_RATES) -> int:
    """Minutes of the shift inside the night window (22:00-06:00 by default).

    The shift interval lies within ``[0, 2880)``; the wrapped night
    window is intersected on the previous, same and next day.
    """
    start_min, end_min = shift_interval(start, end)
    total = 0
    for day in (-1, 0, 1):
        window_start = day * MINUTES_PER_DAY + rates.night_start_minute
        window_end = (day + 1) * MINUTES_PER_DAY + rates.night_end_minute
        total += _overlap(start_min, end_min, window_start, window_end)
    return total


def overtime_minutes(effective: int, rates: StatutoryRates = _DEFAULT_RATES) -> int:
    """Minutes worked beyond the daily threshold in a single shift."""
    return max(0, effective - rates.daily_overtime_threshold_minutes)
