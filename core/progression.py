"""
core/progression.py
────────────────────────────────────────────────────────────────────────
Per-occurrence dose amount and time-of-day for one food.

Progress coordinates are the 0-based occurrence number and the total
number of occurrences in the expanded sequence, so the whole sequence has
to exist before any single value can be computed.

Amount curves (p = normalised progress, 0 … 1):

* buildup    start → target, linear
* reduction  start → target, linear (same line, descending intent)
* custom     ramp to the midpoint over the first third, hold the
             midpoint over the middle third, ramp to target in the last
* static     starting amount unchanged

Missing or partial inputs mean "no progression": the raw starting
amount / start time is passed through.  Nothing in here raises.
"""

from __future__ import annotations

import logging
import math
import re
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Sequence

from core.models import FoodDescriptor, Occurrence

_LOG = logging.getLogger(__name__)

_LEADING_NUMBER = re.compile(r"^[\d.]+")
_FLOAT_PREFIX = re.compile(r"\d*\.?\d+")

MINUTES_PER_DAY = 24 * 60

# custom curve: three bands of width 0.33
_BAND = 0.33
_PLATEAU_END = 0.67

_DECIMAL_PRECISION = 400


def parse_magnitude(amount: str) -> float:
    """Leading numeric part of an amount such as "0.5 teaspoon" (1 if none)."""
    m = _LEADING_NUMBER.match(amount)
    if not m:
        return 1.0
    num = _FLOAT_PREFIX.match(m.group(0))
    if not num:
        return 1.0
    return float(num.group(0))


def progress(occurrence_number: int, total_occurrences: int) -> float:
    return min(occurrence_number / max(total_occurrences - 1, 1), 1.0)


def custom_curve(start: float, target: float, p: float) -> float:
    span = target - start
    if p < _BAND:
        return start + span * 0.5 * (p / _BAND)
    if p < _PLATEAU_END:
        return start + span * 0.5
    return start + span * (0.5 + 0.5 * (p - _PLATEAU_END) / _BAND)


def _two_places(value: float) -> str:
    if not math.isfinite(value):
        return f"{value:.2f}"
    # half-up on the exact binary value; a float has at most 309 integer digits
    with localcontext() as ctx:
        ctx.prec = _DECIMAL_PRECISION
        return str(Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def parse_clock(text: str) -> int | None:
    """HH:MM → minutes since midnight, or None when it does not parse."""
    parts = text.split(":")
    if len(parts) != 2:
        return None
    try:
        hours, minutes = int(parts[0]), int(parts[1])
    except ValueError:
        return None
    return hours * 60 + minutes


def format_clock(total_minutes: int) -> str:
    total_minutes %= MINUTES_PER_DAY
    return f"{total_minutes // 60:02d}:{total_minutes % 60:02d}"


# ──────────────────────────────────────────────────────────────────────
#  Calculator
# ──────────────────────────────────────────────────────────────────────
class ProgressionCalculator:
    def __init__(self, food: FoodDescriptor) -> None:
        self._food = food

    # --------------- amount -----------------------------------------
    def has_amount_progression(self) -> bool:
        f = self._food
        if not (f.starting_amount and f.target_amount and f.progression_type and f.progression_duration):
            return False
        return f.progression_type != "static"

    def amount_at(self, occurrence_number: int, total_occurrences: int) -> str | None:
        f = self._food
        if not self.has_amount_progression():
            return f.starting_amount or None

        start = parse_magnitude(f.starting_amount)
        target = parse_magnitude(f.target_amount)
        p = progress(occurrence_number, total_occurrences)

        if f.progression_type == "buildup":
            value = start + (target - start) * p
        elif f.progression_type == "reduction":
            value = start - (start - target) * p
        elif f.progression_type == "custom":
            value = custom_curve(start, target, p)
        else:
            _LOG.debug("unknown progression type %r, holding start value", f.progression_type)
            value = start

        # swap the number, keep the unit; no leading number → unchanged
        return _LEADING_NUMBER.sub(_two_places(value), f.starting_amount, count=1)

    # --------------- time -------------------------------------------
    def has_time_progression(self) -> bool:
        f = self._food
        if not (f.start_time and f.time_progression and f.time_progression_amount):
            return False
        return f.time_progression != "static"

    def time_at(self, occurrence_number: int) -> str | None:
        f = self._food
        if not self.has_time_progression():
            return f.start_time or None

        minutes = parse_clock(f.start_time)
        try:
            step = int(f.time_progression_amount)
        except (TypeError, ValueError):
            step = None
        if minutes is None or step is None:
            return f.start_time

        if f.time_progression == "later":
            minutes += step * occurrence_number
        elif f.time_progression == "earlier":
            minutes -= step * occurrence_number
        return format_clock(minutes)


def annotate(occurrences: Sequence[date], food: FoodDescriptor) -> list[Occurrence]:
    """Attach occurrence number, amount and time to an expanded date list."""
    calc = ProgressionCalculator(food)
    total = len(occurrences)
    return [
        Occurrence(
            food_id=food.id,
            date=day,
            occurrence_number=i,
            calculated_amount=calc.amount_at(i, total),
            calculated_time=calc.time_at(i),
        )
        for i, day in enumerate(occurrences)
    ]
