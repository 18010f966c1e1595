"""
core/frequency.py
────────────────────────────────────────────────────────────────────────
Turns a free-text frequency ("Every day", "3 times a week", "Every 2 days")
into the concrete calendar dates a food falls on.

Classification is first-match-wins, in this order:

1. "daily" / "every day"                     → every date
2. "weekly" / "once a week"                  → start date's weekday
3. "... times per week" / "x week" / "times a week"
                                             → fixed weekday set (table)
4. "every 2 days" / "every other day"        → even day offsets from start
5. anything else                             → every date
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import date, timedelta

_LOG = logging.getLogger(__name__)

# Python weekday(): Monday=0 … Sunday=6
ALL_DAYS = frozenset(range(7))

# times-per-week → weekday set.  1 is resolved against the start date.
WEEKDAY_TABLE: dict[int, frozenset[int]] = {
    7: ALL_DAYS,
    6: frozenset({0, 1, 2, 3, 4, 5}),   # all but Sunday
    5: frozenset({0, 1, 2, 3, 4}),      # Mon–Fri
    4: frozenset({0, 1, 3, 4}),         # Mon, Tue, Thu, Fri
    3: frozenset({0, 2, 4}),            # Mon, Wed, Fri
    2: frozenset({1, 4}),               # Tue, Fri
}

DEFAULT_TIMES_PER_WEEK = 3

_TIMES_PER_WEEK_MARKERS = ("times per week", "x week", "times a week")
_EVERY_OTHER_DAY_MARKERS = ("every 2 days", "every other day")
_FIRST_INT = re.compile(r"(\d+)")


@dataclass(frozen=True)
class FrequencyRule:
    """Result of classifying a frequency string.

    kind is one of ``daily``, ``weekdays`` or ``interval``.
    """

    kind: str
    weekdays: frozenset[int] = field(default_factory=frozenset)
    interval: int = 1

    def matches(self, day: date, start_date: date) -> bool:
        if self.kind == "weekdays":
            return day.weekday() in self.weekdays
        if self.kind == "interval":
            return (day - start_date).days % self.interval == 0
        return True


def classify(frequency_text: str, start_date: date) -> FrequencyRule:
    freq = frequency_text.lower()

    if freq in ("daily", "every day"):
        return FrequencyRule("daily")

    if freq in ("weekly", "once a week"):
        return FrequencyRule("weekdays", frozenset({start_date.weekday()}))

    if any(marker in freq for marker in _TIMES_PER_WEEK_MARKERS):
        m = _FIRST_INT.search(freq)
        times = int(m.group(1)) if m else DEFAULT_TIMES_PER_WEEK
        if times == 1:
            return FrequencyRule("weekdays", frozenset({start_date.weekday()}))
        # counts outside the table select no days at all
        return FrequencyRule("weekdays", WEEKDAY_TABLE.get(times, frozenset()))

    if any(marker in freq for marker in _EVERY_OTHER_DAY_MARKERS):
        return FrequencyRule("interval", interval=2)

    _LOG.debug("unrecognised frequency %r – treating as every day", frequency_text)
    return FrequencyRule("daily")


def expand(frequency_text: str, start_date: date, end_date: date) -> list[date]:
    """All dates in [start_date, end_date] on which the frequency fires, ascending."""
    rule = classify(frequency_text, start_date)
    days: list[date] = []
    day = start_date
    while day <= end_date:
        if rule.matches(day, start_date):
            days.append(day)
        day += timedelta(days=1)
    return days
