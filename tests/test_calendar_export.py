# tests/test_calendar_export.py
from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from core.calendar_export import escape_text, fold, recurrence_rule, render_calendar
from core.labels import describe_amount, describe_time
from core.models import FOREVER, FoodDescriptor

STAMP = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


def _food(**kw) -> FoodDescriptor:
    base = dict(id=7, name="Peanut butter", instructions="Mix into oatmeal",
                frequency="Every day", start_date=date(2025, 1, 1))
    base.update(kw)
    return FoodDescriptor(**base)


def _unfold(text: str) -> list[str]:
    return text.replace("\r\n ", "").split("\r\n")


# ── RRULE mapping ───────────────────────────────────────────────────
@pytest.mark.parametrize(
    "freq, rule",
    [
        ("Every day", "FREQ=DAILY"),
        ("Every 3 days", "FREQ=DAILY"),
        ("Every other day", "FREQ=DAILY;INTERVAL=2"),
        ("3 times a week", "FREQ=WEEKLY;BYDAY=MO,WE,FR"),
        ("4 times a week", "FREQ=WEEKLY;BYDAY=MO,TU,TH,FR"),
        ("Once a week", "FREQ=WEEKLY;BYDAY=WE"),        # 2025-01-01 is a Wednesday
        ("9 times a week", None),
    ],
)
def test_recurrence_rule(freq, rule):
    assert recurrence_rule(_food(frequency=freq)) == rule


# ── text handling ───────────────────────────────────────────────────
def test_escape_text():
    assert escape_text("a,b;c\\d\ne") == "a\\,b\\;c\\\\d\\ne"


def test_fold_keeps_lines_short_and_reversible():
    line = "DESCRIPTION:" + "ü" * 100
    folded = fold(line)
    assert all(len(part.encode("utf-8")) <= 75 for part in folded.split("\r\n"))
    assert folded.replace("\r\n ", "") == line


# ── documents ───────────────────────────────────────────────────────
def test_export_document_shape():
    ics = render_calendar([_food(start_time="08:30")], stamp=STAMP)
    lines = _unfold(ics)

    assert ics.endswith("END:VCALENDAR\r\n")
    assert lines[0] == "BEGIN:VCALENDAR"
    assert "UID:food-7-recurring@food-calendar" in lines
    assert "DTSTAMP:20250101T120000Z" in lines
    assert "DTSTART:20250101T083000" in lines
    assert "DTEND:20250101T090000" in lines
    assert "RRULE:FREQ=DAILY" in lines
    assert "SUMMARY:Peanut butter" in lines
    assert not any(l.startswith("X-PUBLISHED-TTL") for l in lines)


def test_default_start_is_nine():
    lines = _unfold(render_calendar([_food()], stamp=STAMP))
    assert "DTSTART:20250101T090000" in lines


def test_live_feed_has_refresh_hints():
    lines = _unfold(render_calendar([_food()], live=True, stamp=STAMP))
    assert "X-PUBLISHED-TTL:PT1H" in lines
    assert "REFRESH-INTERVAL;VALUE=DURATION:PT1H" in lines
    assert "UID:food-7-live@food-calendar" in lines


def test_description_mentions_progression():
    food = _food(
        starting_amount="1 teaspoon",
        target_amount="3 teaspoon",
        progression_type="buildup",
        progression_duration=14,
        meal_type="breakfast",
    )
    desc = next(l for l in _unfold(render_calendar([food], stamp=STAMP)) if l.startswith("DESCRIPTION:"))
    assert "Frequency: Every day" in desc
    assert "Meal: Breakfast" in desc
    assert "1 teaspoon → 3 teaspoon\\, build up gradually over 14 days" in desc


def test_empty_calendar():
    lines = _unfold(render_calendar([], stamp=STAMP))
    assert "BEGIN:VEVENT" not in lines


# ── labels ──────────────────────────────────────────────────────────
def test_describe_amount_variants():
    assert describe_amount(_food()) is None
    assert describe_amount(_food(starting_amount="2 g")) == "2 g"
    forever = _food(starting_amount="1 g", target_amount="5 g",
                    progression_type="reduction", progression_duration=FOREVER)
    assert describe_amount(forever) == "1 g → 5 g, reduce gradually, no end date"


def test_describe_time_variants():
    assert describe_time(_food()) is None
    assert describe_time(_food(start_time="08:00")) == "at 08:00"
    later = _food(start_time="08:00", time_progression="later", time_progression_amount=30)
    assert describe_time(later) == "from 08:00, later each day by 30 min"
