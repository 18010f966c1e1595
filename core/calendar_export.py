"""
core/calendar_export.py
────────────────────────────────────────────────────────────────────────
iCalendar (RFC 5545) rendering of foods as recurring events.

One VEVENT per food.  The RRULE comes from the same classification the
schedule expander uses, so a calendar app shows the food on the same
days the schedule does.  Dose / time progression cannot be expressed in
an RRULE and is summarised in the DESCRIPTION instead.
"""

from __future__ import annotations

from datetime import datetime, time, timedelta, timezone
from typing import Iterable

from core.frequency import classify
from core.labels import MEAL_TYPE_LABELS, describe_amount, describe_time
from core.models import FoodDescriptor
from core.progression import parse_clock

CRLF = "\r\n"
PRODID = "-//FoodCalendar//Food Schedule//EN"
UID_DOMAIN = "food-calendar"
DEFAULT_START = time(9, 0)
EVENT_LENGTH = timedelta(minutes=30)
REFRESH_INTERVAL = "PT1H"

_BYDAY = ("MO", "TU", "WE", "TH", "FR", "SA", "SU")


def escape_text(value: str) -> str:
    return (
        value.replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace(",", "\\,")
        .replace("\r\n", "\\n")
        .replace("\n", "\\n")
    )


def fold(line: str, limit: int = 75) -> str:
    """Split a content line into <=75-octet chunks joined by CRLF + space."""
    if len(line.encode("utf-8")) <= limit:
        return line
    chunks: list[str] = []
    current, size = "", 0
    for ch in line:
        n = len(ch.encode("utf-8"))
        # continuation lines lose one octet to the leading space
        room = limit if not chunks else limit - 1
        if size + n > room:
            chunks.append(current)
            current, size = "", 0
        current += ch
        size += n
    chunks.append(current)
    return (CRLF + " ").join(chunks)


def _utc_stamp(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def _local_stamp(moment: datetime) -> str:
    return moment.strftime("%Y%m%dT%H%M%S")


def recurrence_rule(food: FoodDescriptor) -> str | None:
    rule = classify(food.frequency, food.start_date)
    if rule.kind == "daily":
        return "FREQ=DAILY"
    if rule.kind == "interval":
        return f"FREQ=DAILY;INTERVAL={rule.interval}"
    if not rule.weekdays:
        return None
    days = ",".join(_BYDAY[d] for d in sorted(rule.weekdays))
    return f"FREQ=WEEKLY;BYDAY={days}"


def event_start(food: FoodDescriptor) -> datetime:
    minutes = parse_clock(food.start_time) if food.start_time else None
    start = datetime.combine(food.start_date, DEFAULT_START)
    if minutes is not None:
        start = datetime.combine(food.start_date, time(0, 0)) + timedelta(minutes=minutes % (24 * 60))
    return start


def describe(food: FoodDescriptor, footer: str | None = None) -> str:
    lines = []
    if food.instructions:
        lines.append(food.instructions)
    lines.append(f"Frequency: {food.frequency}")
    if food.meal_type and food.meal_type != "any":
        lines.append(f"Meal: {MEAL_TYPE_LABELS.get(food.meal_type, food.meal_type)}")
    amount = describe_amount(food)
    if amount:
        lines.append(f"Amount: {amount}")
    when = describe_time(food)
    if when:
        lines.append(f"Time: {when}")
    if footer:
        lines.extend(["", footer])
    return "\n".join(lines)


def render_event(
    food: FoodDescriptor,
    stamp: datetime,
    *,
    uid_suffix: str = "recurring",
    footer: str | None = None,
) -> list[str]:
    start = event_start(food)
    lines = [
        "BEGIN:VEVENT",
        f"UID:food-{food.id}-{uid_suffix}@{UID_DOMAIN}",
        f"DTSTAMP:{_utc_stamp(stamp)}",
        f"DTSTART:{_local_stamp(start)}",
        f"DTEND:{_local_stamp(start + EVENT_LENGTH)}",
        f"SUMMARY:{escape_text(food.name)}",
        f"DESCRIPTION:{escape_text(describe(food, footer))}",
        "CATEGORIES:Health,Food,Allergy",
        "STATUS:CONFIRMED",
        "TRANSP:TRANSPARENT",
    ]
    rrule = recurrence_rule(food)
    if rrule:
        lines.append(f"RRULE:{rrule}")
    lines.append("END:VEVENT")
    return lines


def render_calendar(
    foods: Iterable[FoodDescriptor],
    *,
    name: str = "Food Schedule",
    description: str = "Your personalized food schedule",
    live: bool = False,
    stamp: datetime | None = None,
) -> str:
    """Whole VCALENDAR document.  ``live`` adds refresh hints for subscriptions."""
    stamp = stamp or datetime.now(timezone.utc)
    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:{PRODID}",
        "CALSCALE:GREGORIAN",
        "METHOD:PUBLISH",
        f"X-WR-CALNAME:{escape_text(name)}",
        f"X-WR-CALDESC:{escape_text(description)}",
    ]
    if live:
        lines += [
            f"X-PUBLISHED-TTL:{REFRESH_INTERVAL}",
            f"REFRESH-INTERVAL;VALUE=DURATION:{REFRESH_INTERVAL}",
        ]
        suffix = "live"
        footer = "This event updates automatically when you modify your food schedule."
    else:
        suffix = "recurring"
        footer = "Recurring event. Update your food schedule in the app to change or cancel it."

    for food in foods:
        lines += render_event(food, stamp, uid_suffix=suffix, footer=footer)

    lines.append("END:VCALENDAR")
    return CRLF.join(fold(line) for line in lines) + CRLF
