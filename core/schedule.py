"""Expand + annotate in one call: the unit of work behind schedule generation."""

from __future__ import annotations

from datetime import date

from core.frequency import expand
from core.models import FoodDescriptor, Occurrence
from core.progression import annotate


def build_schedule(food: FoodDescriptor, start_date: date, end_date: date) -> list[Occurrence]:
    return annotate(expand(food.frequency, start_date, end_date), food)
