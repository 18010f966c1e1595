"""
services/schedule_store.py
────────────────────────────────────────────────────────────────────────
Persist generated occurrences as schedule_entries rows.

(food_id, date) is unique.  Generation is best-effort: a date that already
has an entry is skipped with a warning instead of failing the batch.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.models import FoodDescriptor, Occurrence
from core.schedule import build_schedule
from services.db import Food, ScheduleEntry

_LOG = logging.getLogger(__name__)


@dataclass
class PersistResult:
    created: list[ScheduleEntry] = field(default_factory=list)
    skipped: list[date] = field(default_factory=list)


async def persist_occurrences(
    db: AsyncSession,
    user_id: int,
    occurrences: Iterable[Occurrence],
) -> PersistResult:
    occurrences = list(occurrences)
    result = PersistResult()
    if not occurrences:
        return result

    food_ids = sorted({o.food_id for o in occurrences})
    days = [o.date for o in occurrences]
    rows = (
        await db.execute(
            select(ScheduleEntry.food_id, ScheduleEntry.date).where(
                ScheduleEntry.food_id.in_(food_ids),
                ScheduleEntry.date >= min(days),
                ScheduleEntry.date <= max(days),
            )
        )
    ).all()
    existing = {(food_id, day) for food_id, day in rows}

    for occ in occurrences:
        if (occ.food_id, occ.date) in existing:
            _LOG.warning("skipping duplicate entry for food %s on %s", occ.food_id, occ.date)
            result.skipped.append(occ.date)
            continue

        entry = ScheduleEntry(
            user_id=user_id,
            food_id=occ.food_id,
            date=occ.date,
            is_completed=False,
            calculated_amount=occ.calculated_amount,
            calculated_time=occ.calculated_time,
            occurrence_number=occ.occurrence_number,
        )
        # a concurrent writer can still win the race for the same row
        try:
            async with db.begin_nested():
                db.add(entry)
        except IntegrityError:
            _LOG.warning("skipping conflicting entry for food %s on %s", occ.food_id, occ.date)
            result.skipped.append(occ.date)
            continue
        result.created.append(entry)

    await db.commit()
    _LOG.info(
        "schedule persisted for user %s: %d created, %d skipped",
        user_id, len(result.created), len(result.skipped),
    )
    return result


async def generate_for_food(
    db: AsyncSession,
    food: Food,
    start_date: date,
    end_date: date,
) -> PersistResult:
    """Expand + annotate one food over a range and store the result."""
    descriptor = FoodDescriptor.model_validate(food, from_attributes=True)
    occurrences = build_schedule(descriptor, start_date, end_date)
    return await persist_occurrences(db, food.user_id, occurrences)
