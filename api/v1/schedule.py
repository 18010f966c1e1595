# api/v1/schedule.py
from __future__ import annotations

from datetime import date, datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from services.db import ScheduleEntry, get_session
from api.v1.schemas import ScheduleEntryCreate, ScheduleEntryOut, ScheduleEntryUpdate
from api.v1.foods import load_food
from api.v1.users import require_user

router = APIRouter()


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


async def _load_entry(db: AsyncSession, user_id: int, entry_id: int) -> ScheduleEntry:
    entry = (
        await db.execute(
            select(ScheduleEntry).where(
                ScheduleEntry.id == entry_id, ScheduleEntry.user_id == user_id
            )
        )
    ).scalar_one_or_none()
    if entry is None:
        raise HTTPException(status_code=404, detail="Schedule entry not found")
    return entry


# ───────────────────────── read ─────────────────────────────
@router.get("/{user_id}/schedule", response_model=list[ScheduleEntryOut])
async def list_entries(
    user_id: int,
    day: date | None = Query(None, alias="date"),
    start_date: date | None = None,
    end_date: date | None = None,
    db: AsyncSession = Depends(get_session),
) -> list[ScheduleEntryOut]:
    """Entries for one day, a range (both ends inclusive) or everything."""
    await require_user(user_id, db)
    q = select(ScheduleEntry).where(ScheduleEntry.user_id == user_id)
    if start_date and end_date:
        q = q.where(ScheduleEntry.date >= start_date, ScheduleEntry.date <= end_date)
    elif day:
        q = q.where(ScheduleEntry.date == day)
    rows = (
        await db.execute(q.order_by(ScheduleEntry.date, ScheduleEntry.food_id))
    ).scalars().all()
    return [ScheduleEntryOut.model_validate(e, from_attributes=True) for e in rows]


# ───────────────────────── create (manual) ──────────────────
@router.post(
    "/{user_id}/schedule",
    response_model=ScheduleEntryOut,
    status_code=status.HTTP_201_CREATED,
)
async def create_entry(
    user_id: int,
    body: ScheduleEntryCreate,
    db: AsyncSession = Depends(get_session),
) -> ScheduleEntryOut:
    await load_food(db, user_id, body.food_id)
    payload = body.model_dump()
    if payload["is_completed"] and not payload["completed_at"]:
        payload["completed_at"] = _now_iso()

    entry = ScheduleEntry(user_id=user_id, **payload)
    db.add(entry)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(
            status_code=409, detail="Food is already scheduled on that date"
        )
    await db.refresh(entry)
    return ScheduleEntryOut.model_validate(entry, from_attributes=True)


# ───────────────────────── update ───────────────────────────
@router.patch("/{user_id}/schedule/{entry_id}", response_model=ScheduleEntryOut)
async def update_entry(
    user_id: int,
    entry_id: int,
    body: ScheduleEntryUpdate,
    db: AsyncSession = Depends(get_session),
) -> ScheduleEntryOut:
    entry = await _load_entry(db, user_id, entry_id)
    changes = body.model_dump(exclude_unset=True)

    if "is_completed" in changes:
        if changes["is_completed"]:
            changes["completed_at"] = changes.get("completed_at") or entry.completed_at or _now_iso()
        else:
            changes["completed_at"] = None

    for key, value in changes.items():
        setattr(entry, key, value)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(
            status_code=409, detail="Food is already scheduled on that date"
        )
    await db.refresh(entry)
    return ScheduleEntryOut.model_validate(entry, from_attributes=True)


# ───────────────────────── delete ───────────────────────────
@router.delete(
    "/{user_id}/schedule/date/{day}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Clear every entry on one date",
)
async def clear_date(
    user_id: int,
    day: date,
    db: AsyncSession = Depends(get_session),
) -> Response:
    await require_user(user_id, db)
    await db.execute(
        delete(ScheduleEntry).where(
            ScheduleEntry.user_id == user_id, ScheduleEntry.date == day
        )
    )
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{user_id}/schedule/{entry_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_entry(
    user_id: int,
    entry_id: int,
    db: AsyncSession = Depends(get_session),
) -> Response:
    entry = await _load_entry(db, user_id, entry_id)
    await db.delete(entry)
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
