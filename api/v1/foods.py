# api/v1/foods.py
from __future__ import annotations

import logging
from datetime import date, timedelta

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from core.models import FoodDescriptor, Occurrence
from core.schedule import build_schedule
from services.db import Food, ScheduleEntry, get_session
from services.schedule_store import PersistResult, generate_for_food
from api.v1.schemas import (
    DateRange,
    FoodCreate,
    FoodOut,
    FoodUpdate,
    GenerateResponse,
    ScheduleEntryOut,
)
from api.v1.users import require_user

_LOG = logging.getLogger(__name__)

router = APIRouter()


# ───────────────────────── helpers ──────────────────────────
async def load_food(db: AsyncSession, user_id: int, food_id: int) -> Food:
    food = (
        await db.execute(
            select(Food).where(Food.id == food_id, Food.user_id == user_id)
        )
    ).scalar_one_or_none()
    if food is None:
        raise HTTPException(status_code=404, detail="Food not found")
    return food


def check_range(start_date: date, end_date: date) -> None:
    """Reject ranges the server should not spend time on.

    An inverted range is *not* rejected here: expansion simply yields nothing.
    """
    if (end_date - start_date).days > settings.max_range_days:
        raise HTTPException(
            status_code=400,
            detail=f"Date range longer than {settings.max_range_days} days",
        )


def _generated(result: PersistResult) -> GenerateResponse:
    return GenerateResponse(
        created=len(result.created),
        skipped=len(result.skipped),
        entries=[ScheduleEntryOut.model_validate(e, from_attributes=True) for e in result.created],
    )


# ───────────────────────── list / read ──────────────────────
@router.get("/{user_id}/foods", response_model=list[FoodOut])
async def list_foods(
    user_id: int,
    db: AsyncSession = Depends(get_session),
) -> list[FoodOut]:
    await require_user(user_id, db)
    rows = (
        await db.execute(
            select(Food)
            .where(Food.user_id == user_id, Food.is_active.is_(True))
            .order_by(Food.id)
        )
    ).scalars().all()
    return [FoodOut.model_validate(f, from_attributes=True) for f in rows]


@router.get("/{user_id}/foods/{food_id}", response_model=FoodOut)
async def get_food(
    user_id: int,
    food_id: int,
    db: AsyncSession = Depends(get_session),
) -> FoodOut:
    food = await load_food(db, user_id, food_id)
    return FoodOut.model_validate(food, from_attributes=True)


# ───────────────────────── create ───────────────────────────
@router.post(
    "/{user_id}/foods",
    response_model=FoodOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create a food and (by default) schedule its first horizon",
)
async def create_food(
    user_id: int,
    body: FoodCreate,
    db: AsyncSession = Depends(get_session),
) -> FoodOut:
    await require_user(user_id, db)

    food = Food(user_id=user_id, is_active=True, **body.model_dump(exclude={"generate"}))
    db.add(food)
    await db.commit()
    await db.refresh(food)

    if body.generate:
        end = food.start_date + timedelta(days=settings.schedule_horizon_days)
        await generate_for_food(db, food, food.start_date, end)

    return FoodOut.model_validate(food, from_attributes=True)


# ───────────────────────── update ───────────────────────────
@router.patch("/{user_id}/foods/{food_id}", response_model=FoodOut)
async def update_food(
    user_id: int,
    food_id: int,
    body: FoodUpdate,
    db: AsyncSession = Depends(get_session),
) -> FoodOut:
    food = await load_food(db, user_id, food_id)
    for key, value in body.model_dump(exclude_unset=True).items():
        setattr(food, key, value)
    await db.commit()
    await db.refresh(food)
    return FoodOut.model_validate(food, from_attributes=True)


# ───────────────────────── delete (soft) ────────────────────
@router.delete(
    "/{user_id}/foods/{food_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Deactivate a food and drop its schedule entries",
)
async def delete_food(
    user_id: int,
    food_id: int,
    db: AsyncSession = Depends(get_session),
) -> Response:
    food = await load_food(db, user_id, food_id)
    food.is_active = False
    await db.execute(
        delete(ScheduleEntry).where(
            ScheduleEntry.food_id == food_id, ScheduleEntry.user_id == user_id
        )
    )
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ───────────────────────── schedule generation ──────────────
@router.post(
    "/{user_id}/foods/{food_id}/generate-schedule",
    response_model=GenerateResponse,
    summary="Expand the food's frequency over a range and store the entries",
)
async def generate_schedule(
    user_id: int,
    food_id: int,
    body: DateRange,
    db: AsyncSession = Depends(get_session),
) -> GenerateResponse:
    food = await load_food(db, user_id, food_id)
    check_range(body.start_date, body.end_date)
    result = await generate_for_food(db, food, body.start_date, body.end_date)
    _LOG.info("generated schedule for food %s: %d new", food_id, len(result.created))
    return _generated(result)


@router.post(
    "/{user_id}/foods/{food_id}/preview",
    response_model=list[Occurrence],
    summary="Compute occurrences for a range without storing them",
)
async def preview_schedule(
    user_id: int,
    food_id: int,
    body: DateRange,
    db: AsyncSession = Depends(get_session),
) -> list[Occurrence]:
    food = await load_food(db, user_id, food_id)
    check_range(body.start_date, body.end_date)
    descriptor = FoodDescriptor.model_validate(food, from_attributes=True)
    return build_schedule(descriptor, body.start_date, body.end_date)


@router.get(
    "/{user_id}/foods/{food_id}/schedule",
    response_model=list[ScheduleEntryOut],
)
async def food_schedule(
    user_id: int,
    food_id: int,
    db: AsyncSession = Depends(get_session),
) -> list[ScheduleEntryOut]:
    await load_food(db, user_id, food_id)
    rows = (
        await db.execute(
            select(ScheduleEntry)
            .where(ScheduleEntry.food_id == food_id, ScheduleEntry.user_id == user_id)
            .order_by(ScheduleEntry.date)
        )
    ).scalars().all()
    return [ScheduleEntryOut.model_validate(e, from_attributes=True) for e in rows]
