# api/v1/calendar.py
from __future__ import annotations

import logging
from datetime import date

import jwt
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.calendar_export import render_calendar
from core.models import FoodDescriptor
from services.auth import create_feed_token, verify_feed_token
from services.db import Food, ScheduleEntry, get_session
from api.v1.schemas import FeedToken
from api.v1.users import require_user

_LOG = logging.getLogger(__name__)

router = APIRouter()

_ICS_MEDIA_TYPE = "text/calendar; charset=utf-8"


async def _active_foods(db: AsyncSession, user_id: int) -> list[Food]:
    return list(
        (
            await db.execute(
                select(Food)
                .where(Food.user_id == user_id, Food.is_active.is_(True))
                .order_by(Food.id)
            )
        ).scalars().all()
    )


def _descriptors(foods: list[Food]) -> list[FoodDescriptor]:
    return [FoodDescriptor.model_validate(f, from_attributes=True) for f in foods]


# ───────────────────────── one-off export ───────────────────
@router.get(
    "/users/{user_id}/calendar/export",
    response_class=Response,
    summary="Download an .ics file with one recurring event per scheduled food",
)
async def export_calendar(
    user_id: int,
    start_date: date,
    end_date: date,
    db: AsyncSession = Depends(get_session),
) -> Response:
    await require_user(user_id, db)
    if end_date < start_date:
        raise HTTPException(status_code=400, detail="end_date is before start_date")

    scheduled_ids = set(
        (
            await db.execute(
                select(ScheduleEntry.food_id).where(
                    ScheduleEntry.user_id == user_id,
                    ScheduleEntry.date >= start_date,
                    ScheduleEntry.date <= end_date,
                )
            )
        ).scalars().all()
    )
    foods = [f for f in await _active_foods(db, user_id) if f.id in scheduled_ids]

    body = render_calendar(_descriptors(foods))
    return Response(
        content=body,
        media_type=_ICS_MEDIA_TYPE,
        headers={"Content-Disposition": 'attachment; filename="food-schedule.ics"'},
    )


# ───────────────────────── live subscription ────────────────
@router.post(
    "/users/{user_id}/calendar/token",
    response_model=FeedToken,
    status_code=status.HTTP_201_CREATED,
)
async def issue_feed_token(
    user_id: int,
    db: AsyncSession = Depends(get_session),
) -> FeedToken:
    await require_user(user_id, db)
    token, expires_at = create_feed_token(user_id)
    return FeedToken(
        token=token,
        subscribe_path=f"/api/v1/calendar/subscribe?token={token}",
        expires_at=expires_at,
    )


@router.get(
    "/calendar/subscribe",
    response_class=Response,
    summary="Live calendar feed for calendar-app subscriptions",
)
async def subscribe_calendar(
    token: str = Query(...),
    db: AsyncSession = Depends(get_session),
) -> Response:
    try:
        user_id = verify_feed_token(token)
    except jwt.InvalidTokenError as exc:
        _LOG.warning("rejected calendar feed token: %s", exc)
        raise HTTPException(status_code=401, detail="Invalid or expired feed token")

    await require_user(user_id, db)
    body = render_calendar(
        _descriptors(await _active_foods(db, user_id)),
        name="Food Schedule (Live)",
        description="Your personalized food schedule - updates automatically",
        live=True,
    )
    return Response(
        content=body,
        media_type=_ICS_MEDIA_TYPE,
        headers={
            "Cache-Control": "no-cache, no-store, must-revalidate",
            "Pragma": "no-cache",
            "Expires": "0",
        },
    )
