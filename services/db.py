"""
services/db.py
────────────────────────────────────────────────────────────────────────
* Async SQLAlchemy v2 setup
* Models for users, foods and their schedule entries
* Session helpers for routers (dependency) and scripts (context manager)
"""
from __future__ import annotations

import datetime as dt
from contextlib import asynccontextmanager
from typing import AsyncGenerator, AsyncIterator

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.ext.asyncio import (
    AsyncAttrs,
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import Mapped, declarative_base, mapped_column

from config import settings

# ───────── connection helper ────────────────────────────────────────
_ENGINE: AsyncEngine | None = None


def _create_engine(url: str) -> AsyncEngine:
    if url.startswith("sqlite"):
        return create_async_engine(url)
    return create_async_engine(url, pool_pre_ping=True)


async def engine() -> AsyncEngine:
    global _ENGINE
    if _ENGINE is None:
        _ENGINE = _create_engine(settings.database_url)
    return _ENGINE


def use_engine(eng: AsyncEngine | None) -> None:
    """Swap the process-wide engine (tests point this at a temp database)."""
    global _ENGINE
    _ENGINE = eng


# ───────── declarative base ──────────────────────────────────────────
Base = declarative_base(cls=AsyncAttrs)


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    username: Mapped[str] = mapped_column(String(100), unique=True)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime, server_default=func.now())


class Food(Base):
    __tablename__ = "foods"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)
    name: Mapped[str] = mapped_column(Text)
    instructions: Mapped[str] = mapped_column(Text, default="")
    color: Mapped[str] = mapped_column(String(20), default="blue")
    frequency: Mapped[str] = mapped_column(Text)       # free text, e.g. "3 times a week"
    start_date: Mapped[dt.date] = mapped_column(Date)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    meal_type: Mapped[str | None] = mapped_column(String(20), default="any")
    # dose progression
    starting_amount: Mapped[str | None] = mapped_column(Text)
    target_amount: Mapped[str | None] = mapped_column(Text)
    progression_type: Mapped[str | None] = mapped_column(String(20))
    progression_duration: Mapped[int | None] = mapped_column(Integer)
    # time of day
    start_time: Mapped[str | None] = mapped_column(String(5))     # HH:MM
    end_time: Mapped[str | None] = mapped_column(String(5))
    time_progression: Mapped[str | None] = mapped_column(String(20))
    time_progression_amount: Mapped[int | None] = mapped_column(Integer)


class ScheduleEntry(Base):
    __tablename__ = "schedule_entries"
    __table_args__ = (UniqueConstraint("food_id", "date", name="uq_schedule_food_date"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)
    food_id: Mapped[int] = mapped_column(ForeignKey("foods.id"), index=True)
    date: Mapped[dt.date] = mapped_column(Date, index=True)
    is_completed: Mapped[bool] = mapped_column(Boolean, default=False)
    completed_at: Mapped[str | None] = mapped_column(String(40))   # ISO timestamp
    # values computed for this particular occurrence
    calculated_amount: Mapped[str | None] = mapped_column(Text)
    calculated_time: Mapped[str | None] = mapped_column(String(5))
    occurrence_number: Mapped[int | None] = mapped_column(Integer)


async def init_models() -> None:
    eng = await engine()
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# ───────── session helpers ───────────────────────────────────────────

async def get_session() -> AsyncGenerator[AsyncSession, None]:
    eng = await engine()
    async_session = async_sessionmaker(eng, expire_on_commit=False)
    async with async_session() as session:
        yield session


@asynccontextmanager
async def session_scope() -> AsyncIterator[AsyncSession]:
    """Same as get_session, for scripts that are not behind FastAPI."""
    eng = await engine()
    async_session = async_sessionmaker(eng, expire_on_commit=False)
    async with async_session() as session:
        yield session
