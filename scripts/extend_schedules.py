#!/usr/bin/env python3
"""
scripts/extend_schedules.py
────────────────────────────────────────────────────────────────────────
Keep every active food scheduled a fixed number of days ahead.

Each food is regenerated from its own start date, so occurrence numbers
line up with the stored ones.  Dates that already have an entry are
skipped; new dates get amounts computed over the longer sequence.

    python -m scripts.extend_schedules              # all users
    python -m scripts.extend_schedules --user 123 --days 120
"""
from __future__ import annotations

import asyncio
import logging
from argparse import ArgumentParser
from datetime import date, timedelta

from dotenv import load_dotenv

load_dotenv()

from sqlalchemy import select  # noqa: E402

from config import settings  # noqa: E402
from services.db import Food, init_models, session_scope  # noqa: E402
from services.schedule_store import generate_for_food  # noqa: E402

_LOG = logging.getLogger(__name__)


async def extend(user_id: int | None, days: int) -> int:
    await init_models()
    until = date.today() + timedelta(days=days)
    created = 0
    async with session_scope() as db:
        q = select(Food).where(Food.is_active.is_(True))
        if user_id is not None:
            q = q.where(Food.user_id == user_id)
        foods = (await db.execute(q.order_by(Food.id))).scalars().all()

        for food in foods:
            if food.start_date > until:
                continue
            res = await generate_for_food(db, food, food.start_date, until)
            created += len(res.created)
            _LOG.info("food %s (%s): +%d entries", food.id, food.name, len(res.created))
    return created


def main() -> None:
    ap = ArgumentParser()
    ap.add_argument("--user", type=int, help="only this user's foods")
    ap.add_argument(
        "--days",
        type=int,
        default=settings.schedule_horizon_days,
        help="schedule through today + DAYS",
    )
    args = ap.parse_args()

    logging.basicConfig(level=settings.log_level.upper())
    n = asyncio.run(extend(args.user, args.days))
    print(f"✓ created {n} schedule entries")


if __name__ == "__main__":
    main()
