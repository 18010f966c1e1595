"""
Seed a few demo foods for a user and schedule them.

Usage
-----

    # default trio of introduction foods
    python -m scripts.seed_foods <USER_ID>

    # custom list (same fields as POST /foods) in a JSON file
    python -m scripts.seed_foods <USER_ID> --file path/to/foods.json
"""
from __future__ import annotations

import argparse
import asyncio
import json
from datetime import date, timedelta
from pathlib import Path
from typing import Any, List

from dotenv import load_dotenv

load_dotenv()

from api.v1.schemas import FoodIn  # noqa: E402
from config import settings  # noqa: E402
from services.db import Food, User, init_models, session_scope  # noqa: E402
from services.schedule_store import generate_for_food  # noqa: E402

# ────────────────────────────────────────────────────────────────────
_DEFAULT_FOODS: List[dict[str, Any]] = [
    {
        "name": "Peanut butter",
        "instructions": "Mix into oatmeal",
        "frequency": "Every day",
        "meal_type": "breakfast",
        "starting_amount": "0.25 teaspoon",
        "target_amount": "2 teaspoon",
        "progression_type": "buildup",
        "progression_duration": 30,
        "start_time": "08:00",
    },
    {
        "name": "Egg",
        "instructions": "Well-cooked, in baked goods first",
        "frequency": "3 times a week",
        "meal_type": "lunch",
        "starting_amount": "1 tablespoon",
        "target_amount": "1 tablespoon",
        "progression_type": "static",
    },
    {
        "name": "Sesame",
        "instructions": "Tahini on toast",
        "frequency": "Every 2 days",
        "meal_type": "snack",
        "starting_amount": "0.5 teaspoon",
        "target_amount": "2 teaspoon",
        "progression_type": "custom",
        "progression_duration": 21,
        "start_time": "16:00",
        "time_progression": "earlier",
        "time_progression_amount": 15,
    },
]


async def _seed(user_id: int, foods: list[dict[str, Any]]) -> None:
    await init_models()
    today = date.today()
    async with session_scope() as db:
        if await db.get(User, user_id) is None:
            db.add(User(id=user_id, username=f"user{user_id}"))
            await db.commit()

        for raw in foods:
            raw.setdefault("start_date", today.isoformat())
            item = FoodIn.model_validate(raw)
            food = Food(user_id=user_id, is_active=True, **item.model_dump())
            db.add(food)
            await db.commit()
            await db.refresh(food)
            end = food.start_date + timedelta(days=settings.schedule_horizon_days)
            res = await generate_for_food(db, food, food.start_date, end)
            print(f"✓ {food.name}: {len(res.created)} entries")
    print(f"✓ inserted {len(foods)} foods for user {user_id}")


def _load_json(path: Path) -> list[dict[str, Any]]:
    data = json.loads(path.read_text())
    if not isinstance(data, list):
        raise ValueError("JSON file must contain a list of food dictionaries")
    return data


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("user_id", type=int, help="target user id")
    parser.add_argument(
        "--file",
        type=Path,
        help="optional JSON file with foods to seed (overrides defaults)",
    )
    args = parser.parse_args()

    foods = _load_json(args.file) if args.file else [dict(f) for f in _DEFAULT_FOODS]
    asyncio.run(_seed(args.user_id, foods))


if __name__ == "__main__":
    main()
