from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict

PROGRESSION_TYPES = ("static", "buildup", "reduction", "custom")
TIME_PROGRESSIONS = ("static", "later", "earlier")
MEAL_TYPES = ("breakfast", "lunch", "dinner", "snack", "any")

# progression_duration value meaning "no end date"
FOREVER = 999999


class FoodDescriptor(BaseModel):
    """Read-only view of a food as the schedule engine sees it.

    Progression fields are loose strings/ints; the engine accepts partially
    filled or odd values without raising.
    """

    id: int | None = None
    name: str
    instructions: str = ""
    frequency: str = "Every day"
    start_date: date
    meal_type: str | None = "any"
    # dose progression
    starting_amount: str | None = None
    target_amount: str | None = None
    progression_type: str | None = None
    progression_duration: int | None = None
    # time-of-day progression
    start_time: str | None = None      # HH:MM
    time_progression: str | None = None
    time_progression_amount: int | None = None   # minutes per occurrence

    model_config = ConfigDict(from_attributes=True, frozen=True)
