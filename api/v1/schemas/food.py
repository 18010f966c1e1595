from __future__ import annotations
from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

ProgressionType = Literal["static", "buildup", "reduction", "custom"]
TimeProgression = Literal["static", "later", "earlier"]
MealType = Literal["breakfast", "lunch", "dinner", "snack", "any"]

HHMM = r"^([01]\d|2[0-3]):[0-5]\d$"


class FoodIn(BaseModel):
    name: str = Field(..., min_length=1)
    instructions: str = ""
    color: str = "blue"
    frequency: str = Field("Every day", min_length=1, examples=["Every day", "3 times a week", "Every 2 days"])
    start_date: date
    meal_type: MealType = "any"
    # dose progression
    starting_amount: str | None = Field(None, examples=["1 teaspoon"])
    target_amount: str | None = Field(None, examples=["3 teaspoon"])
    progression_type: ProgressionType | None = None
    progression_duration: int | None = Field(None, ge=1, description="days; 999999 = forever")
    # time of day
    start_time: str | None = Field(None, pattern=HHMM)
    end_time: str | None = Field(None, pattern=HHMM)
    time_progression: TimeProgression | None = None
    time_progression_amount: int | None = Field(None, ge=1, description="minutes per occurrence")


class FoodCreate(FoodIn):
    generate: bool = Field(True, description="schedule the default horizon right away")


class FoodUpdate(BaseModel):
    name: str | None = Field(None, min_length=1)
    instructions: str | None = None
    color: str | None = None
    frequency: str | None = Field(None, min_length=1)
    start_date: date | None = None
    meal_type: MealType | None = None
    starting_amount: str | None = None
    target_amount: str | None = None
    progression_type: ProgressionType | None = None
    progression_duration: int | None = Field(None, ge=1)
    start_time: str | None = Field(None, pattern=HHMM)
    end_time: str | None = Field(None, pattern=HHMM)
    time_progression: TimeProgression | None = None
    time_progression_amount: int | None = Field(None, ge=1)

    @model_validator(mode="after")
    def _no_nulls_for_required(self) -> "FoodUpdate":
        for name in ("name", "instructions", "color", "frequency", "start_date"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


class FoodOut(FoodIn):
    id: int
    user_id: int
    is_active: bool

    model_config = ConfigDict(from_attributes=True)
