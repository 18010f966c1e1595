from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, ConfigDict


class Occurrence(BaseModel):
    food_id: int | None = None
    date: dt.date
    occurrence_number: int            # 0-based, per generation call
    calculated_amount: str | None = None
    calculated_time: str | None = None  # HH:MM

    model_config = ConfigDict(frozen=True)
