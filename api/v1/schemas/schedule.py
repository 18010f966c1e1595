from __future__ import annotations
import datetime as dt

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .food import HHMM


class DateRange(BaseModel):
    start_date: dt.date
    end_date: dt.date


class ScheduleEntryCreate(BaseModel):
    food_id: int
    date: dt.date
    is_completed: bool = False
    completed_at: str | None = None
    calculated_amount: str | None = None
    calculated_time: str | None = Field(None, pattern=HHMM)
    occurrence_number: int | None = Field(None, ge=0)


class ScheduleEntryUpdate(BaseModel):
    date: dt.date | None = None
    is_completed: bool | None = None
    completed_at: str | None = None
    calculated_amount: str | None = None
    calculated_time: str | None = Field(None, pattern=HHMM)

    @model_validator(mode="after")
    def _no_nulls_for_required(self) -> "ScheduleEntryUpdate":
        for name in ("date", "is_completed"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


class ScheduleEntryOut(BaseModel):
    id: int
    user_id: int
    food_id: int
    date: dt.date
    is_completed: bool
    completed_at: str | None = None
    calculated_amount: str | None = None
    calculated_time: str | None = None
    occurrence_number: int | None = None

    model_config = ConfigDict(from_attributes=True)


class GenerateResponse(BaseModel):
    created: int
    skipped: int
    entries: list[ScheduleEntryOut]
