from __future__ import annotations
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    id: int | None = None
    username: str = Field(..., min_length=3, max_length=50)


class UserOut(BaseModel):
    id: int
    username: str
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
