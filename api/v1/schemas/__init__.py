"""Re-export individual schema modules for easy imports."""

from .user import UserCreate, UserOut
from .food import FoodCreate, FoodIn, FoodOut, FoodUpdate
from .schedule import (
    DateRange,
    GenerateResponse,
    ScheduleEntryCreate,
    ScheduleEntryOut,
    ScheduleEntryUpdate,
)
from .calendar import FeedToken

__all__ = [
    "UserCreate",
    "UserOut",
    "FoodCreate",
    "FoodIn",
    "FoodOut",
    "FoodUpdate",
    "DateRange",
    "GenerateResponse",
    "ScheduleEntryCreate",
    "ScheduleEntryOut",
    "ScheduleEntryUpdate",
    "FeedToken",
]
