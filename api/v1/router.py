# api/v1/router.py
from fastapi import APIRouter

from . import calendar, foods, schedule, users

api_router = APIRouter()

api_router.include_router(users.router, prefix="/users", tags=["Users"])

# foods and schedule entries live *under* the user resource
api_router.include_router(foods.router, prefix="/users", tags=["Foods"])
api_router.include_router(schedule.router, prefix="/users", tags=["Schedule"])

# export is per-user, the subscription feed is keyed by token
api_router.include_router(calendar.router, tags=["Calendar"])
