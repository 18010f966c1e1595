from __future__ import annotations
from datetime import datetime

from pydantic import BaseModel


class FeedToken(BaseModel):
    token: str
    subscribe_path: str
    expires_at: datetime
