"""Signed tokens for calendar feed URLs (calendar apps cannot send cookies)."""
from datetime import datetime, timedelta, timezone

import jwt

from config import settings

_ALGO = "HS256"
_AUDIENCE = "calendar-feed"


def create_feed_token(user_id: int, ttl_days: int | None = None) -> tuple[str, datetime]:
    days = settings.feed_token_ttl_days if ttl_days is None else ttl_days
    exp = datetime.now(timezone.utc) + timedelta(days=days)
    payload = {"sub": str(user_id), "aud": _AUDIENCE, "exp": exp}
    return jwt.encode(payload, settings.jwt_secret, algorithm=_ALGO), exp


def verify_feed_token(token: str) -> int:
    """Return the user id, or raise jwt.InvalidTokenError."""
    payload = jwt.decode(token, settings.jwt_secret, algorithms=[_ALGO], audience=_AUDIENCE)
    try:
        return int(payload["sub"])
    except (KeyError, ValueError) as exc:
        raise jwt.InvalidTokenError("malformed subject") from exc
