# tests/conftest.py
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from main import app
from services import db


@pytest.fixture
def client(tmp_path):
    """API client over a throw-away SQLite file; the app lifespan creates tables."""
    db.use_engine(
        create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool)
    )
    try:
        with TestClient(app) as c:
            yield c
    finally:
        db.use_engine(None)


@pytest.fixture
def user(client) -> int:
    r = client.post("/api/v1/users", json={"id": 1, "username": "alice"})
    assert r.status_code == 201
    return r.json()["id"]
