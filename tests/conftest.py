"""Shared test fixtures."""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator
from datetime import datetime, timezone

# Settings are read at import time by moodmuse.main; point them at an
# in-memory database with Redis disabled before anything imports it.
os.environ["MOODMUSE_DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["MOODMUSE_REDIS_URL"] = ""
os.environ["MOODMUSE_LOG_FORMAT"] = "console"
os.environ["MOODMUSE_GEMINI_API_KEY"] = ""

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from moodmuse.activities.catalog import ActivityCatalog  # noqa: E402
from moodmuse.activities.errors import PersistenceError  # noqa: E402
from moodmuse.activities.models import UserActivityData  # noqa: E402
from moodmuse.activities.store import ActivityStore  # noqa: E402
from moodmuse.activities.tracker import ActivityTracker  # noqa: E402
from moodmuse.config import get_settings  # noqa: E402
from moodmuse.database import close_db, create_tables, init_db  # noqa: E402
from moodmuse.main import create_app  # noqa: E402

get_settings.cache_clear()


class MemoryStore(ActivityStore):
    """Dict-backed store; set ``fail_saves`` to simulate a broken backend."""

    def __init__(self) -> None:
        self.records: dict[str, str] = {}
        self.saves = 0
        self.fail_saves = False

    async def load(self, user_key: str) -> UserActivityData | None:
        raw = self.records.get(user_key)
        return UserActivityData.model_validate_json(raw) if raw is not None else None

    async def save(self, user_key: str, data: UserActivityData) -> None:
        if self.fail_saves:
            raise PersistenceError(user_key, "backend unavailable")
        self.records[user_key] = data.model_dump_json()
        self.saves += 1


def at(day: int, hour: int = 12, month: int = 3) -> datetime:
    """A fixed UTC timestamp in 2026."""
    return datetime(2026, month, day, hour, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def catalog() -> ActivityCatalog:
    return ActivityCatalog.default()


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest_asyncio.fixture
async def tracker(memory_store: MemoryStore, catalog: ActivityCatalog) -> ActivityTracker:
    """A fresh tracker for user 'alice' backed by the memory store."""
    return await ActivityTracker.load(memory_store, "alice", catalog)


@pytest_asyncio.fixture
async def db() -> AsyncGenerator[None, None]:
    """Initialize an empty in-memory database for the test."""
    settings = get_settings()
    await init_db(settings.database_url)
    await create_tables()
    yield
    await close_db()


@pytest.fixture
def app() -> FastAPI:
    return create_app()


@pytest_asyncio.fixture
async def client(db: None, app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP test client against a fresh app and database."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
