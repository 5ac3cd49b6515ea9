"""SQL activity store tests against in-memory SQLite."""

import pytest
from conftest import at
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from moodmuse.activities.errors import PersistenceError
from moodmuse.activities.models import ActivitySession, MoodRating, UserActivityData
from moodmuse.activities.store import ActivityStore, SqlActivityStore
from moodmuse.database import get_session_factory
from moodmuse.db.models import UserActivityRecord


def _data_with_session() -> UserActivityData:
    session = ActivitySession(
        activity_id="walk",
        start_time=at(1),
        end_time=at(1),
        completed=True,
        mood_rating=MoodRating(before=4, after=7, timestamp=at(1)),
        effectiveness=66.7,
    )
    data = UserActivityData(sessions=[session])
    data.streaks.current_streak = 1
    data.streaks.activities_per_day = {"2026-03-01": 1}
    return data


class TestSqlActivityStore:

    @pytest.mark.asyncio
    async def test_missing_record(self, db):
        store = SqlActivityStore()
        assert await store.load("nobody") is None

    @pytest.mark.asyncio
    async def test_save_then_load(self, db):
        store = SqlActivityStore()
        data = _data_with_session()

        await store.save("alice", data)
        loaded = await store.load("alice")

        assert loaded is not None
        assert loaded.model_dump() == data.model_dump()
        assert loaded.sessions[0].mood_delta == 3

    @pytest.mark.asyncio
    async def test_last_write_wins(self, db):
        store = SqlActivityStore()
        await store.save("alice", _data_with_session())
        await store.save("alice", UserActivityData())

        loaded = await store.load("alice")
        assert loaded.sessions == []

        async with get_session_factory()() as session:
            record = await session.get(UserActivityRecord, "alice")
            assert record.save_count == 2
            assert record.updated_at is not None

    @pytest.mark.asyncio
    async def test_keys_isolated(self, db):
        store = SqlActivityStore()
        await store.save("alice", _data_with_session())
        assert await store.load("bob") is None

    @pytest.mark.asyncio
    async def test_unreadable_record(self, db):
        async with get_session_factory()() as session:
            session.add(UserActivityRecord(user_key="broken", document={"sessions": "oops"}))
            await session.commit()

        with pytest.raises(PersistenceError):
            await SqlActivityStore().load("broken")

    @pytest.mark.asyncio
    async def test_backend_failure_raises_persistence_error(self):
        # No tables created, so every statement fails.
        engine = create_async_engine(
            "sqlite+aiosqlite:///:memory:",
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
        store = SqlActivityStore(async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False))
        try:
            with pytest.raises(PersistenceError) as exc_info:
                await store.save("alice", UserActivityData())
            assert exc_info.value.user_key == "alice"

            with pytest.raises(PersistenceError):
                await store.load("alice")
        finally:
            await engine.dispose()


class TestActivityStoreBoundary:

    def test_incomplete_store_cannot_be_created(self):
        class LoadOnlyStore(ActivityStore):
            async def load(self, user_key):
                return None

        with pytest.raises(TypeError):
            LoadOnlyStore()

    def test_complete_store_can_be_created(self):
        assert isinstance(SqlActivityStore(), ActivityStore)
