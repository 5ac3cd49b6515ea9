"""Whole-record persistence for user activity data."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from moodmuse.activities.errors import PersistenceError
from moodmuse.activities.models import UserActivityData
from moodmuse.database import get_session_factory
from moodmuse.db.models import UserActivityRecord

logger = logging.getLogger(__name__)


class ActivityStore(ABC):
    """Read and write a user's activity record by key."""

    @abstractmethod
    async def load(self, user_key: str) -> UserActivityData | None:
        """The stored record, or None for an unknown key."""

    @abstractmethod
    async def save(self, user_key: str, data: UserActivityData) -> None:
        """Replace the stored record. Raises PersistenceError on failure."""


class SqlActivityStore(ActivityStore):
    """Stores each record as one JSON document row.

    Last write wins per user key.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession] | None = None) -> None:
        self._session_factory = session_factory

    def _sessions(self) -> async_sessionmaker[AsyncSession]:
        return self._session_factory or get_session_factory()

    async def load(self, user_key: str) -> UserActivityData | None:
        try:
            async with self._sessions()() as db:
                record = await db.get(UserActivityRecord, user_key)
                if record is None:
                    return None
                document = record.document
        except SQLAlchemyError as exc:
            raise PersistenceError(user_key, str(exc)) from exc

        try:
            return UserActivityData.model_validate(document)
        except PydanticValidationError as exc:
            raise PersistenceError(user_key, "stored record is unreadable") from exc

    async def save(self, user_key: str, data: UserActivityData) -> None:
        # Serialize before the first await so the snapshot matches the caller's state.
        document = data.model_dump(mode="json")
        now = datetime.now(timezone.utc)
        try:
            async with self._sessions()() as db:
                record = await db.get(UserActivityRecord, user_key)
                if record is None:
                    db.add(UserActivityRecord(
                        user_key=user_key,
                        document=document,
                        save_count=1,
                        updated_at=now,
                    ))
                else:
                    record.document = document
                    record.save_count += 1
                    record.updated_at = now
                await db.commit()
        except SQLAlchemyError as exc:
            logger.warning("Failed to save activity record for %s", user_key, exc_info=True)
            raise PersistenceError(user_key, str(exc)) from exc
