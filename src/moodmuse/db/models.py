"""ORM models.

A user's activity data is stored as one JSON document per user key so the
whole aggregate is read and written atomically.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Integer, String, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from moodmuse.db.base import Base


# ---------------------------------------------------------------------------
# Activity tracking
# ---------------------------------------------------------------------------


class UserActivityRecord(Base):
    """Maps to the 'user_activity_records' table."""

    __tablename__ = "user_activity_records"

    user_key: Mapped[str] = mapped_column(String(128), primary_key=True)
    document: Mapped[dict[str, Any]] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"), nullable=False
    )
    save_count: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
