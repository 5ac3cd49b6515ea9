"""Badge-unlock notifications over Redis pub/sub."""

from __future__ import annotations

import json
import logging

from moodmuse.activities.models import ActivityBadge

logger = logging.getLogger(__name__)


class BadgePublisher:
    """Publishes unlocked badges for connected clients.

    Publishing is best effort: a missing or failing Redis never fails the
    completion that unlocked the badge.
    """

    def __init__(self, redis: object | None, channel: str = "pubsub:badge_unlocked") -> None:
        self.redis = redis
        self.channel = channel

    async def publish_unlocked(self, user_key: str, badges: list[ActivityBadge]) -> int:
        """Publish one message per badge. Returns the number published."""
        if self.redis is None or not badges:
            return 0

        published = 0
        for badge in badges:
            try:
                await self.redis.publish(  # type: ignore[union-attr]
                    self.channel,
                    json.dumps({
                        "user_key": user_key,
                        "event": "badge_unlocked",
                        "badge_id": badge.id,
                        "title": badge.title,
                        "category": badge.category.value,
                        "unlocked_at": badge.unlocked_at.isoformat() if badge.unlocked_at else None,
                    }),
                )
                published += 1
            except Exception:
                logger.warning("Failed to publish badge_unlocked notification", exc_info=True)
        return published
