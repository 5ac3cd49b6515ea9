"""Optional Redis connection pool.

Redis only carries badge-unlock notifications, so the service runs without
it when ``MOODMUSE_REDIS_URL`` is empty.
"""

import logging

import redis.asyncio as redis

logger = logging.getLogger(__name__)

_pool: redis.Redis | None = None


async def init_redis(url: str) -> redis.Redis:
    """Create the shared Redis client for ``url``."""
    global _pool  # noqa: PLW0603
    _pool = redis.from_url(  # type: ignore[no-untyped-call]
        url,
        encoding="utf-8",
        decode_responses=True,
        max_connections=20,
    )
    logger.info("Redis enabled at %s", url.rsplit("@", 1)[-1])
    return _pool


async def close_redis() -> None:
    global _pool  # noqa: PLW0603
    if _pool:
        await _pool.aclose()
        _pool = None


def get_redis_or_none() -> redis.Redis | None:
    """The shared client, or None when Redis is disabled or not started."""
    return _pool
