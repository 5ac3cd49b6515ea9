"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from moodmuse.activities.catalog import ActivityCatalog
from moodmuse.activities.events import BadgePublisher
from moodmuse.activities.router import router as activities_router
from moodmuse.activities.store import SqlActivityStore
from moodmuse.activities.tracker import TrackerRegistry
from moodmuse.config import get_settings
from moodmuse.database import close_db, create_tables, init_db
from moodmuse.health.router import router as health_router
from moodmuse.middleware import setup_middleware
from moodmuse.redis_client import close_redis, get_redis_or_none, init_redis
from moodmuse.reflection.client import ReflectionClient
from moodmuse.reflection.router import router as reflection_router

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup and shutdown lifecycle."""
    settings = get_settings()
    await init_db(settings.database_url)
    await create_tables()
    if settings.redis_url:
        await init_redis(settings.redis_url)
    app.state.trackers.publisher.redis = get_redis_or_none()

    yield

    unsynced = app.state.trackers.unsynced()
    if unsynced:
        logger.warning("shutdown_with_unsynced_records", user_keys=unsynced)
    await close_db()
    await close_redis()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="MoodMuse API",
        description="Mood journaling with guided wellness activities, streaks and badges",
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    app.state.trackers = TrackerRegistry(
        store=SqlActivityStore(),
        catalog=ActivityCatalog.default(),
        publisher=BadgePublisher(None, settings.badge_event_channel),
        max_trackers=settings.tracker_cache_size,
    )
    app.state.reflection_client = ReflectionClient.from_settings(settings)

    setup_middleware(app, settings)
    app.include_router(health_router, tags=["Health"])
    app.include_router(activities_router)
    app.include_router(reflection_router)

    return app


app = create_app()
