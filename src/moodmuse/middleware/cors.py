"""CORS middleware configuration."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from moodmuse.config import Settings


def setup_cors(app: FastAPI, settings: Settings) -> None:
    """Allow the journaling web client origins.

    X-Api-Key is sent by browsers that bring their own AI key.
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "X-Request-Id", "X-Api-Key"],
        expose_headers=["X-Request-Id"],
    )
