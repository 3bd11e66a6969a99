from fastapi import FastAPI

from .discussions import router as discussions_router
from .follows import router as follows_router
from .likes import router as likes_router
from .notifications import router as notifications_router
from .realtime import router as realtime_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(notifications_router)
    app.include_router(likes_router)
    app.include_router(follows_router)
    app.include_router(discussions_router)
    app.include_router(realtime_router)
