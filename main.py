import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from social_api.config import get_settings
from social_api.infrastructure.database import engine, initialize_database
from social_api.infrastructure.realtime import (
    BackgroundTaskRunner,
    ConnectionDispatcher,
    NotificationPublisher,
)
from social_api.interfaces.api.routes import register_routes

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the schema and own the realtime components for the app's lifetime."""

    settings = get_settings()
    initialize_database()

    dispatcher = ConnectionDispatcher()
    task_runner = BackgroundTaskRunner(
        workers=settings.background_workers,
        max_queue_size=settings.background_queue_size,
    )
    app.state.dispatcher = dispatcher
    app.state.task_runner = task_runner
    app.state.notification_publisher = NotificationPublisher(dispatcher)

    await dispatcher.start()
    await task_runner.start()
    try:
        yield
    finally:
        # Pending jobs may still publish, so the runner stops first.
        await task_runner.stop()
        await dispatcher.stop()
        engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(title="Social API", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()
