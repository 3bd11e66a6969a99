"""Shared fixtures: a throwaway sqlite database and factories for domain rows."""

from __future__ import annotations

import itertools
import os
import tempfile
from pathlib import Path

import pytest

TEST_DB_PATH = Path(tempfile.gettempdir()) / "social_api_tests.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["BACKGROUND_WORKERS"] = "2"

from social_api.config import reset_settings_cache  # noqa: E402

reset_settings_cache()

from fastapi.testclient import TestClient  # noqa: E402

from social_api.application.use_cases.users import create_user  # noqa: E402
from social_api.domain.entities import Topic, Video  # noqa: E402
from social_api.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from social_api.infrastructure.repositories import (  # noqa: E402
    TopicRepository,
    VideoRepository,
)
from social_api.infrastructure.security import create_access_token  # noqa: E402


class RecordingPublisher:
    """Publisher double that remembers what would have been pushed."""

    def __init__(self) -> None:
        self.published = []

    def publish(self, notification) -> None:
        self.published.append(notification)


class FakeTransport:
    """In-memory transport recording frames; optionally fails every write."""

    def __init__(self, *, fail: bool = False) -> None:
        self.sent: list[dict] = []
        self.closed = False
        self.close_code: int | None = None
        self.fail = fail

    async def send_json(self, data) -> None:
        if self.fail:
            raise ConnectionResetError("connection reset by peer")
        self.sent.append(data)

    async def close(self, code: int = 1000) -> None:
        self.closed = True
        self.close_code = code


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture(autouse=True)
def reset_database():
    """Ensure the test database starts from a clean state for each test."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user():
    counter = itertools.count(1)

    def _make(username: str | None = None, **kwargs):
        username = username or f"user{next(counter)}"
        with SessionLocal() as session:
            return create_user(
                session,
                username=username,
                email=kwargs.pop("email", f"{username}@example.com"),
                full_name=kwargs.pop("full_name", username.title()),
                **kwargs,
            )

    return _make


@pytest.fixture
def make_topic():
    def _make(user_id: int, title: str = "Weekend ride", content: str = "Who is in?"):
        with SessionLocal() as session:
            return TopicRepository(session).create(
                Topic(
                    id=None,
                    user_id=user_id,
                    title=title,
                    content=content,
                    reply_count=0,
                    like_count=0,
                    created_at=None,
                )
            )

    return _make


@pytest.fixture
def make_video():
    def _make(user_id: int, title: str = "Sunset timelapse"):
        with SessionLocal() as session:
            return VideoRepository(session).create(
                Video(
                    id=None,
                    user_id=user_id,
                    title=title,
                    description=None,
                    like_count=0,
                    comment_count=0,
                    created_at=None,
                )
            )

    return _make


@pytest.fixture
def recording_publisher() -> RecordingPublisher:
    return RecordingPublisher()


@pytest.fixture
def auth_headers():
    def _headers(user_id: int) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user_id)}"}

    return _headers


@pytest.fixture
def app():
    from main import create_app

    return create_app()


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def settle(client, app):
    """Block until queued background jobs and their pushes have been processed."""

    def _settle() -> None:
        client.portal.call(app.state.task_runner.drain)
        client.portal.call(app.state.dispatcher.drain)

    return _settle


@pytest.fixture
def make_transport():
    return FakeTransport
