"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from social_api.domain.entities import User
from social_api.infrastructure.database import get_db
from social_api.infrastructure.realtime import (
    BackgroundTaskRunner,
    ConnectionDispatcher,
    NotificationPublisher,
)
from social_api.infrastructure.repositories import UserRepository
from social_api.infrastructure.security import user_id_from_token

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str = "Could not validate credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_current_user(token: str, db: Session) -> User:
    """Resolve the user whose id is the subject of ``token``."""

    try:
        user_id = user_id_from_token(token)
    except ValueError as exc:
        raise _unauthorized() from exc

    user = UserRepository(db).get(user_id)
    if user is None:
        raise _unauthorized("User not found")
    return user


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Return the authenticated user from the bearer token."""

    if credentials is None or not credentials.credentials:
        raise _unauthorized("Not authenticated")
    return resolve_current_user(credentials.credentials, db)


def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    """Ensure the authenticated user is active."""

    if not current_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Inactive user",
        )
    return current_user


def get_dispatcher(request: Request) -> ConnectionDispatcher:
    return request.app.state.dispatcher


def get_task_runner(request: Request) -> BackgroundTaskRunner:
    return request.app.state.task_runner


def get_notification_publisher(request: Request) -> NotificationPublisher:
    return request.app.state.notification_publisher


__all__ = [
    "get_current_active_user",
    "get_current_user",
    "get_db",
    "get_dispatcher",
    "get_notification_publisher",
    "get_task_runner",
    "resolve_current_user",
]
