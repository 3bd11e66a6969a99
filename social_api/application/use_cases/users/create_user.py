"""Use case for creating users."""

from sqlalchemy.orm import Session

from social_api.domain.entities import User
from social_api.infrastructure.repositories import UserRepository
from social_api.utils import now_in_app_naive_datetime


def create_user(
    session: Session,
    *,
    username: str,
    email: str,
    full_name: str = "",
    avatar: str | None = None,
    role: str = "user",
) -> User:
    """Create a new user ensuring unique usernames and email addresses."""

    repository = UserRepository(session)

    username = username.strip()
    if not username:
        raise ValueError("Username is required")
    if repository.get_by_username(username):
        raise ValueError("Username is already taken")
    if repository.get_by_email(email):
        raise ValueError("Email is already registered")

    user = User(
        id=None,
        username=username,
        email=email,
        full_name=full_name,
        avatar=avatar,
        role=role,
        is_active=True,
        follower_count=0,
        following_count=0,
        created_at=now_in_app_naive_datetime(),
    )
    return repository.create(user)
