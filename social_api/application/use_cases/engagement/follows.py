"""Use cases for following and unfollowing users."""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from social_api.domain.entities import FollowStatus
from social_api.infrastructure.repositories import FollowRepository, UserRepository


def follow_user(session: Session, *, follower_id: int, user_id: int) -> FollowStatus:
    """Make ``follower_id`` follow ``user_id``."""

    if follower_id == user_id:
        raise ValueError("You cannot follow yourself")
    if UserRepository(session).get(user_id) is None:
        raise ValueError("User not found")

    follows = FollowRepository(session)
    if follows.exists(follower_id=follower_id, following_id=user_id):
        raise ValueError("Already following this user")

    try:
        follows.create(follower_id=follower_id, following_id=user_id)
    except IntegrityError as exc:
        session.rollback()
        raise ValueError("Already following this user") from exc

    return FollowStatus(is_following=True, follower_count=follows.count_followers(user_id))


def unfollow_user(session: Session, *, follower_id: int, user_id: int) -> FollowStatus:
    if UserRepository(session).get(user_id) is None:
        raise ValueError("User not found")

    follows = FollowRepository(session)
    if not follows.exists(follower_id=follower_id, following_id=user_id):
        raise ValueError("Not following this user")

    follows.delete(follower_id=follower_id, following_id=user_id)
    return FollowStatus(is_following=False, follower_count=follows.count_followers(user_id))


__all__ = ["follow_user", "unfollow_user"]
