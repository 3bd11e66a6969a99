"""Use cases for liking and unliking topics, videos, replies and comments."""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from social_api.domain.entities import LikeStatus, LikeTarget
from social_api.infrastructure.repositories import (
    CommentRepository,
    LikeRepository,
    ReplyRepository,
    TopicRepository,
    VideoRepository,
)

_REPOSITORIES = {
    LikeTarget.TOPIC: (TopicRepository, "Topic not found"),
    LikeTarget.VIDEO: (VideoRepository, "Video not found"),
    LikeTarget.REPLY: (ReplyRepository, "Reply not found"),
    LikeTarget.COMMENT: (CommentRepository, "Comment not found"),
}


def _ensure_target_exists(session: Session, target: LikeTarget, target_id: int) -> None:
    repository_cls, not_found = _REPOSITORIES[LikeTarget(target)]
    if repository_cls(session).get(target_id) is None:
        raise ValueError(not_found)


def like_resource(
    session: Session, *, target: LikeTarget, target_id: int, user_id: int
) -> LikeStatus:
    """Record that ``user_id`` likes the resource.

    Notification and counter updates are not performed here; callers schedule
    them once this write has succeeded.
    """

    _ensure_target_exists(session, target, target_id)
    likes = LikeRepository(session)
    if likes.exists(user_id=user_id, target=target, target_id=target_id):
        raise ValueError("Already liked")

    try:
        likes.create(user_id=user_id, target=target, target_id=target_id)
    except IntegrityError as exc:
        session.rollback()
        raise ValueError("Already liked") from exc

    return LikeStatus(is_liked=True, like_count=likes.count(target=target, target_id=target_id))


def unlike_resource(
    session: Session, *, target: LikeTarget, target_id: int, user_id: int
) -> LikeStatus:
    _ensure_target_exists(session, target, target_id)
    likes = LikeRepository(session)
    if not likes.exists(user_id=user_id, target=target, target_id=target_id):
        raise ValueError("Not liked yet")

    likes.delete(user_id=user_id, target=target, target_id=target_id)
    return LikeStatus(is_liked=False, like_count=likes.count(target=target, target_id=target_id))


__all__ = ["like_resource", "unlike_resource"]
