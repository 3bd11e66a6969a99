"""Use cases for topic replies and video comments."""

from __future__ import annotations

from sqlalchemy.orm import Session

from social_api.domain.entities import Comment, Reply
from social_api.infrastructure.repositories import (
    CommentRepository,
    ReplyRepository,
    TopicRepository,
    VideoRepository,
)


def _clean_content(content: str) -> str:
    cleaned = (content or "").strip()
    if not cleaned:
        raise ValueError("Content cannot be empty")
    return cleaned


def create_reply(
    session: Session,
    *,
    topic_id: int,
    user_id: int,
    content: str,
    parent_id: int | None = None,
) -> Reply:
    """Add a reply to ``topic_id``, optionally nested under another reply of the same topic."""

    if TopicRepository(session).get(topic_id) is None:
        raise ValueError("Topic not found")

    replies = ReplyRepository(session)
    if parent_id is not None:
        parent = replies.get(parent_id)
        if parent is None or parent.topic_id != topic_id:
            raise ValueError("Parent reply not found")

    return replies.create(
        Reply(
            id=None,
            topic_id=topic_id,
            user_id=user_id,
            parent_id=parent_id,
            content=_clean_content(content),
            created_at=None,
        )
    )


def create_comment(
    session: Session,
    *,
    video_id: int,
    user_id: int,
    content: str,
    parent_id: int | None = None,
) -> Comment:
    """Add a comment to ``video_id``; ``parent_id`` makes it an answer to another comment."""

    if VideoRepository(session).get(video_id) is None:
        raise ValueError("Video not found")

    comments = CommentRepository(session)
    if parent_id is not None:
        parent = comments.get(parent_id)
        if parent is None or parent.video_id != video_id:
            raise ValueError("Parent comment not found")

    return comments.create(
        Comment(
            id=None,
            video_id=video_id,
            user_id=user_id,
            parent_id=parent_id,
            content=_clean_content(content),
            created_at=None,
        )
    )


__all__ = ["create_comment", "create_reply"]
