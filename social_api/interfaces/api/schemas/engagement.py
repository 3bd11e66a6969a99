"""Pydantic models for likes, follows, replies and comments."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class LikeStatusRead(BaseModel):
    is_liked: bool
    like_count: int


class FollowStatusRead(BaseModel):
    is_following: bool
    follower_count: int


class ReplyCreate(BaseModel):
    """Payload used to answer a topic or another reply in it."""

    content: str = Field(..., min_length=1, max_length=5000)
    parent_id: int | None = Field(default=None, ge=1)


class ReplyRead(BaseModel):
    id: int
    topic_id: int
    user_id: int
    parent_id: int | None = None
    content: str
    created_at: datetime | None = None


class CommentCreate(BaseModel):
    """Payload used to comment on a video or answer another comment."""

    content: str = Field(..., min_length=1, max_length=2000)
    parent_id: int | None = Field(default=None, ge=1)


class CommentRead(BaseModel):
    id: int
    video_id: int
    user_id: int
    parent_id: int | None = None
    content: str
    created_at: datetime | None = None


__all__ = [
    "CommentCreate",
    "CommentRead",
    "FollowStatusRead",
    "LikeStatusRead",
    "ReplyCreate",
    "ReplyRead",
]
