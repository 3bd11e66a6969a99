"""Value objects returned by like and follow operations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class LikeTarget(str, Enum):
    """Kinds of resources a user can like."""

    TOPIC = "topic"
    VIDEO = "video"
    REPLY = "reply"
    COMMENT = "comment"


@dataclass(frozen=True)
class LikeStatus:
    is_liked: bool
    like_count: int


@dataclass(frozen=True)
class FollowStatus:
    is_following: bool
    follower_count: int


__all__ = ["FollowStatus", "LikeStatus", "LikeTarget"]
