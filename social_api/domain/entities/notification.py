"""Domain entities describing user notifications."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class NotificationType(str, Enum):
    """Closed set of events that produce a notification."""

    TOPIC_REPLY = "topic_reply"
    TOPIC_LIKE = "topic_like"
    VIDEO_LIKE = "video_like"
    VIDEO_COMMENT = "video_comment"
    COMMENT_REPLY = "comment_reply"
    REPLY_LIKE = "reply_like"
    COMMENT_LIKE = "comment_like"
    NEW_FOLLOWER = "new_follower"


@dataclass
class ActorSummary:
    """Public profile fragment of the user who triggered a notification."""

    id: int
    username: str
    full_name: str
    avatar: str | None = None


@dataclass
class Notification:
    """Record of one actor acting on one resource, addressed to one recipient."""

    id: int | None
    recipient_id: int
    actor_id: int
    event_type: NotificationType
    message: str
    resource_id: int | None = None
    is_read: bool = False
    created_at: datetime | None = None
    actor: ActorSummary | None = None


@dataclass
class NotificationPage:
    """A filtered, paginated slice of a user's inbox."""

    items: list[Notification] = field(default_factory=list)
    total_count: int = 0
    unread_count: int = 0
    page: int = 1
    limit: int = 20

    @property
    def total_pages(self) -> int:
        if self.limit < 1:
            return 0
        return math.ceil(self.total_count / self.limit)


__all__ = ["ActorSummary", "Notification", "NotificationPage", "NotificationType"]
