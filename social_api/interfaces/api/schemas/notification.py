"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from social_api.domain.entities import NotificationType


class NotificationActorRead(BaseModel):
    """Public profile of the user who triggered a notification."""

    id: int
    username: str
    full_name: str = ""
    avatar: str | None = None


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    id: int
    user_id: int
    actor_id: int
    type: NotificationType
    message: str
    resource_id: int | None = None
    is_read: bool = False
    created_at: datetime | None = None
    actor: NotificationActorRead | None = None


class NotificationListResponse(BaseModel):
    items: list[NotificationRead] = Field(default_factory=list)
    total_count: int
    unread_count: int
    page: int
    limit: int
    total_pages: int


class UnreadCountResponse(BaseModel):
    count: int


class NotificationMarkReadRequest(BaseModel):
    """Payload used to mark a batch of notifications as read."""

    notification_ids: list[int] = Field(
        ..., description="Identifiers of the notifications to mark"
    )

    def unique_ids(self) -> list[int]:
        """Return the list of identifiers without duplicates preserving order."""

        return list(dict.fromkeys(self.notification_ids))


class NotificationBatchResult(BaseModel):
    """Outcome of an operation applied to several notifications at once."""

    message: str
    affected: int


__all__ = [
    "NotificationActorRead",
    "NotificationBatchResult",
    "NotificationListResponse",
    "NotificationMarkReadRequest",
    "NotificationRead",
    "UnreadCountResponse",
]
