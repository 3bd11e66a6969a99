"""Utility helpers to push notifications to websocket subscribers."""

from __future__ import annotations

from typing import Any

from social_api.domain.entities import Notification, NotificationType
from social_api.utils import isoformat_or_none

from .dispatcher import ConnectionDispatcher

NOTIFICATION_MESSAGE_TYPE = "notification"


class NotificationPublisher:
    """Serialize notifications and hand them to the dispatcher."""

    def __init__(self, dispatcher: ConnectionDispatcher) -> None:
        self._dispatcher = dispatcher

    def publish(self, notification: Notification) -> None:
        """Schedule ``notification`` for every live connection of its recipient."""

        self._dispatcher.broadcast_to_user(
            notification.recipient_id,
            NOTIFICATION_MESSAGE_TYPE,
            serialize_notification(notification),
        )


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return the websocket payload representation for ``notification``."""

    return {
        "id": notification.id,
        "type": NotificationType(notification.event_type).value,
        "message": notification.message,
        "actorId": notification.actor_id,
        "isRead": notification.is_read,
        "createdAt": isoformat_or_none(notification.created_at),
    }


__all__ = ["NOTIFICATION_MESSAGE_TYPE", "NotificationPublisher", "serialize_notification"]
