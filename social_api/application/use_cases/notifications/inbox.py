"""Use cases backing a user's notification inbox."""

from __future__ import annotations

from typing import Iterable

from sqlalchemy.orm import Session

from social_api.domain.entities import Notification, NotificationPage, NotificationType
from social_api.infrastructure.repositories import NotificationRepository

_NOT_FOUND = "Notification not found"
_FORBIDDEN = "You can only modify your own notifications"


def list_notifications(
    session: Session,
    *,
    user_id: int,
    event_type: NotificationType | str | None = None,
    is_read: bool | None = None,
    page: int = 1,
    limit: int = 20,
) -> NotificationPage:
    """Return one page of ``user_id``'s notifications, newest first.

    ``total_count`` honours the filters while ``unread_count`` always covers
    the whole inbox, so a client can render both from one response.
    """

    if page < 1:
        raise ValueError("page must be greater than or equal to 1")
    if limit < 1:
        raise ValueError("limit must be greater than or equal to 1")

    repository = NotificationRepository(session)
    items, total = repository.list_for_user(
        user_id,
        event_type=NotificationType(event_type) if event_type is not None else None,
        is_read=is_read,
        offset=(page - 1) * limit,
        limit=limit,
    )
    return NotificationPage(
        items=items,
        total_count=total,
        unread_count=repository.count_unread(user_id),
        page=page,
        limit=limit,
    )


def get_unread_count(session: Session, *, user_id: int) -> int:
    return NotificationRepository(session).count_unread(user_id)


def mark_notification_as_read(
    session: Session, *, notification_id: int, user_id: int
) -> Notification:
    """Mark one notification as read after checking ownership."""

    repository = NotificationRepository(session)
    notification = _get_owned(repository, notification_id=notification_id, user_id=user_id)
    if not notification.is_read:
        repository.mark_as_read(notification_id)
        notification.is_read = True
    return notification


def mark_notifications_as_read(
    session: Session, *, notification_ids: Iterable[int], user_id: int
) -> int:
    """Mark several notifications as read in one statement.

    Unknown ids are ignored. If any existing id belongs to another user the
    whole request is rejected and nothing is modified. Returns the number of
    notifications that went from unread to read.
    """

    repository = NotificationRepository(session)
    notifications = repository.list_by_ids(notification_ids)
    if any(notification.recipient_id != user_id for notification in notifications):
        raise PermissionError(_FORBIDDEN)

    unread_ids = [notification.id for notification in notifications if not notification.is_read]
    return repository.mark_many_as_read(unread_ids)


def mark_all_notifications_as_read(session: Session, *, user_id: int) -> int:
    return NotificationRepository(session).mark_all_as_read(user_id)


def delete_notification(session: Session, *, notification_id: int, user_id: int) -> None:
    repository = NotificationRepository(session)
    _get_owned(repository, notification_id=notification_id, user_id=user_id)
    repository.delete(notification_id)


def delete_all_notifications(session: Session, *, user_id: int) -> int:
    return NotificationRepository(session).delete_for_user(user_id)


def list_unread_notifications(
    session: Session, *, user_id: int, limit: int | None = 50
) -> list[Notification]:
    """Return the most recent unread notifications, used to prime new sessions."""

    return list(NotificationRepository(session).list_unread_for_user(user_id, limit=limit))


def _get_owned(
    repository: NotificationRepository, *, notification_id: int, user_id: int
) -> Notification:
    notification = repository.get(notification_id)
    if notification is None:
        raise ValueError(_NOT_FOUND)
    if notification.recipient_id != user_id:
        raise PermissionError(_FORBIDDEN)
    return notification


__all__ = [
    "delete_all_notifications",
    "delete_notification",
    "get_unread_count",
    "list_notifications",
    "list_unread_notifications",
    "mark_all_notifications_as_read",
    "mark_notification_as_read",
    "mark_notifications_as_read",
]
