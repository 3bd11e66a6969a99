"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Iterable

from sqlalchemy.orm import Session

from social_api.domain.entities import ActorSummary, Notification, NotificationType
from social_api.infrastructure.models import NotificationModel, UserModel
from social_api.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class NotificationRepository:
    """Provide CRUD operations for :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, notification_id: int) -> Notification | None:
        model = self.session.get(NotificationModel, notification_id)
        return self._to_entity(model) if model else None

    def list_by_ids(self, notification_ids: Iterable[int]) -> Sequence[Notification]:
        ids = {notification_id for notification_id in notification_ids if notification_id is not None}
        if not ids:
            return []
        query = self.session.query(NotificationModel).filter(NotificationModel.id.in_(ids))
        return [self._to_entity(model) for model in query.all()]

    def list_for_user(
        self,
        user_id: int,
        *,
        event_type: NotificationType | None = None,
        is_read: bool | None = None,
        offset: int = 0,
        limit: int = 20,
    ) -> tuple[list[Notification], int]:
        """Return one page of ``user_id``'s notifications and the filtered total."""

        query = self.session.query(NotificationModel).filter(
            NotificationModel.user_id == user_id
        )
        if event_type is not None:
            query = query.filter(NotificationModel.event_type == NotificationType(event_type).value)
        if is_read is not None:
            query = query.filter(NotificationModel.is_read.is_(is_read))

        total = query.order_by(None).count()
        models = (
            query.order_by(
                NotificationModel.created_at.desc(), NotificationModel.id.desc()
            )
            .offset(offset)
            .limit(limit)
            .all()
        )
        return [self._to_entity(model) for model in models], total

    def list_unread_for_user(
        self, user_id: int, *, limit: int | None = 50
    ) -> Sequence[Notification]:
        query = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.user_id == user_id)
            .filter(NotificationModel.is_read.is_(False))
            .order_by(
                NotificationModel.created_at.desc(), NotificationModel.id.desc()
            )
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def count_unread(self, user_id: int) -> int:
        return (
            self.session.query(NotificationModel)
            .filter(NotificationModel.user_id == user_id)
            .filter(NotificationModel.is_read.is_(False))
            .count()
        )

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel(
            user_id=notification.recipient_id,
            actor_id=notification.actor_id,
            event_type=NotificationType(notification.event_type).value,
            resource_id=notification.resource_id,
            message=notification.message,
            is_read=notification.is_read,
            created_at=(
                ensure_app_naive_datetime(notification.created_at)
                or ensure_app_naive_datetime(now_in_app_timezone())
            ),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def mark_as_read(self, notification_id: int) -> None:
        self.session.query(NotificationModel).filter(
            NotificationModel.id == notification_id
        ).update({NotificationModel.is_read: True}, synchronize_session=False)
        self.session.commit()

    def mark_many_as_read(self, notification_ids: Iterable[int]) -> int:
        ids = [notification_id for notification_id in notification_ids if notification_id is not None]
        if not ids:
            return 0
        updated = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.id.in_(ids))
            .update({NotificationModel.is_read: True}, synchronize_session=False)
        )
        self.session.commit()
        return updated

    def mark_all_as_read(self, user_id: int) -> int:
        updated = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.user_id == user_id)
            .filter(NotificationModel.is_read.is_(False))
            .update({NotificationModel.is_read: True}, synchronize_session=False)
        )
        self.session.commit()
        return updated

    def delete(self, notification_id: int) -> None:
        self.session.query(NotificationModel).filter(
            NotificationModel.id == notification_id
        ).delete(synchronize_session=False)
        self.session.commit()

    def delete_for_user(self, user_id: int) -> int:
        deleted = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.user_id == user_id)
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return deleted

    @staticmethod
    def _actor_to_summary(model: UserModel | None) -> ActorSummary | None:
        if model is None:
            return None
        return ActorSummary(
            id=model.id,
            username=model.username,
            full_name=model.full_name or "",
            avatar=model.avatar,
        )

    @classmethod
    def _to_entity(cls, model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            recipient_id=model.user_id,
            actor_id=model.actor_id,
            event_type=NotificationType(model.event_type),
            message=model.message,
            resource_id=model.resource_id,
            is_read=bool(model.is_read),
            created_at=ensure_app_timezone(model.created_at),
            actor=cls._actor_to_summary(model.actor),
        )


__all__ = ["NotificationRepository"]
