"""Turn engagement events into persisted notifications and live pushes."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from social_api.domain.entities import Notification, NotificationType
from social_api.infrastructure.repositories import (
    CommentRepository,
    NotificationRepository,
    ReplyRepository,
    TopicRepository,
    UserRepository,
    VideoRepository,
)
from social_api.utils import now_in_app_timezone

if TYPE_CHECKING:
    from social_api.infrastructure.realtime import NotificationPublisher

logger = logging.getLogger(__name__)

MESSAGE_TEMPLATES: dict[NotificationType, str] = {
    NotificationType.TOPIC_REPLY: "{actor} replied to your topic: {title}",
    NotificationType.TOPIC_LIKE: "{actor} liked your topic: {title}",
    NotificationType.VIDEO_LIKE: "{actor} liked your video: {title}",
    NotificationType.VIDEO_COMMENT: "{actor} commented on your video: {title}",
    NotificationType.COMMENT_REPLY: "{actor} replied to your comment",
    NotificationType.REPLY_LIKE: "{actor} liked your reply",
    NotificationType.COMMENT_LIKE: "{actor} liked your comment",
    NotificationType.NEW_FOLLOWER: "{actor} started following you",
}


def _notify(
    session: Session,
    *,
    event_type: NotificationType,
    recipient_id: int,
    actor_id: int,
    resource_id: int | None,
    title: str = "",
    publisher: NotificationPublisher | None = None,
) -> Notification | None:
    if recipient_id == actor_id:
        logger.debug(
            "Skipping %s notification for self-action by user %s",
            event_type.value,
            actor_id,
        )
        return None

    actor = UserRepository(session).get(actor_id)
    if actor is None:
        raise ValueError("Actor not found")

    notification = Notification(
        id=None,
        recipient_id=recipient_id,
        actor_id=actor_id,
        event_type=event_type,
        message=MESSAGE_TEMPLATES[event_type].format(actor=actor.display_name, title=title),
        resource_id=resource_id,
        is_read=False,
        created_at=now_in_app_timezone(),
    )
    saved = NotificationRepository(session).create(notification)
    logger.debug(
        "Created %s notification %s for user %s", event_type.value, saved.id, recipient_id
    )
    if publisher is not None:
        publisher.publish(saved)
    return saved


def create_topic_reply_notification(
    session: Session,
    *,
    topic_id: int,
    actor_id: int,
    publisher: NotificationPublisher | None = None,
) -> Notification | None:
    """Tell the topic's author that ``actor_id`` replied to it."""

    topic = TopicRepository(session).get(topic_id)
    if topic is None:
        raise ValueError("Topic not found")
    return _notify(
        session,
        event_type=NotificationType.TOPIC_REPLY,
        recipient_id=topic.user_id,
        actor_id=actor_id,
        resource_id=topic.id,
        title=topic.title,
        publisher=publisher,
    )


def create_topic_like_notification(
    session: Session,
    *,
    topic_id: int,
    actor_id: int,
    publisher: NotificationPublisher | None = None,
) -> Notification | None:
    topic = TopicRepository(session).get(topic_id)
    if topic is None:
        raise ValueError("Topic not found")
    return _notify(
        session,
        event_type=NotificationType.TOPIC_LIKE,
        recipient_id=topic.user_id,
        actor_id=actor_id,
        resource_id=topic.id,
        title=topic.title,
        publisher=publisher,
    )


def create_video_like_notification(
    session: Session,
    *,
    video_id: int,
    actor_id: int,
    publisher: NotificationPublisher | None = None,
) -> Notification | None:
    video = VideoRepository(session).get(video_id)
    if video is None:
        raise ValueError("Video not found")
    return _notify(
        session,
        event_type=NotificationType.VIDEO_LIKE,
        recipient_id=video.user_id,
        actor_id=actor_id,
        resource_id=video.id,
        title=video.title,
        publisher=publisher,
    )


def create_video_comment_notification(
    session: Session,
    *,
    video_id: int,
    actor_id: int,
    publisher: NotificationPublisher | None = None,
) -> Notification | None:
    video = VideoRepository(session).get(video_id)
    if video is None:
        raise ValueError("Video not found")
    return _notify(
        session,
        event_type=NotificationType.VIDEO_COMMENT,
        recipient_id=video.user_id,
        actor_id=actor_id,
        resource_id=video.id,
        title=video.title,
        publisher=publisher,
    )


def create_comment_reply_notification(
    session: Session,
    *,
    comment_id: int,
    actor_id: int,
    publisher: NotificationPublisher | None = None,
) -> Notification | None:
    """Tell the author of ``comment_id`` that someone answered their comment."""

    comment = CommentRepository(session).get(comment_id)
    if comment is None:
        raise ValueError("Comment not found")
    return _notify(
        session,
        event_type=NotificationType.COMMENT_REPLY,
        recipient_id=comment.user_id,
        actor_id=actor_id,
        resource_id=comment.id,
        publisher=publisher,
    )


def create_reply_like_notification(
    session: Session,
    *,
    reply_id: int,
    actor_id: int,
    publisher: NotificationPublisher | None = None,
) -> Notification | None:
    reply = ReplyRepository(session).get(reply_id)
    if reply is None:
        raise ValueError("Reply not found")
    return _notify(
        session,
        event_type=NotificationType.REPLY_LIKE,
        recipient_id=reply.user_id,
        actor_id=actor_id,
        resource_id=reply.id,
        publisher=publisher,
    )


def create_comment_like_notification(
    session: Session,
    *,
    comment_id: int,
    actor_id: int,
    publisher: NotificationPublisher | None = None,
) -> Notification | None:
    comment = CommentRepository(session).get(comment_id)
    if comment is None:
        raise ValueError("Comment not found")
    return _notify(
        session,
        event_type=NotificationType.COMMENT_LIKE,
        recipient_id=comment.user_id,
        actor_id=actor_id,
        resource_id=comment.id,
        publisher=publisher,
    )


def create_new_follower_notification(
    session: Session,
    *,
    followed_user_id: int,
    actor_id: int,
    publisher: NotificationPublisher | None = None,
) -> Notification | None:
    """Tell ``followed_user_id`` about a new follower. Follows carry no resource id."""

    followed = UserRepository(session).get(followed_user_id)
    if followed is None:
        raise ValueError("User not found")
    return _notify(
        session,
        event_type=NotificationType.NEW_FOLLOWER,
        recipient_id=followed.id,
        actor_id=actor_id,
        resource_id=None,
        publisher=publisher,
    )


__all__ = [
    "MESSAGE_TEMPLATES",
    "create_comment_like_notification",
    "create_comment_reply_notification",
    "create_new_follower_notification",
    "create_reply_like_notification",
    "create_topic_like_notification",
    "create_topic_reply_notification",
    "create_video_comment_notification",
    "create_video_like_notification",
]
