"""Detached follow-up work scheduled after a successful engagement write.

Each job opens its own database session, so it can run on a background
worker thread after the request session is gone. Jobs are handed to the
:class:`BackgroundTaskRunner`, which logs and drops any failure: the primary
write has already been reported as successful to the user.
"""

from __future__ import annotations

from typing import Callable

from sqlalchemy.orm import Session

from social_api.application.use_cases.notifications import (
    create_comment_like_notification,
    create_comment_reply_notification,
    create_new_follower_notification,
    create_reply_like_notification,
    create_topic_like_notification,
    create_topic_reply_notification,
    create_video_comment_notification,
    create_video_like_notification,
)
from social_api.domain.entities import Comment, LikeTarget, Reply
from social_api.infrastructure.database import SessionLocal
from social_api.infrastructure.realtime import BackgroundTaskRunner, NotificationPublisher
from social_api.infrastructure.repositories import (
    TopicRepository,
    UserRepository,
    VideoRepository,
)

SessionFactory = Callable[[], Session]

_LIKE_NOTIFIERS = {
    LikeTarget.TOPIC: (create_topic_like_notification, "topic_id"),
    LikeTarget.VIDEO: (create_video_like_notification, "video_id"),
    LikeTarget.REPLY: (create_reply_like_notification, "reply_id"),
    LikeTarget.COMMENT: (create_comment_like_notification, "comment_id"),
}


def _run_in_session(session_factory: SessionFactory, operation: Callable[..., object], **kwargs) -> None:
    session = session_factory()
    try:
        operation(session, **kwargs)
    finally:
        session.close()


def notify_like(
    *,
    target: LikeTarget,
    target_id: int,
    actor_id: int,
    publisher: NotificationPublisher | None,
    session_factory: SessionFactory = SessionLocal,
) -> None:
    notifier, id_field = _LIKE_NOTIFIERS[LikeTarget(target)]
    _run_in_session(
        session_factory,
        notifier,
        **{id_field: target_id},
        actor_id=actor_id,
        publisher=publisher,
    )


def refresh_like_count(
    *, target: LikeTarget, target_id: int, session_factory: SessionFactory = SessionLocal
) -> None:
    """Recompute the stored like counter; replies and comments keep none."""

    target = LikeTarget(target)
    if target is LikeTarget.TOPIC:
        _run_in_session(session_factory, lambda s: TopicRepository(s).refresh_like_count(target_id))
    elif target is LikeTarget.VIDEO:
        _run_in_session(session_factory, lambda s: VideoRepository(s).refresh_like_count(target_id))


def notify_new_follower(
    *,
    followed_user_id: int,
    actor_id: int,
    publisher: NotificationPublisher | None,
    session_factory: SessionFactory = SessionLocal,
) -> None:
    _run_in_session(
        session_factory,
        create_new_follower_notification,
        followed_user_id=followed_user_id,
        actor_id=actor_id,
        publisher=publisher,
    )


def refresh_follow_counts(
    *, follower_id: int, followed_user_id: int, session_factory: SessionFactory = SessionLocal
) -> None:
    def _refresh(session: Session) -> None:
        users = UserRepository(session)
        users.refresh_follow_counts(followed_user_id)
        users.refresh_follow_counts(follower_id)

    _run_in_session(session_factory, _refresh)


def notify_topic_reply(
    *,
    topic_id: int,
    actor_id: int,
    publisher: NotificationPublisher | None,
    session_factory: SessionFactory = SessionLocal,
) -> None:
    _run_in_session(
        session_factory,
        create_topic_reply_notification,
        topic_id=topic_id,
        actor_id=actor_id,
        publisher=publisher,
    )


def refresh_reply_count(*, topic_id: int, session_factory: SessionFactory = SessionLocal) -> None:
    _run_in_session(session_factory, lambda s: TopicRepository(s).refresh_reply_count(topic_id))


def notify_comment(
    *,
    comment: Comment,
    publisher: NotificationPublisher | None,
    session_factory: SessionFactory = SessionLocal,
) -> None:
    """Notify the parent comment's author for answers, otherwise the video owner."""

    if comment.parent_id is not None:
        _run_in_session(
            session_factory,
            create_comment_reply_notification,
            comment_id=comment.parent_id,
            actor_id=comment.user_id,
            publisher=publisher,
        )
    else:
        _run_in_session(
            session_factory,
            create_video_comment_notification,
            video_id=comment.video_id,
            actor_id=comment.user_id,
            publisher=publisher,
        )


def refresh_comment_count(*, video_id: int, session_factory: SessionFactory = SessionLocal) -> None:
    _run_in_session(session_factory, lambda s: VideoRepository(s).refresh_comment_count(video_id))


def schedule_like_side_effects(
    runner: BackgroundTaskRunner,
    *,
    target: LikeTarget,
    target_id: int,
    actor_id: int,
    publisher: NotificationPublisher | None,
    liked: bool,
) -> None:
    """Queue the counter refresh and, for a new like, the owner's notification."""

    runner.submit(refresh_like_count, target=target, target_id=target_id)
    if liked:
        runner.submit(
            notify_like,
            target=target,
            target_id=target_id,
            actor_id=actor_id,
            publisher=publisher,
        )


def schedule_follow_side_effects(
    runner: BackgroundTaskRunner,
    *,
    follower_id: int,
    followed_user_id: int,
    publisher: NotificationPublisher | None,
    followed: bool,
) -> None:
    runner.submit(
        refresh_follow_counts, follower_id=follower_id, followed_user_id=followed_user_id
    )
    if followed:
        runner.submit(
            notify_new_follower,
            followed_user_id=followed_user_id,
            actor_id=follower_id,
            publisher=publisher,
        )


def schedule_reply_side_effects(
    runner: BackgroundTaskRunner, *, reply: Reply, publisher: NotificationPublisher | None
) -> None:
    runner.submit(refresh_reply_count, topic_id=reply.topic_id)
    runner.submit(
        notify_topic_reply, topic_id=reply.topic_id, actor_id=reply.user_id, publisher=publisher
    )


def schedule_comment_side_effects(
    runner: BackgroundTaskRunner, *, comment: Comment, publisher: NotificationPublisher | None
) -> None:
    runner.submit(refresh_comment_count, video_id=comment.video_id)
    runner.submit(notify_comment, comment=comment, publisher=publisher)


__all__ = [
    "notify_comment",
    "notify_like",
    "notify_new_follower",
    "notify_topic_reply",
    "refresh_comment_count",
    "refresh_follow_counts",
    "refresh_like_count",
    "refresh_reply_count",
    "schedule_comment_side_effects",
    "schedule_follow_side_effects",
    "schedule_like_side_effects",
    "schedule_reply_side_effects",
]
