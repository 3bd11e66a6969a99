"""Tests for turning engagement events into notifications."""

from __future__ import annotations

import pytest

from social_api.application.use_cases.engagement import create_comment, create_reply
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
from social_api.domain.entities import NotificationType
from social_api.infrastructure.repositories import NotificationRepository


@pytest.fixture
def scene(db_session, make_user, make_topic, make_video):
    """Alice owns a topic, a video, a reply and a comment; Bob is another member."""

    alice = make_user("alice")
    bob = make_user("bob")
    topic = make_topic(alice.id, title="Weekend ride")
    video = make_video(alice.id, title="Sunset timelapse")
    reply = create_reply(db_session, topic_id=topic.id, user_id=alice.id, content="Count me in")
    comment = create_comment(db_session, video_id=video.id, user_id=alice.id, content="Shot on film")
    return {
        "alice": alice,
        "bob": bob,
        "topic": topic,
        "video": video,
        "reply": reply,
        "comment": comment,
    }


EVENTS = [
    (create_topic_reply_notification, "topic_id", "topic", NotificationType.TOPIC_REPLY,
     "bob replied to your topic: Weekend ride"),
    (create_topic_like_notification, "topic_id", "topic", NotificationType.TOPIC_LIKE,
     "bob liked your topic: Weekend ride"),
    (create_video_like_notification, "video_id", "video", NotificationType.VIDEO_LIKE,
     "bob liked your video: Sunset timelapse"),
    (create_video_comment_notification, "video_id", "video", NotificationType.VIDEO_COMMENT,
     "bob commented on your video: Sunset timelapse"),
    (create_comment_reply_notification, "comment_id", "comment", NotificationType.COMMENT_REPLY,
     "bob replied to your comment"),
    (create_reply_like_notification, "reply_id", "reply", NotificationType.REPLY_LIKE,
     "bob liked your reply"),
    (create_comment_like_notification, "comment_id", "comment", NotificationType.COMMENT_LIKE,
     "bob liked your comment"),
]


@pytest.mark.parametrize(("create", "id_field", "resource", "event_type", "message"), EVENTS)
def test_event_notifies_resource_owner(
    db_session, scene, recording_publisher, create, id_field, resource, event_type, message
) -> None:
    resource_id = scene[resource].id

    notification = create(
        db_session,
        **{id_field: resource_id},
        actor_id=scene["bob"].id,
        publisher=recording_publisher,
    )

    assert notification is not None
    assert notification.id is not None
    assert notification.recipient_id == scene["alice"].id
    assert notification.actor_id == scene["bob"].id
    assert notification.event_type is event_type
    assert notification.resource_id == resource_id
    assert notification.message == message
    assert notification.is_read is False
    assert notification.created_at is not None
    assert recording_publisher.published == [notification]


@pytest.mark.parametrize(("create", "id_field", "resource", "event_type", "message"), EVENTS)
def test_self_action_creates_nothing(
    db_session, scene, recording_publisher, create, id_field, resource, event_type, message
) -> None:
    result = create(
        db_session,
        **{id_field: scene[resource].id},
        actor_id=scene["alice"].id,
        publisher=recording_publisher,
    )

    assert result is None
    assert NotificationRepository(db_session).count_unread(scene["alice"].id) == 0
    assert recording_publisher.published == []


def test_topic_like_scenario(db_session, make_user, make_topic, recording_publisher) -> None:
    owner = make_user("owner")
    liker = make_user("liker")
    topic = make_topic(owner.id)

    create_topic_like_notification(
        db_session, topic_id=topic.id, actor_id=liker.id, publisher=recording_publisher
    )
    create_topic_like_notification(
        db_session, topic_id=topic.id, actor_id=owner.id, publisher=recording_publisher
    )

    items, total = NotificationRepository(db_session).list_for_user(owner.id)
    assert total == 1
    assert items[0].recipient_id == owner.id
    assert items[0].actor_id == liker.id
    assert items[0].event_type is NotificationType.TOPIC_LIKE
    assert items[0].is_read is False
    assert items[0].actor is not None and items[0].actor.username == "liker"
    assert [n.recipient_id for n in recording_publisher.published] == [owner.id]


def test_new_follower_has_no_resource(db_session, make_user, recording_publisher) -> None:
    followed = make_user("followed")
    follower = make_user("follower")

    notification = create_new_follower_notification(
        db_session,
        followed_user_id=followed.id,
        actor_id=follower.id,
        publisher=recording_publisher,
    )

    assert notification.event_type is NotificationType.NEW_FOLLOWER
    assert notification.resource_id is None
    assert notification.message == "follower started following you"


def test_self_follow_is_suppressed(db_session, make_user, recording_publisher) -> None:
    user = make_user()

    assert (
        create_new_follower_notification(
            db_session, followed_user_id=user.id, actor_id=user.id, publisher=recording_publisher
        )
        is None
    )
    assert recording_publisher.published == []


@pytest.mark.parametrize(
    ("create", "kwargs", "expected"),
    [
        (create_topic_like_notification, {"topic_id": 999}, "Topic not found"),
        (create_video_like_notification, {"video_id": 999}, "Video not found"),
        (create_reply_like_notification, {"reply_id": 999}, "Reply not found"),
        (create_comment_like_notification, {"comment_id": 999}, "Comment not found"),
        (create_new_follower_notification, {"followed_user_id": 999}, "User not found"),
    ],
)
def test_missing_resource_raises(db_session, make_user, create, kwargs, expected) -> None:
    actor = make_user()

    with pytest.raises(ValueError, match=expected):
        create(db_session, **kwargs, actor_id=actor.id)


def test_missing_actor_raises(db_session, make_user, make_topic) -> None:
    owner = make_user()
    topic = make_topic(owner.id)

    with pytest.raises(ValueError, match="Actor not found"):
        create_topic_like_notification(db_session, topic_id=topic.id, actor_id=999)

    assert NotificationRepository(db_session).count_unread(owner.id) == 0


def test_publisher_is_optional(db_session, make_user, make_topic) -> None:
    owner = make_user()
    actor = make_user()
    topic = make_topic(owner.id)

    notification = create_topic_reply_notification(db_session, topic_id=topic.id, actor_id=actor.id)

    assert notification is not None
    assert NotificationRepository(db_session).count_unread(owner.id) == 1
