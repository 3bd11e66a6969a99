"""Tests for the wire envelope and broadcast addressing."""

from __future__ import annotations

import pytest

from social_api.domain.entities import Notification, NotificationType
from social_api.infrastructure.realtime import (
    BroadcastMessage,
    WireMessage,
    build_message,
    serialize_notification,
)
from social_api.utils import now_in_app_timezone


def test_wire_message_accepts_camel_case_addressing() -> None:
    message = WireMessage.model_validate(
        {"type": "join_room", "data": {"roomId": "R"}, "userId": "5", "roomId": "R"}
    )

    assert message.user_id == "5"
    assert message.room_id == "R"
    assert message.to_payload() == {
        "type": "join_room",
        "userId": "5",
        "roomId": "R",
        "data": {"roomId": "R"},
    }


def test_build_message_always_carries_data() -> None:
    assert build_message("room_left") == {"type": "room_left", "data": None}


def test_broadcast_message_has_at_most_one_address() -> None:
    assert BroadcastMessage(payload={}).is_global is True
    assert BroadcastMessage(payload={}, user_id=1).is_global is False

    with pytest.raises(ValueError):
        BroadcastMessage(payload={}, user_id=1, room_id="R")


def test_serialize_notification_uses_wire_field_names() -> None:
    created_at = now_in_app_timezone()
    notification = Notification(
        id=3,
        recipient_id=1,
        actor_id=2,
        event_type=NotificationType.REPLY_LIKE,
        message="bob liked your reply",
        resource_id=9,
        created_at=created_at,
    )

    assert serialize_notification(notification) == {
        "id": 3,
        "type": "reply_like",
        "message": "bob liked your reply",
        "actorId": 2,
        "isRead": False,
        "createdAt": created_at.isoformat(),
    }
