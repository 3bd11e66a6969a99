"""Client-driven room membership subprotocol."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from .dispatcher import ConnectionDispatcher
from .messages import WireMessage
from .registry import Connection

logger = logging.getLogger(__name__)

PING = "ping"
PONG = "pong"
JOIN_ROOM = "join_room"
ROOM_JOINED = "room_joined"
LEAVE_ROOM = "leave_room"
ROOM_LEFT = "room_left"


def parse_client_message(payload: Any) -> WireMessage | None:
    """Return ``payload`` as a :class:`WireMessage` or ``None`` when malformed."""

    try:
        return WireMessage.model_validate(payload)
    except ValidationError as exc:
        logger.debug("Ignoring malformed realtime message: %s", exc)
        return None


def handle_client_message(
    dispatcher: ConnectionDispatcher, connection: Connection, payload: Any
) -> None:
    """Apply one inbound frame from ``connection``.

    Membership changes and their replies are both queued on ``dispatcher`` so
    the reply is emitted after the change is visible. Malformed frames and
    unknown message types are logged and otherwise ignored.
    """

    message = parse_client_message(payload)
    if message is None:
        return

    if message.type == PING:
        dispatcher.send(connection, PONG, "pong")
    elif message.type == JOIN_ROOM:
        room_id = _extract_room_id(message.data)
        if room_id is None:
            logger.info(
                "Ignoring join_room without a room id from connection %s", connection.id
            )
            return
        dispatcher.join_room(connection, room_id)
        dispatcher.send(
            connection,
            ROOM_JOINED,
            {"roomId": room_id, "message": f"Joined room {room_id}"},
        )
    elif message.type == LEAVE_ROOM:
        dispatcher.leave_room(connection)
        dispatcher.send(connection, ROOM_LEFT, "Left room successfully")
    else:
        logger.info(
            "Unknown realtime message type %r from connection %s",
            message.type,
            connection.id,
        )


def _extract_room_id(data: Any) -> str | None:
    if not isinstance(data, dict):
        return None
    room_id = data.get("roomId")
    if not isinstance(room_id, str) or not room_id:
        return None
    return room_id


__all__ = [
    "JOIN_ROOM",
    "LEAVE_ROOM",
    "PING",
    "PONG",
    "ROOM_JOINED",
    "ROOM_LEFT",
    "handle_client_message",
    "parse_client_message",
]
