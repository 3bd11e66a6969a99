"""Websocket endpoint and statistics for realtime delivery."""

from __future__ import annotations

import logging
from typing import Any

import anyio
from fastapi import APIRouter, Depends, HTTPException, Query, WebSocket, WebSocketDisconnect
from sqlalchemy.exc import SQLAlchemyError
from starlette.websockets import WebSocketState

from social_api.application.use_cases.notifications import list_unread_notifications
from social_api.config import get_settings
from social_api.domain.entities import Notification, User
from social_api.infrastructure.database import SessionLocal
from social_api.infrastructure.realtime import (
    ConnectionDispatcher,
    handle_client_message,
    serialize_notification,
)
from social_api.interfaces.api.dependencies import (
    get_current_active_user,
    get_dispatcher,
    resolve_current_user,
)
from social_api.interfaces.api.schemas import RealtimeStatsRead

logger = logging.getLogger(__name__)

router = APIRouter(tags=["realtime"])

INIT_MESSAGE_TYPE = "init"


class StarletteWebSocketTransport:
    """Adapt a Starlette websocket to the dispatcher's transport interface.

    Every write carries a deadline; an expired deadline raises ``TimeoutError``
    and the dispatcher treats it like any other failed write.
    """

    def __init__(self, websocket: WebSocket, *, send_timeout: float) -> None:
        self._websocket = websocket
        self._send_timeout = send_timeout

    async def send_json(self, data: Any) -> None:
        with anyio.fail_after(self._send_timeout):
            await self._websocket.send_json(data)

    async def close(self, code: int = 1000) -> None:
        if (
            self._websocket.application_state == WebSocketState.DISCONNECTED
            or self._websocket.client_state == WebSocketState.DISCONNECTED
        ):
            return
        await self._websocket.close(code=code)


def _resolve_identity(token: str | None) -> tuple[int | None, list[Notification]]:
    """Return the user id behind ``token`` and their unread notifications.

    A missing, invalid or inactive identity yields an anonymous session.
    """

    if not token:
        return None, []

    session = SessionLocal()
    try:
        user = resolve_current_user(token, session)
        if not user.is_active:
            logger.info("Inactive user %s opened an anonymous realtime session", user.id)
            return None, []
        pending = list_unread_notifications(session, user_id=user.id)
    except HTTPException as exc:
        logger.info("Realtime token rejected (%s); continuing anonymously", exc.detail)
        return None, []
    except SQLAlchemyError:
        logger.exception("Could not resolve realtime identity; continuing anonymously")
        return None, []
    finally:
        session.close()
    return user.id, pending


@router.websocket("/ws")
async def realtime_websocket(websocket: WebSocket) -> None:
    """Register the socket with the dispatcher and run the membership protocol."""

    dispatcher: ConnectionDispatcher = websocket.app.state.dispatcher
    user_id, pending = _resolve_identity(websocket.query_params.get("token"))
    room_id = websocket.query_params.get("room") or None

    await websocket.accept()
    transport = StarletteWebSocketTransport(
        websocket, send_timeout=get_settings().websocket_send_timeout_seconds
    )
    connection = dispatcher.register(transport, user_id=user_id, room_id=room_id)
    if user_id is not None:
        dispatcher.send(
            connection,
            INIT_MESSAGE_TYPE,
            [serialize_notification(notification) for notification in pending],
        )

    try:
        while True:
            try:
                payload = await websocket.receive_json()
            except (ValueError, KeyError):
                logger.debug("Ignoring non-JSON frame from connection %s", connection.id)
                continue
            handle_client_message(dispatcher, connection, payload)
    except WebSocketDisconnect:
        logger.debug("Connection %s closed by the client", connection.id)
    except RuntimeError as exc:
        # Raised once the dispatcher has already closed the socket.
        logger.debug("Connection %s is no longer readable: %s", connection.id, exc)
    finally:
        dispatcher.unregister(connection)


@router.get("/realtime/stats", response_model=RealtimeStatsRead)
def read_realtime_stats(
    room: str | None = Query(default=None, min_length=1),
    dispatcher: ConnectionDispatcher = Depends(get_dispatcher),
    current_user: User = Depends(get_current_active_user),
) -> RealtimeStatsRead:
    """Return a point-in-time snapshot of live connections."""

    return RealtimeStatsRead(
        total_connections=dispatcher.total_connections(),
        room=room,
        room_size=dispatcher.room_size(room) if room else None,
        rooms=dispatcher.registry.rooms(),
    )
