"""Single-consumer dispatch loop owning the connection registry.

Every registry mutation and every outbound frame goes through one
``asyncio.Queue`` drained by one task, in submission order. Callers enqueue
and return immediately; they never see delivery results. Calls made from a
thread other than the dispatcher's event loop (sync route handlers, background
workers) are marshalled onto the loop with ``call_soon_threadsafe``.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

from .messages import BroadcastMessage, build_message
from .registry import Connection, ConnectionRegistry, Transport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Register:
    connection: Connection


@dataclass(frozen=True)
class _Unregister:
    connection: Connection


@dataclass(frozen=True)
class _JoinRoom:
    connection: Connection
    room_id: str


@dataclass(frozen=True)
class _LeaveRoom:
    connection: Connection


@dataclass(frozen=True)
class _Send:
    connection: Connection
    payload: dict[str, Any]


@dataclass(frozen=True)
class _Broadcast:
    message: BroadcastMessage


_STOP = object()


class ConnectionDispatcher:
    """Serialize connection lifecycle changes and message delivery."""

    def __init__(self, registry: ConnectionRegistry | None = None) -> None:
        self.registry = registry or ConnectionRegistry()
        self._loop: asyncio.AbstractEventLoop | None = None
        self._queue: asyncio.Queue | None = None
        self._task: asyncio.Task | None = None
        self._stopping = False

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Bind to the running event loop and spawn the dispatch task."""

        if self.is_running:
            return
        self._loop = asyncio.get_running_loop()
        self._queue = asyncio.Queue()
        self._stopping = False
        self._task = self._loop.create_task(self._run(self._queue), name="realtime-dispatcher")
        logger.info("Realtime dispatcher started")

    async def stop(self) -> None:
        """Process everything queued so far, then close all remaining connections."""

        if not self.is_running:
            return
        assert self._queue is not None and self._task is not None
        # Commands submitted after this point are refused, so none queue behind _STOP.
        self._stopping = True
        self._queue.put_nowait(_STOP)
        await self._task
        for connection in self.registry.all_connections():
            await self._drop(connection)
        self._task = None
        self._queue = None
        self._loop = None
        logger.info("Realtime dispatcher stopped")

    async def drain(self) -> None:
        """Wait until every command submitted so far has been processed."""

        if self._queue is not None:
            await self._queue.join()

    def register(
        self,
        transport: Transport,
        *,
        user_id: int | None = None,
        room_id: str | None = None,
    ) -> Connection:
        """Queue the registration of ``transport`` and return its connection handle."""

        connection = Connection(transport=transport, user_id=user_id, room_id=room_id or None)
        self._submit(_Register(connection))
        return connection

    def unregister(self, connection: Connection) -> None:
        self._submit(_Unregister(connection))

    def join_room(self, connection: Connection, room_id: str) -> None:
        self._submit(_JoinRoom(connection, room_id))

    def leave_room(self, connection: Connection) -> None:
        self._submit(_LeaveRoom(connection))

    def send(self, connection: Connection, message_type: str, data: Any = None) -> None:
        """Queue a frame for one connection, ordered with every other command."""

        self._submit(_Send(connection, build_message(message_type, data)))

    def broadcast(self, message: BroadcastMessage) -> None:
        self._submit(_Broadcast(message))

    def broadcast_to_user(self, user_id: int | None, message_type: str, data: Any = None) -> None:
        if user_id is None:
            return
        self.broadcast(
            BroadcastMessage(payload=build_message(message_type, data), user_id=user_id)
        )

    def broadcast_to_room(self, room_id: str, message_type: str, data: Any = None) -> None:
        if not room_id:
            return
        self.broadcast(
            BroadcastMessage(payload=build_message(message_type, data), room_id=room_id)
        )

    def broadcast_to_all(self, message_type: str, data: Any = None) -> None:
        self.broadcast(BroadcastMessage(payload=build_message(message_type, data)))

    def room_size(self, room_id: str) -> int:
        return self.registry.room_size(room_id)

    def total_connections(self) -> int:
        return self.registry.total_connections()

    def _submit(self, command: object) -> None:
        loop = self._loop
        if loop is None or self._stopping:
            self._log_dropped(command)
            return

        try:
            running_loop = asyncio.get_running_loop()
        except RuntimeError:
            running_loop = None

        if running_loop is loop:
            self._enqueue(command)
            return

        try:
            loop.call_soon_threadsafe(self._enqueue, command)
        except RuntimeError:
            logger.warning(
                "Realtime dispatcher loop is closed; dropping %s", type(command).__name__
            )

    def _enqueue(self, command: object) -> None:
        queue = self._queue
        if queue is None or self._stopping:
            self._log_dropped(command)
            return
        queue.put_nowait(command)

    @staticmethod
    def _log_dropped(command: object) -> None:
        logger.warning(
            "Realtime dispatcher is not running; dropping %s", type(command).__name__
        )

    async def _run(self, queue: asyncio.Queue) -> None:
        while True:
            command = await queue.get()
            try:
                if command is _STOP:
                    return
                await self._handle(command)
            except Exception:
                logger.exception("Realtime dispatcher failed to process %r", command)
            finally:
                queue.task_done()

    async def _handle(self, command: object) -> None:
        if isinstance(command, _Broadcast):
            await self._broadcast(command.message)
        elif isinstance(command, _Send):
            if command.connection in self.registry:
                await self._deliver(command.connection, command.payload)
        elif isinstance(command, _Register):
            connection = command.connection
            self.registry.register(connection)
            logger.info(
                "Client connected: user_id=%s room_id=%s connection=%s",
                connection.user_id,
                connection.room_id,
                connection.id,
            )
        elif isinstance(command, _Unregister):
            await self._drop(command.connection)
        elif isinstance(command, _JoinRoom):
            if self.registry.join_room(command.connection, command.room_id):
                logger.debug("Connection %s joined room %s", command.connection.id, command.room_id)
        elif isinstance(command, _LeaveRoom):
            if self.registry.leave_room(command.connection):
                logger.debug("Connection %s left its room", command.connection.id)
        else:
            logger.warning("Unknown realtime command %r", command)

    async def _broadcast(self, message: BroadcastMessage) -> None:
        if message.room_id:
            targets = self.registry.connections_in_room(message.room_id)
        elif message.user_id is not None:
            targets = self.registry.connections_for_user(message.user_id)
        else:
            targets = self.registry.all_connections()

        for connection in targets:
            await self._deliver(connection, message.payload)

    async def _deliver(self, connection: Connection, payload: dict[str, Any]) -> bool:
        try:
            await connection.transport.send_json(payload)
        except Exception as exc:
            logger.warning("Error sending message to connection %s: %s", connection.id, exc)
            await self._drop(connection)
            return False
        return True

    async def _drop(self, connection: Connection) -> None:
        if not self.registry.unregister(connection):
            return
        logger.info(
            "Client disconnected: user_id=%s room_id=%s connection=%s",
            connection.user_id,
            connection.room_id,
            connection.id,
        )
        try:
            await connection.transport.close()
        except Exception as exc:
            logger.debug("Ignoring error while closing connection %s: %s", connection.id, exc)


__all__ = ["ConnectionDispatcher"]
