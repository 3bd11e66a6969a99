"""In-process registry of live websocket connections.

Only the dispatcher task calls ``register``, ``unregister``, ``join_room`` and
``leave_room``; it is the single writer of the maps below. Writers hold
``_stats_lock`` while mutating so that ``room_size``, ``total_connections`` and
``rooms`` can be read from any thread as a point-in-time snapshot.
"""

from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol


class Transport(Protocol):
    """Outbound half of a client connection."""

    async def send_json(self, data: Any) -> None: ...

    async def close(self, code: int = 1000) -> None: ...


class ConnectionState(str, Enum):
    UNREGISTERED = "unregistered"
    REGISTERED = "registered"
    IN_ROOM = "in_room"
    CLOSED = "closed"


@dataclass(eq=False)
class Connection:
    """One live client session.

    Instances hash by identity so they can live in sets; two connections for
    the same user are always distinct entries.
    """

    transport: Transport
    user_id: int | None = None
    room_id: str | None = None
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    state: ConnectionState = ConnectionState.UNREGISTERED

    def __repr__(self) -> str:
        return (
            f"Connection(id={self.id!r}, user_id={self.user_id!r}, "
            f"room_id={self.room_id!r}, state={self.state.value})"
        )


class ConnectionRegistry:
    """Track live connections and their room membership."""

    def __init__(self) -> None:
        self._connections: set[Connection] = set()
        self._rooms: dict[str, set[Connection]] = {}
        self._stats_lock = threading.Lock()

    def __contains__(self, connection: object) -> bool:
        return connection in self._connections

    def register(self, connection: Connection) -> None:
        """Add ``connection`` and, when it carries a room id, place it in that room."""

        with self._stats_lock:
            self._connections.add(connection)
            if connection.room_id:
                self._rooms.setdefault(connection.room_id, set()).add(connection)
                connection.state = ConnectionState.IN_ROOM
            else:
                connection.room_id = None
                connection.state = ConnectionState.REGISTERED

    def unregister(self, connection: Connection) -> bool:
        """Remove ``connection`` from every index.

        Returns ``True`` only when the connection was registered, so callers
        can close the transport exactly once. Unknown connections are ignored.
        """

        with self._stats_lock:
            if connection not in self._connections:
                return False
            self._connections.discard(connection)
            self._discard_from_room(connection)
            connection.state = ConnectionState.CLOSED
            return True

    def join_room(self, connection: Connection, room_id: str) -> bool:
        """Move ``connection`` into ``room_id``, leaving its previous room."""

        with self._stats_lock:
            if connection not in self._connections:
                return False
            if connection.room_id != room_id:
                self._discard_from_room(connection)
                self._rooms.setdefault(room_id, set()).add(connection)
                connection.room_id = room_id
            connection.state = ConnectionState.IN_ROOM
            return True

    def leave_room(self, connection: Connection) -> bool:
        with self._stats_lock:
            if connection not in self._connections:
                return False
            self._discard_from_room(connection)
            connection.room_id = None
            connection.state = ConnectionState.REGISTERED
            return True

    def connections_in_room(self, room_id: str) -> list[Connection]:
        return list(self._rooms.get(room_id, ()))

    def connections_for_user(self, user_id: int) -> list[Connection]:
        # Linear scan; anonymous connections never match.
        return [
            connection
            for connection in self._connections
            if connection.user_id is not None and connection.user_id == user_id
        ]

    def all_connections(self) -> list[Connection]:
        return list(self._connections)

    def room_size(self, room_id: str) -> int:
        with self._stats_lock:
            return len(self._rooms.get(room_id, ()))

    def total_connections(self) -> int:
        with self._stats_lock:
            return len(self._connections)

    def rooms(self) -> dict[str, int]:
        """Return a snapshot of ``room id -> member count``."""

        with self._stats_lock:
            return {room_id: len(members) for room_id, members in self._rooms.items()}

    def _discard_from_room(self, connection: Connection) -> None:
        room_id = connection.room_id
        if not room_id:
            return
        members = self._rooms.get(room_id)
        if members is None:
            return
        members.discard(connection)
        if not members:
            self._rooms.pop(room_id, None)


__all__ = ["Connection", "ConnectionRegistry", "ConnectionState", "Transport"]
