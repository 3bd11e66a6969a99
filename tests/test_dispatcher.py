"""Tests for the single-consumer dispatch loop."""

from __future__ import annotations

import asyncio
import logging

import anyio
import pytest

from social_api.infrastructure.realtime import ConnectionDispatcher, ConnectionState

pytestmark = pytest.mark.anyio


@pytest.fixture
async def dispatcher():
    dispatcher = ConnectionDispatcher()
    await dispatcher.start()
    yield dispatcher
    await dispatcher.stop()


def _types(transport) -> list[str]:
    return [frame["type"] for frame in transport.sent]


async def test_register_and_unregister_are_processed_in_order(dispatcher, make_transport) -> None:
    connection = dispatcher.register(make_transport(), user_id=1, room_id="topic:9")
    await dispatcher.drain()

    assert dispatcher.total_connections() == 1
    assert dispatcher.room_size("topic:9") == 1

    dispatcher.unregister(connection)
    await dispatcher.drain()

    assert dispatcher.total_connections() == 0
    assert dispatcher.room_size("topic:9") == 0
    assert connection.transport.closed is True


async def test_broadcast_after_join_reaches_the_new_member(dispatcher, make_transport) -> None:
    transport = make_transport()
    connection = dispatcher.register(transport, user_id=1)
    dispatcher.join_room(connection, "R")
    dispatcher.broadcast_to_room("R", "hello", {"n": 1})
    await dispatcher.drain()

    assert transport.sent == [{"type": "hello", "data": {"n": 1}}]


async def test_broadcast_after_leave_skips_the_former_member(dispatcher, make_transport) -> None:
    transport = make_transport()
    connection = dispatcher.register(transport, user_id=1, room_id="R")
    dispatcher.leave_room(connection)
    dispatcher.broadcast_to_room("R", "hello")
    await dispatcher.drain()

    assert transport.sent == []


async def test_user_broadcast_reaches_exactly_that_users_connections(
    dispatcher, make_transport
) -> None:
    first, second, other, anonymous = (make_transport() for _ in range(4))
    dispatcher.register(first, user_id=5)
    dispatcher.register(second, user_id=5, room_id="video:1")
    dispatcher.register(other, user_id=6)
    dispatcher.register(anonymous)

    dispatcher.broadcast_to_user(5, "notification", {"id": 1})
    await dispatcher.drain()

    assert _types(first) == ["notification"]
    assert _types(second) == ["notification"]
    assert other.sent == []
    assert anonymous.sent == []


async def test_room_broadcast_reaches_only_room_members(dispatcher, make_transport) -> None:
    c1, c2, elsewhere, lobby = (make_transport() for _ in range(4))
    first = dispatcher.register(c1, user_id=5)
    second = dispatcher.register(c2, user_id=6)
    dispatcher.register(elsewhere, user_id=7, room_id="video:7")
    dispatcher.register(lobby, user_id=8)
    dispatcher.join_room(first, "video:42")
    dispatcher.join_room(second, "video:42")

    dispatcher.broadcast_to_room("video:42", "comment", {"text": "hi"})
    await dispatcher.drain()

    assert _types(c1) == ["comment"]
    assert _types(c2) == ["comment"]
    assert elsewhere.sent == []
    assert lobby.sent == []


async def test_global_broadcast_reaches_everyone(dispatcher, make_transport) -> None:
    transports = [make_transport() for _ in range(3)]
    dispatcher.register(transports[0], user_id=1)
    dispatcher.register(transports[1], room_id="R")
    dispatcher.register(transports[2])

    dispatcher.broadcast_to_all("announcement", "maintenance at noon")
    await dispatcher.drain()

    for transport in transports:
        assert transport.sent == [{"type": "announcement", "data": "maintenance at noon"}]


async def test_failed_write_unregisters_the_connection(dispatcher, make_transport, caplog) -> None:
    broken = make_transport(fail=True)
    healthy = make_transport()
    broken_connection = dispatcher.register(broken, user_id=1, room_id="R")
    dispatcher.register(healthy, user_id=2, room_id="R")

    with caplog.at_level(logging.WARNING):
        dispatcher.broadcast_to_room("R", "first")
        await dispatcher.drain()

    assert broken.closed is True
    assert broken_connection.state is ConnectionState.CLOSED
    assert broken_connection not in dispatcher.registry
    assert dispatcher.room_size("R") == 1
    assert "Error sending message" in caplog.text

    broken.fail = False
    dispatcher.broadcast_to_room("R", "second")
    await dispatcher.drain()

    assert broken.sent == []
    assert _types(healthy) == ["first", "second"]


async def test_unregister_twice_is_harmless(dispatcher, make_transport) -> None:
    connection = dispatcher.register(make_transport(), user_id=1)
    dispatcher.unregister(connection)
    dispatcher.unregister(connection)
    await dispatcher.drain()

    assert dispatcher.total_connections() == 0


async def test_send_to_unknown_connection_is_dropped(dispatcher, make_transport) -> None:
    connection = dispatcher.register(make_transport())
    dispatcher.unregister(connection)
    dispatcher.send(connection, "pong", "pong")
    await dispatcher.drain()

    assert connection.transport.sent == []


async def test_payload_data_is_copied_at_submission(dispatcher, make_transport) -> None:
    transport = make_transport()
    dispatcher.register(transport, user_id=1)
    data = {"items": [1]}
    dispatcher.broadcast_to_user(1, "update", data)
    data["items"].append(2)
    await dispatcher.drain()

    assert transport.sent == [{"type": "update", "data": {"items": [1]}}]


async def test_submissions_from_worker_threads_are_marshalled(dispatcher, make_transport) -> None:
    transport = make_transport()
    dispatcher.register(transport, user_id=3)
    await dispatcher.drain()

    await anyio.to_thread.run_sync(dispatcher.broadcast_to_user, 3, "notification", {"id": 9})
    await dispatcher.drain()

    assert transport.sent == [{"type": "notification", "data": {"id": 9}}]


async def test_submissions_before_start_are_dropped(make_transport, caplog) -> None:
    dispatcher = ConnectionDispatcher()

    with caplog.at_level(logging.WARNING):
        dispatcher.register(make_transport(), user_id=1)
        dispatcher.broadcast_to_all("hello")

    assert dispatcher.total_connections() == 0
    assert "not running" in caplog.text


async def test_stop_closes_remaining_connections(make_transport) -> None:
    dispatcher = ConnectionDispatcher()
    await dispatcher.start()
    transport = make_transport()
    connection = dispatcher.register(transport, user_id=1, room_id="R")
    dispatcher.broadcast_to_room("R", "bye")

    await dispatcher.stop()

    assert _types(transport) == ["bye"]
    assert transport.closed is True
    assert connection.state is ConnectionState.CLOSED
    assert dispatcher.total_connections() == 0
    assert dispatcher.is_running is False


async def test_commands_submitted_while_stopping_are_logged_and_dropped(
    make_transport, caplog
) -> None:
    dispatcher = ConnectionDispatcher()
    await dispatcher.start()
    transport = make_transport()
    connection = dispatcher.register(transport, user_id=1)
    await dispatcher.drain()

    stopping = asyncio.create_task(dispatcher.stop())
    await asyncio.sleep(0)

    with caplog.at_level(logging.WARNING):
        dispatcher.send(connection, "late")
        await anyio.to_thread.run_sync(dispatcher.broadcast_to_user, 1, "late")
    with anyio.fail_after(5):
        await dispatcher.drain()
        await stopping

    assert transport.sent == []
    assert transport.closed is True
    assert "Realtime dispatcher is not running; dropping _Send" in caplog.text
    assert "dropping _Broadcast" in caplog.text
