"""End-to-end tests for the websocket endpoint."""

from __future__ import annotations

from sqlalchemy.exc import OperationalError

from social_api.infrastructure.security import create_access_token
from social_api.interfaces.api.routes import realtime as realtime_routes


def _ws_url(user_id: int | None = None, room: str | None = None) -> str:
    params = []
    if user_id is not None:
        params.append(f"token={create_access_token(user_id)}")
    if room:
        params.append(f"room={room}")
    return "/ws" + ("?" + "&".join(params) if params else "")


def test_authenticated_session_receives_init_and_live_notifications(
    client, make_user, make_topic, auth_headers
) -> None:
    owner = make_user("owner")
    fan = make_user("fan")
    topic = make_topic(owner.id, title="Night market")

    with client.websocket_connect(_ws_url(owner.id)) as websocket:
        assert websocket.receive_json() == {"type": "init", "data": []}
        websocket.send_json({"type": "ping"})
        assert websocket.receive_json() == {"type": "pong", "data": "pong"}

        response = client.post(f"/topics/{topic.id}/like", headers=auth_headers(fan.id))
        assert response.status_code == 200

        message = websocket.receive_json()
        assert message["type"] == "notification"
        data = message["data"]
        assert data["type"] == "topic_like"
        assert data["message"] == "fan liked your topic: Night market"
        assert data["actorId"] == fan.id
        assert data["isRead"] is False
        assert data["id"] > 0
        assert data["createdAt"]


def test_init_lists_pending_notifications(client, settle, make_user, auth_headers) -> None:
    star = make_user("star")
    fan = make_user("fan")
    client.post(f"/users/{star.id}/follow", headers=auth_headers(fan.id))
    settle()

    with client.websocket_connect(_ws_url(star.id)) as websocket:
        init = websocket.receive_json()

    assert init["type"] == "init"
    assert [item["type"] for item in init["data"]] == ["new_follower"]


def test_anonymous_and_invalid_tokens_get_anonymous_sessions(client) -> None:
    with client.websocket_connect("/ws?token=garbage") as websocket:
        websocket.send_json({"type": "ping"})
        assert websocket.receive_json() == {"type": "pong", "data": "pong"}

    with client.websocket_connect("/ws") as websocket:
        websocket.send_text("not json")
        websocket.send_json({"type": "dance"})
        websocket.send_json({"type": "ping"})
        assert websocket.receive_json() == {"type": "pong", "data": "pong"}


def test_database_error_during_identity_lookup_falls_back_to_anonymous(
    client, make_user, monkeypatch, caplog
) -> None:
    user = make_user()

    def unavailable(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    monkeypatch.setattr(realtime_routes, "list_unread_notifications", unavailable)

    with client.websocket_connect(_ws_url(user.id)) as websocket:
        websocket.send_json({"type": "ping"})
        assert websocket.receive_json() == {"type": "pong", "data": "pong"}

    assert "Could not resolve realtime identity" in caplog.text


def test_room_membership_and_stats(client, settle, app, make_user, auth_headers) -> None:
    viewer = make_user()
    headers = auth_headers(viewer.id)

    with client.websocket_connect(_ws_url(room="video:42")) as first, client.websocket_connect(
        "/ws"
    ) as second, client.websocket_connect("/ws") as bystander:
        second.send_json({"type": "join_room", "data": {"roomId": "video:42"}})
        assert second.receive_json() == {
            "type": "room_joined",
            "data": {"roomId": "video:42", "message": "Joined room video:42"},
        }
        bystander.send_json({"type": "ping"})
        assert bystander.receive_json()["type"] == "pong"
        first.send_json({"type": "ping"})
        assert first.receive_json()["type"] == "pong"

        stats = client.get("/realtime/stats", params={"room": "video:42"}, headers=headers).json()
        assert stats["total_connections"] == 3
        assert stats["room_size"] == 2
        assert stats["rooms"] == {"video:42": 2}

        app.state.dispatcher.broadcast_to_room("video:42", "comment_added", {"text": "hi"})
        assert first.receive_json() == {"type": "comment_added", "data": {"text": "hi"}}
        assert second.receive_json() == {"type": "comment_added", "data": {"text": "hi"}}

        second.send_json({"type": "leave_room"})
        assert second.receive_json() == {"type": "room_left", "data": "Left room successfully"}

        app.state.dispatcher.broadcast_to_room("video:42", "comment_added", {"text": "again"})
        app.state.dispatcher.broadcast_to_all("announcement", "bye")
        assert first.receive_json()["data"] == {"text": "again"}
        assert first.receive_json()["type"] == "announcement"
        assert second.receive_json()["type"] == "announcement"
        assert bystander.receive_json()["type"] == "announcement"

    settle()
    stats = client.get("/realtime/stats", headers=headers).json()
    assert stats["total_connections"] == 0
    assert stats["room_size"] is None
    assert stats["rooms"] == {}
