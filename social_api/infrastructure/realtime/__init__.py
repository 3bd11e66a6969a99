"""Realtime delivery: connection registry, dispatch loop and publishers."""

from .background import BackgroundTaskRunner
from .dispatcher import ConnectionDispatcher
from .messages import BroadcastMessage, WireMessage, build_message
from .protocol import handle_client_message, parse_client_message
from .publisher import NotificationPublisher, serialize_notification
from .registry import Connection, ConnectionRegistry, ConnectionState, Transport

__all__ = [
    "BackgroundTaskRunner",
    "BroadcastMessage",
    "Connection",
    "ConnectionDispatcher",
    "ConnectionRegistry",
    "ConnectionState",
    "NotificationPublisher",
    "Transport",
    "WireMessage",
    "build_message",
    "handle_client_message",
    "parse_client_message",
    "serialize_notification",
]
