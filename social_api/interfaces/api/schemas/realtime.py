"""Pydantic models exposing realtime connection statistics."""

from pydantic import BaseModel, Field


class RealtimeStatsRead(BaseModel):
    total_connections: int
    room: str | None = None
    room_size: int | None = None
    rooms: dict[str, int] = Field(default_factory=dict)


__all__ = ["RealtimeStatsRead"]
