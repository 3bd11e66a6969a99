"""Wire envelope and broadcast addressing for realtime delivery."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class WireMessage(BaseModel):
    """JSON object exchanged in both directions over the websocket."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    type: str = Field(min_length=1)
    data: Any = None
    user_id: str | int | None = Field(default=None, alias="userId")
    room_id: str | None = Field(default=None, alias="roomId")

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON-ready dict, omitting empty addressing fields."""

        return self.model_dump(by_alias=True, exclude_none=True, exclude={"data"}) | {
            "data": self.data
        }


def build_message(message_type: str, data: Any = None) -> dict[str, Any]:
    """Return an outbound payload with a private copy of ``data``."""

    return WireMessage(type=message_type, data=copy.deepcopy(data)).to_payload()


@dataclass(frozen=True)
class BroadcastMessage:
    """A payload plus exactly one addressing mode.

    ``user_id`` targets every connection of that user, ``room_id`` every
    connection currently in the room, and neither targets everyone.
    """

    payload: dict[str, Any]
    user_id: int | None = None
    room_id: str | None = None

    def __post_init__(self) -> None:
        if self.user_id is not None and self.room_id:
            raise ValueError("A broadcast is addressed to a user or to a room, not both")

    @property
    def is_global(self) -> bool:
        return self.user_id is None and not self.room_id


__all__ = ["BroadcastMessage", "WireMessage", "build_message"]
