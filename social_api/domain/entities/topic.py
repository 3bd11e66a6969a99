"""Domain entity representing a forum topic."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Topic:
    """Forum thread started by a user."""

    id: int | None
    user_id: int
    title: str
    content: str
    reply_count: int
    like_count: int
    created_at: datetime | None
