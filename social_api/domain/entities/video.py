"""Domain entity representing a short video."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Video:
    """Short video posted by a user."""

    id: int | None
    user_id: int
    title: str
    description: str | None
    like_count: int
    comment_count: int
    created_at: datetime | None
