"""Domain entity representing a comment on a video."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Comment:
    """Video comment; ``parent_id`` points at the comment being answered."""

    id: int | None
    video_id: int
    user_id: int
    parent_id: int | None
    content: str
    created_at: datetime | None
