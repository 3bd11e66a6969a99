"""Domain entity representing a reply inside a topic."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Reply:
    id: int | None
    topic_id: int
    user_id: int
    parent_id: int | None
    content: str
    created_at: datetime | None
