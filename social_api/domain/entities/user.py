"""Domain entity representing a user."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class User:
    """Core attributes describing a platform member."""

    id: int | None
    username: str
    email: str
    full_name: str
    avatar: str | None
    role: str
    is_active: bool
    follower_count: int
    following_count: int
    created_at: datetime | None

    @property
    def display_name(self) -> str:
        """Name rendered inside notification messages."""

        return self.username
