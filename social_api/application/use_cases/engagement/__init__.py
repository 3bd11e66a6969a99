"""Use cases for likes, follows, replies and comments."""

from .discussions import create_comment, create_reply
from .follows import follow_user, unfollow_user
from .likes import like_resource, unlike_resource
from .side_effects import (
    schedule_comment_side_effects,
    schedule_follow_side_effects,
    schedule_like_side_effects,
    schedule_reply_side_effects,
)

__all__ = [
    "create_comment",
    "create_reply",
    "follow_user",
    "like_resource",
    "schedule_comment_side_effects",
    "schedule_follow_side_effects",
    "schedule_like_side_effects",
    "schedule_reply_side_effects",
    "unfollow_user",
    "unlike_resource",
]
