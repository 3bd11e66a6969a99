"""Domain entities exposed by the application."""

from .comment import Comment
from .engagement import FollowStatus, LikeStatus, LikeTarget
from .notification import ActorSummary, Notification, NotificationPage, NotificationType
from .reply import Reply
from .topic import Topic
from .user import User
from .video import Video

__all__ = [
    "ActorSummary",
    "Comment",
    "FollowStatus",
    "LikeStatus",
    "LikeTarget",
    "Notification",
    "NotificationPage",
    "NotificationType",
    "Reply",
    "Topic",
    "User",
    "Video",
]
