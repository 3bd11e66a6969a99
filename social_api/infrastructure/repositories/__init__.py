"""Repository implementations for infrastructure layer."""

from .comment_repository import CommentRepository
from .follow_repository import FollowRepository
from .like_repository import LikeRepository
from .notification_repository import NotificationRepository
from .reply_repository import ReplyRepository
from .topic_repository import TopicRepository
from .user_repository import UserRepository
from .video_repository import VideoRepository

__all__ = [
    "CommentRepository",
    "FollowRepository",
    "LikeRepository",
    "NotificationRepository",
    "ReplyRepository",
    "TopicRepository",
    "UserRepository",
    "VideoRepository",
]
