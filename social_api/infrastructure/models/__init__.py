"""ORM models used by the application infrastructure."""

from .user import UserModel
from .topic import TopicModel
from .video import VideoModel
from .reply import ReplyModel
from .comment import CommentModel
from .like import LikeModel
from .follow import FollowModel
from .notification import NotificationModel

__all__ = [
    "UserModel",
    "TopicModel",
    "VideoModel",
    "ReplyModel",
    "CommentModel",
    "LikeModel",
    "FollowModel",
    "NotificationModel",
]
