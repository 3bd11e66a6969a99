"""Public helpers for emitting and managing notifications."""

from .events import (
    MESSAGE_TEMPLATES,
    create_comment_like_notification,
    create_comment_reply_notification,
    create_new_follower_notification,
    create_reply_like_notification,
    create_topic_like_notification,
    create_topic_reply_notification,
    create_video_comment_notification,
    create_video_like_notification,
)
from .inbox import (
    delete_all_notifications,
    delete_notification,
    get_unread_count,
    list_notifications,
    list_unread_notifications,
    mark_all_notifications_as_read,
    mark_notification_as_read,
    mark_notifications_as_read,
)

__all__ = [
    "MESSAGE_TEMPLATES",
    "create_comment_like_notification",
    "create_comment_reply_notification",
    "create_new_follower_notification",
    "create_reply_like_notification",
    "create_topic_like_notification",
    "create_topic_reply_notification",
    "create_video_comment_notification",
    "create_video_like_notification",
    "delete_all_notifications",
    "delete_notification",
    "get_unread_count",
    "list_notifications",
    "list_unread_notifications",
    "mark_all_notifications_as_read",
    "mark_notification_as_read",
    "mark_notifications_as_read",
]
