from .engagement import (
    CommentCreate,
    CommentRead,
    FollowStatusRead,
    LikeStatusRead,
    ReplyCreate,
    ReplyRead,
)
from .notification import (
    NotificationActorRead,
    NotificationBatchResult,
    NotificationListResponse,
    NotificationMarkReadRequest,
    NotificationRead,
    UnreadCountResponse,
)
from .realtime import RealtimeStatsRead

__all__ = [
    "CommentCreate",
    "CommentRead",
    "FollowStatusRead",
    "LikeStatusRead",
    "NotificationActorRead",
    "NotificationBatchResult",
    "NotificationListResponse",
    "NotificationMarkReadRequest",
    "NotificationRead",
    "RealtimeStatsRead",
    "ReplyCreate",
    "ReplyRead",
    "UnreadCountResponse",
]
