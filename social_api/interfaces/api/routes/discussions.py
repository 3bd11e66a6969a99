"""Endpoints to reply to topics and comment on videos."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from social_api.application.use_cases.engagement import (
    create_comment as create_comment_uc,
    create_reply as create_reply_uc,
    schedule_comment_side_effects,
    schedule_reply_side_effects,
)
from social_api.domain.entities import Comment, Reply, User
from social_api.infrastructure.realtime import BackgroundTaskRunner, NotificationPublisher
from social_api.interfaces.api.dependencies import (
    get_current_active_user,
    get_db,
    get_notification_publisher,
    get_task_runner,
)
from social_api.interfaces.api.schemas import CommentCreate, CommentRead, ReplyCreate, ReplyRead

router = APIRouter(tags=["discussions"])


def _raise_http(exc: ValueError) -> None:
    detail = str(exc)
    status_code = status.HTTP_400_BAD_REQUEST
    if detail.endswith("not found"):
        status_code = status.HTTP_404_NOT_FOUND
    raise HTTPException(status_code=status_code, detail=detail) from exc


def _reply_to_read_model(reply: Reply) -> ReplyRead:
    return ReplyRead(
        id=reply.id or 0,
        topic_id=reply.topic_id,
        user_id=reply.user_id,
        parent_id=reply.parent_id,
        content=reply.content,
        created_at=reply.created_at,
    )


def _comment_to_read_model(comment: Comment) -> CommentRead:
    return CommentRead(
        id=comment.id or 0,
        video_id=comment.video_id,
        user_id=comment.user_id,
        parent_id=comment.parent_id,
        content=comment.content,
        created_at=comment.created_at,
    )


@router.post(
    "/topics/{topic_id}/replies",
    response_model=ReplyRead,
    status_code=status.HTTP_201_CREATED,
)
def create_reply(
    topic_id: int,
    payload: ReplyCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    runner: BackgroundTaskRunner = Depends(get_task_runner),
    publisher: NotificationPublisher = Depends(get_notification_publisher),
) -> ReplyRead:
    """Reply to ``topic_id``; the topic author is notified in the background."""

    try:
        reply = create_reply_uc(
            db,
            topic_id=topic_id,
            user_id=current_user.id,
            content=payload.content,
            parent_id=payload.parent_id,
        )
    except ValueError as exc:
        _raise_http(exc)

    schedule_reply_side_effects(runner, reply=reply, publisher=publisher)
    return _reply_to_read_model(reply)


@router.post(
    "/videos/{video_id}/comments",
    response_model=CommentRead,
    status_code=status.HTTP_201_CREATED,
)
def create_comment(
    video_id: int,
    payload: CommentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    runner: BackgroundTaskRunner = Depends(get_task_runner),
    publisher: NotificationPublisher = Depends(get_notification_publisher),
) -> CommentRead:
    """Comment on ``video_id``, or answer another comment when ``parent_id`` is set."""

    try:
        comment = create_comment_uc(
            db,
            video_id=video_id,
            user_id=current_user.id,
            content=payload.content,
            parent_id=payload.parent_id,
        )
    except ValueError as exc:
        _raise_http(exc)

    schedule_comment_side_effects(runner, comment=comment, publisher=publisher)
    return _comment_to_read_model(comment)
