"""Endpoints to follow and unfollow users."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from social_api.application.use_cases.engagement import (
    follow_user as follow_user_uc,
    schedule_follow_side_effects,
    unfollow_user as unfollow_user_uc,
)
from social_api.domain.entities import User
from social_api.infrastructure.realtime import BackgroundTaskRunner, NotificationPublisher
from social_api.interfaces.api.dependencies import (
    get_current_active_user,
    get_db,
    get_notification_publisher,
    get_task_runner,
)
from social_api.interfaces.api.schemas import FollowStatusRead

router = APIRouter(prefix="/users", tags=["follows"])


@router.post("/{user_id}/follow", response_model=FollowStatusRead)
def follow_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    runner: BackgroundTaskRunner = Depends(get_task_runner),
    publisher: NotificationPublisher = Depends(get_notification_publisher),
) -> FollowStatusRead:
    """Follow ``user_id`` and notify them in the background."""

    try:
        follow_status = follow_user_uc(db, follower_id=current_user.id, user_id=user_id)
    except ValueError as exc:
        detail = str(exc)
        status_code = status.HTTP_400_BAD_REQUEST
        if detail == "User not found":
            status_code = status.HTTP_404_NOT_FOUND
        raise HTTPException(status_code=status_code, detail=detail) from exc

    schedule_follow_side_effects(
        runner,
        follower_id=current_user.id,
        followed_user_id=user_id,
        publisher=publisher,
        followed=True,
    )
    return FollowStatusRead(
        is_following=follow_status.is_following,
        follower_count=follow_status.follower_count,
    )


@router.delete("/{user_id}/follow", response_model=FollowStatusRead)
def unfollow_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    runner: BackgroundTaskRunner = Depends(get_task_runner),
) -> FollowStatusRead:
    try:
        follow_status = unfollow_user_uc(db, follower_id=current_user.id, user_id=user_id)
    except ValueError as exc:
        detail = str(exc)
        status_code = status.HTTP_400_BAD_REQUEST
        if detail == "User not found":
            status_code = status.HTTP_404_NOT_FOUND
        raise HTTPException(status_code=status_code, detail=detail) from exc

    schedule_follow_side_effects(
        runner,
        follower_id=current_user.id,
        followed_user_id=user_id,
        publisher=None,
        followed=False,
    )
    return FollowStatusRead(
        is_following=follow_status.is_following,
        follower_count=follow_status.follower_count,
    )
