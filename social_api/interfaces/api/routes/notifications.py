"""Endpoints for the authenticated user's notification inbox."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from social_api.application.use_cases.notifications import (
    delete_all_notifications as delete_all_notifications_uc,
    delete_notification as delete_notification_uc,
    get_unread_count as get_unread_count_uc,
    list_notifications as list_notifications_uc,
    mark_all_notifications_as_read as mark_all_notifications_as_read_uc,
    mark_notification_as_read as mark_notification_as_read_uc,
    mark_notifications_as_read as mark_notifications_as_read_uc,
)
from social_api.config import get_settings
from social_api.domain.entities import Notification, NotificationType, User
from social_api.interfaces.api.dependencies import get_current_active_user, get_db
from social_api.interfaces.api.schemas import (
    NotificationActorRead,
    NotificationBatchResult,
    NotificationListResponse,
    NotificationMarkReadRequest,
    NotificationRead,
    UnreadCountResponse,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])

_settings = get_settings()


def _notification_to_schema(notification: Notification) -> NotificationRead:
    actor = notification.actor
    return NotificationRead(
        id=notification.id or 0,
        user_id=notification.recipient_id,
        actor_id=notification.actor_id,
        type=notification.event_type,
        message=notification.message,
        resource_id=notification.resource_id,
        is_read=notification.is_read,
        created_at=notification.created_at,
        actor=NotificationActorRead(
            id=actor.id,
            username=actor.username,
            full_name=actor.full_name,
            avatar=actor.avatar,
        )
        if actor
        else None,
    )


def _raise_for_ownership(exc: Exception) -> None:
    if isinstance(exc, PermissionError):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)) from exc
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


@router.get("", response_model=NotificationListResponse)
def list_notifications(
    event_type: NotificationType | None = Query(default=None, alias="type"),
    is_read: bool | None = Query(default=None),
    page: int = Query(1, ge=1),
    limit: int = Query(
        _settings.notifications_page_size,
        ge=1,
        le=_settings.notifications_max_page_size,
    ),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationListResponse:
    """Return one page of notifications for the authenticated user, newest first."""

    try:
        result = list_notifications_uc(
            db,
            user_id=current_user.id,
            event_type=event_type,
            is_read=is_read,
            page=page,
            limit=limit,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    return NotificationListResponse(
        items=[_notification_to_schema(notification) for notification in result.items],
        total_count=result.total_count,
        unread_count=result.unread_count,
        page=result.page,
        limit=result.limit,
        total_pages=result.total_pages,
    )


@router.get("/unread/count", response_model=UnreadCountResponse)
def read_unread_count(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> UnreadCountResponse:
    return UnreadCountResponse(count=get_unread_count_uc(db, user_id=current_user.id))


@router.put("/read", response_model=NotificationBatchResult)
def mark_notifications_as_read(
    payload: NotificationMarkReadRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationBatchResult:
    """Mark the listed notifications as read; all of them must belong to the caller."""

    try:
        updated = mark_notifications_as_read_uc(
            db, notification_ids=payload.unique_ids(), user_id=current_user.id
        )
    except PermissionError as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)) from exc

    return NotificationBatchResult(message="Notifications marked as read", affected=updated)


@router.put("/read-all", response_model=NotificationBatchResult)
def mark_all_notifications_as_read(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationBatchResult:
    updated = mark_all_notifications_as_read_uc(db, user_id=current_user.id)
    return NotificationBatchResult(message="All notifications marked as read", affected=updated)


@router.put("/{notification_id}/read", response_model=NotificationRead)
def mark_notification_as_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationRead:
    try:
        notification = mark_notification_as_read_uc(
            db, notification_id=notification_id, user_id=current_user.id
        )
    except (PermissionError, ValueError) as exc:
        _raise_for_ownership(exc)
    return _notification_to_schema(notification)


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> None:
    try:
        delete_notification_uc(db, notification_id=notification_id, user_id=current_user.id)
    except (PermissionError, ValueError) as exc:
        _raise_for_ownership(exc)


@router.delete("", response_model=NotificationBatchResult)
def delete_all_notifications(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationBatchResult:
    deleted = delete_all_notifications_uc(db, user_id=current_user.id)
    return NotificationBatchResult(message="All notifications deleted", affected=deleted)
