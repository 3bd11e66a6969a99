"""Endpoints to like and unlike topics, videos, replies and comments."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from social_api.application.use_cases.engagement import (
    like_resource as like_resource_uc,
    schedule_like_side_effects,
    unlike_resource as unlike_resource_uc,
)
from social_api.domain.entities import LikeStatus, LikeTarget, User
from social_api.infrastructure.realtime import BackgroundTaskRunner, NotificationPublisher
from social_api.interfaces.api.dependencies import (
    get_current_active_user,
    get_db,
    get_notification_publisher,
    get_task_runner,
)
from social_api.interfaces.api.schemas import LikeStatusRead

router = APIRouter(tags=["likes"])

_COLLECTIONS = {
    "topics": LikeTarget.TOPIC,
    "videos": LikeTarget.VIDEO,
    "replies": LikeTarget.REPLY,
    "comments": LikeTarget.COMMENT,
}


def _to_read_model(like_status: LikeStatus) -> LikeStatusRead:
    return LikeStatusRead(is_liked=like_status.is_liked, like_count=like_status.like_count)


def _raise_http(exc: ValueError) -> None:
    detail = str(exc)
    status_code = status.HTTP_400_BAD_REQUEST
    if detail.endswith("not found"):
        status_code = status.HTTP_404_NOT_FOUND
    raise HTTPException(status_code=status_code, detail=detail) from exc


def _add_like_routes(collection: str, target: LikeTarget) -> None:
    def like(
        resource_id: int,
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_active_user),
        runner: BackgroundTaskRunner = Depends(get_task_runner),
        publisher: NotificationPublisher = Depends(get_notification_publisher),
    ) -> LikeStatusRead:
        try:
            like_status = like_resource_uc(
                db, target=target, target_id=resource_id, user_id=current_user.id
            )
        except ValueError as exc:
            _raise_http(exc)

        schedule_like_side_effects(
            runner,
            target=target,
            target_id=resource_id,
            actor_id=current_user.id,
            publisher=publisher,
            liked=True,
        )
        return _to_read_model(like_status)

    def unlike(
        resource_id: int,
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_active_user),
        runner: BackgroundTaskRunner = Depends(get_task_runner),
    ) -> LikeStatusRead:
        try:
            like_status = unlike_resource_uc(
                db, target=target, target_id=resource_id, user_id=current_user.id
            )
        except ValueError as exc:
            _raise_http(exc)

        schedule_like_side_effects(
            runner,
            target=target,
            target_id=resource_id,
            actor_id=current_user.id,
            publisher=None,
            liked=False,
        )
        return _to_read_model(like_status)

    path = f"/{collection}/{{resource_id}}/like"
    router.add_api_route(
        path,
        like,
        methods=["POST"],
        response_model=LikeStatusRead,
        name=f"like_{target.value}",
        summary=f"Like a {target.value}",
    )
    router.add_api_route(
        path,
        unlike,
        methods=["DELETE"],
        response_model=LikeStatusRead,
        name=f"unlike_{target.value}",
        summary=f"Remove a like from a {target.value}",
    )


for _collection, _target in _COLLECTIONS.items():
    _add_like_routes(_collection, _target)
