"""Persistence helpers for likes on topics, videos, replies and comments."""

from __future__ import annotations

from sqlalchemy.orm import Session

from social_api.domain.entities import LikeTarget
from social_api.infrastructure.models import LikeModel


class LikeRepository:
    """Store and count likes keyed by ``(target, target_id)``."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def exists(self, *, user_id: int, target: LikeTarget, target_id: int) -> bool:
        return (
            self._query(target, target_id)
            .filter(LikeModel.user_id == user_id)
            .first()
            is not None
        )

    def create(self, *, user_id: int, target: LikeTarget, target_id: int) -> None:
        model = LikeModel(
            user_id=user_id, target_type=LikeTarget(target).value, target_id=target_id
        )
        self.session.add(model)
        self.session.commit()

    def delete(self, *, user_id: int, target: LikeTarget, target_id: int) -> None:
        self._query(target, target_id).filter(LikeModel.user_id == user_id).delete(
            synchronize_session=False
        )
        self.session.commit()

    def count(self, *, target: LikeTarget, target_id: int) -> int:
        return self._query(target, target_id).count()

    def _query(self, target: LikeTarget, target_id: int):
        return (
            self.session.query(LikeModel)
            .filter(LikeModel.target_type == LikeTarget(target).value)
            .filter(LikeModel.target_id == target_id)
        )


__all__ = ["LikeRepository"]
