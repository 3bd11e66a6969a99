"""Persistence helpers for follow relationships."""

from __future__ import annotations

from sqlalchemy.orm import Session

from social_api.infrastructure.models import FollowModel


class FollowRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def exists(self, *, follower_id: int, following_id: int) -> bool:
        return (
            self.session.query(FollowModel)
            .filter_by(follower_id=follower_id, following_id=following_id)
            .first()
            is not None
        )

    def create(self, *, follower_id: int, following_id: int) -> None:
        self.session.add(FollowModel(follower_id=follower_id, following_id=following_id))
        self.session.commit()

    def delete(self, *, follower_id: int, following_id: int) -> None:
        self.session.query(FollowModel).filter_by(
            follower_id=follower_id, following_id=following_id
        ).delete(synchronize_session=False)
        self.session.commit()

    def count_followers(self, user_id: int) -> int:
        return self.session.query(FollowModel).filter_by(following_id=user_id).count()


__all__ = ["FollowRepository"]
