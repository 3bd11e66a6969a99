"""Persistence layer for user data."""

from __future__ import annotations

from sqlalchemy import func
from sqlalchemy.orm import Session

from social_api.domain.entities import User
from social_api.infrastructure.models import FollowModel, UserModel


class UserRepository:
    """Provide CRUD operations for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self._get_model(id=user_id)
        return self._to_entity(model) if model else None

    def get_by_username(self, username: str) -> User | None:
        model = self._get_model(username=username)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = self._get_model(email=email)
        return self._to_entity(model) if model else None

    def create(self, user: User) -> User:
        model = UserModel(
            username=user.username,
            email=user.email,
            full_name=user.full_name,
            avatar=user.avatar,
            role=user.role,
            is_active=user.is_active,
            follower_count=user.follower_count,
            following_count=user.following_count,
        )
        if user.created_at is not None:
            model.created_at = user.created_at
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def refresh_follow_counts(self, user_id: int) -> None:
        """Recompute the denormalized follower and following counters of ``user_id``."""

        followers = (
            self.session.query(func.count(FollowModel.id))
            .filter(FollowModel.following_id == user_id)
            .scalar_subquery()
        )
        following = (
            self.session.query(func.count(FollowModel.id))
            .filter(FollowModel.follower_id == user_id)
            .scalar_subquery()
        )
        self.session.query(UserModel).filter(UserModel.id == user_id).update(
            {UserModel.follower_count: followers, UserModel.following_count: following},
            synchronize_session=False,
        )
        self.session.commit()

    def _get_model(self, **filters) -> UserModel | None:
        return self.session.query(UserModel).filter_by(**filters).first()

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            username=model.username,
            email=model.email,
            full_name=model.full_name or "",
            avatar=model.avatar,
            role=model.role,
            is_active=model.is_active,
            follower_count=model.follower_count or 0,
            following_count=model.following_count or 0,
            created_at=model.created_at,
        )


__all__ = ["UserRepository"]
