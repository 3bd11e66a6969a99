"""Persistence helpers for video comments."""

from __future__ import annotations

from sqlalchemy.orm import Session

from social_api.domain.entities import Comment
from social_api.infrastructure.models import CommentModel


class CommentRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, comment_id: int) -> Comment | None:
        model = self.session.get(CommentModel, comment_id)
        return self._to_entity(model) if model else None

    def create(self, comment: Comment) -> Comment:
        model = CommentModel(
            video_id=comment.video_id,
            user_id=comment.user_id,
            parent_id=comment.parent_id,
            content=comment.content,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: CommentModel) -> Comment:
        return Comment(
            id=model.id,
            video_id=model.video_id,
            user_id=model.user_id,
            parent_id=model.parent_id,
            content=model.content,
            created_at=model.created_at,
        )


__all__ = ["CommentRepository"]
