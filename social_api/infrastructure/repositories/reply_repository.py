"""Persistence helpers for topic replies."""

from __future__ import annotations

from sqlalchemy.orm import Session

from social_api.domain.entities import Reply
from social_api.infrastructure.models import ReplyModel


class ReplyRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, reply_id: int) -> Reply | None:
        model = self.session.get(ReplyModel, reply_id)
        return self._to_entity(model) if model else None

    def create(self, reply: Reply) -> Reply:
        model = ReplyModel(
            topic_id=reply.topic_id,
            user_id=reply.user_id,
            parent_id=reply.parent_id,
            content=reply.content,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: ReplyModel) -> Reply:
        return Reply(
            id=model.id,
            topic_id=model.topic_id,
            user_id=model.user_id,
            parent_id=model.parent_id,
            content=model.content,
            created_at=model.created_at,
        )


__all__ = ["ReplyRepository"]
