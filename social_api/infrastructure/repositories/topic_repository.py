"""Persistence helpers for forum topics."""

from __future__ import annotations

from sqlalchemy import func
from sqlalchemy.orm import Session

from social_api.domain.entities import LikeTarget, Topic
from social_api.infrastructure.models import LikeModel, ReplyModel, TopicModel


class TopicRepository:
    """Read topics and maintain their denormalized counters."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, topic_id: int) -> Topic | None:
        model = self.session.get(TopicModel, topic_id)
        return self._to_entity(model) if model else None

    def create(self, topic: Topic) -> Topic:
        model = TopicModel(user_id=topic.user_id, title=topic.title, content=topic.content)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def refresh_like_count(self, topic_id: int) -> None:
        likes = (
            self.session.query(func.count(LikeModel.id))
            .filter(LikeModel.target_type == LikeTarget.TOPIC.value)
            .filter(LikeModel.target_id == topic_id)
            .scalar_subquery()
        )
        self.session.query(TopicModel).filter(TopicModel.id == topic_id).update(
            {TopicModel.like_count: likes}, synchronize_session=False
        )
        self.session.commit()

    def refresh_reply_count(self, topic_id: int) -> None:
        replies = (
            self.session.query(func.count(ReplyModel.id))
            .filter(ReplyModel.topic_id == topic_id)
            .scalar_subquery()
        )
        self.session.query(TopicModel).filter(TopicModel.id == topic_id).update(
            {TopicModel.reply_count: replies}, synchronize_session=False
        )
        self.session.commit()

    @staticmethod
    def _to_entity(model: TopicModel) -> Topic:
        return Topic(
            id=model.id,
            user_id=model.user_id,
            title=model.title,
            content=model.content or "",
            reply_count=model.reply_count or 0,
            like_count=model.like_count or 0,
            created_at=model.created_at,
        )


__all__ = ["TopicRepository"]
