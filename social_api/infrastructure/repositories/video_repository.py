"""Persistence helpers for short videos."""

from __future__ import annotations

from sqlalchemy import func
from sqlalchemy.orm import Session

from social_api.domain.entities import LikeTarget, Video
from social_api.infrastructure.models import CommentModel, LikeModel, VideoModel


class VideoRepository:
    """Read videos and maintain their denormalized counters."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, video_id: int) -> Video | None:
        model = self.session.get(VideoModel, video_id)
        return self._to_entity(model) if model else None

    def create(self, video: Video) -> Video:
        model = VideoModel(
            user_id=video.user_id, title=video.title, description=video.description
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def refresh_like_count(self, video_id: int) -> None:
        likes = (
            self.session.query(func.count(LikeModel.id))
            .filter(LikeModel.target_type == LikeTarget.VIDEO.value)
            .filter(LikeModel.target_id == video_id)
            .scalar_subquery()
        )
        self.session.query(VideoModel).filter(VideoModel.id == video_id).update(
            {VideoModel.like_count: likes}, synchronize_session=False
        )
        self.session.commit()

    def refresh_comment_count(self, video_id: int) -> None:
        comments = (
            self.session.query(func.count(CommentModel.id))
            .filter(CommentModel.video_id == video_id)
            .scalar_subquery()
        )
        self.session.query(VideoModel).filter(VideoModel.id == video_id).update(
            {VideoModel.comment_count: comments}, synchronize_session=False
        )
        self.session.commit()

    @staticmethod
    def _to_entity(model: VideoModel) -> Video:
        return Video(
            id=model.id,
            user_id=model.user_id,
            title=model.title,
            description=model.description,
            like_count=model.like_count or 0,
            comment_count=model.comment_count or 0,
            created_at=model.created_at,
        )


__all__ = ["VideoRepository"]
