"""SQLAlchemy model for video comments."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Text, func

from social_api.infrastructure.database import Base


class CommentModel(Base):
    __tablename__ = "comment"

    id = Column(Integer, primary_key=True, index=True)
    video_id = Column(Integer, ForeignKey("video.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    parent_id = Column(Integer, ForeignKey("comment.id"), nullable=True, index=True)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime, nullable=False, server_default=func.now())


__all__ = ["CommentModel"]
