"""SQLAlchemy model for short videos."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, func

from social_api.infrastructure.database import Base


class VideoModel(Base):
    __tablename__ = "video"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    like_count = Column(Integer, nullable=False, default=0)
    comment_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, server_default=func.now())


__all__ = ["VideoModel"]
