"""SQLAlchemy model for forum topics."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, func

from social_api.infrastructure.database import Base


class TopicModel(Base):
    __tablename__ = "topic"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    content = Column(Text, nullable=False, default="")
    reply_count = Column(Integer, nullable=False, default=0)
    like_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, server_default=func.now())


__all__ = ["TopicModel"]
