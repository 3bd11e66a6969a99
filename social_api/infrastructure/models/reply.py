"""SQLAlchemy model for topic replies."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Text, func

from social_api.infrastructure.database import Base


class ReplyModel(Base):
    __tablename__ = "reply"

    id = Column(Integer, primary_key=True, index=True)
    topic_id = Column(Integer, ForeignKey("topic.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    parent_id = Column(Integer, ForeignKey("reply.id"), nullable=True, index=True)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime, nullable=False, server_default=func.now())


__all__ = ["ReplyModel"]
