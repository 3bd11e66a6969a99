"""SQLAlchemy model storing likes for every likeable resource."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint, func

from social_api.infrastructure.database import Base


class LikeModel(Base):
    """One user liking one topic, video, reply or comment."""

    __tablename__ = "resource_like"
    __table_args__ = (
        UniqueConstraint("user_id", "target_type", "target_id", name="uq_like_user_target"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    target_type = Column(String(20), nullable=False)
    target_id = Column(Integer, nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())


__all__ = ["LikeModel"]
