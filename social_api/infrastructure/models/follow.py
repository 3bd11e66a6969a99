"""SQLAlchemy model for follow relationships."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, UniqueConstraint, func

from social_api.infrastructure.database import Base


class FollowModel(Base):
    __tablename__ = "follow"
    __table_args__ = (
        UniqueConstraint("follower_id", "following_id", name="uq_follow_pair"),
    )

    id = Column(Integer, primary_key=True, index=True)
    follower_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    following_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())


__all__ = ["FollowModel"]
