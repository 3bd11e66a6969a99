"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import expression

from social_api.infrastructure.database import Base
from social_api.utils import now_in_app_naive_datetime


class NotificationModel(Base):
    """Database representation for user notifications."""

    __tablename__ = "notification"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    actor_id = Column(Integer, ForeignKey("user.id"), nullable=False)
    event_type = Column(String(50), nullable=False, index=True)
    resource_id = Column(Integer, nullable=True)
    message = Column(Text, nullable=False)
    is_read = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false(),
        index=True,
    )
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)

    actor = relationship("UserModel", foreign_keys=[actor_id], lazy="joined")


__all__ = ["NotificationModel"]
