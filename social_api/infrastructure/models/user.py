"""SQLAlchemy model for the user table."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, func
from sqlalchemy.sql import expression

from social_api.infrastructure.database import Base


class UserModel(Base):
    """Database representation of a platform member."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), nullable=False, unique=True, index=True)
    email = Column(String(120), nullable=False, unique=True, index=True)
    full_name = Column(String(200), nullable=False, default="")
    avatar = Column(String(500), nullable=True)
    role = Column(String(20), nullable=False, default="user")
    is_active = Column(
        Boolean, nullable=False, default=True, server_default=expression.true()
    )
    follower_count = Column(Integer, nullable=False, default=0)
    following_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, server_default=func.now())


__all__ = ["UserModel"]
