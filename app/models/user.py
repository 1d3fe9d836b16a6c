"""ORM model for registered users (credential store)."""

from sqlalchemy import Column, DateTime, Integer, String, Text, func

from app.models.base import Base

USER_ROLES = ("user", "admin")


class User(Base):
    """
    User account for registration, login and JWT issuance.

    email is stored trimmed and lowercased and is the login identifier.
    role: 'admin' or 'user'
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(Text, nullable=False, unique=True, index=True)
    email = Column(Text, nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default="user", server_default="user")
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
