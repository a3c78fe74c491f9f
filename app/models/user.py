"""ORM model for application users (credential store)."""

from sqlalchemy import Column, DateTime, Integer, String, func

from app.models.base import Base

ROLE_ADMIN = "admin"
ROLE_USER = "user"


class User(Base):
    """
    Registered account. Created once at registration, read by email at login.

    role: 'admin' for the first account ever registered, 'user' afterwards.
    verification_token: random opaque string; nothing checks it yet.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default=ROLE_USER)
    verification_token = Column(String(128), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
