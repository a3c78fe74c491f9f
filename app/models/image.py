"""ORM model for uploaded image metadata."""

from datetime import UTC, datetime

from sqlalchemy import BigInteger, Column, DateTime, Integer, String, func

from app.models.base import Base


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Image(Base):
    """
    One row per stored upload. Immutable once inserted.

    created_at is assigned on insert (microsecond precision) and drives the
    newest-first listing; id breaks ties.
    """

    __tablename__ = "images"

    id = Column(Integer, primary_key=True, autoincrement=True)
    filename = Column(String(512), nullable=False, index=True)
    url = Column(String(2048), nullable=False)
    size = Column(BigInteger, nullable=False)
    mimetype = Column(String(255), nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=func.now(),
        index=True,
    )
