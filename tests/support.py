"""Shared test helpers: in-memory SQLite sessions and fast test settings."""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import Settings
from app.models import Base

TEST_JWT_SECRET = "test-secret-0123456789abcdef0123456789abcdef"


def make_settings(**overrides: object) -> Settings:
    """Settings isolated from any .env file, with cheap bcrypt rounds."""
    values: dict[str, object] = {
        "APP_ENV": "dev",
        "JWT_SECRET": TEST_JWT_SECRET,
        "BCRYPT_ROUNDS": 4,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_session_factory() -> sessionmaker:
    """Fresh in-memory database with all tables; shared across threads (TestClient)."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)
