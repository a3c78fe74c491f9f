"""Registration, login and session cookie handling."""

import logging
import secrets
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import TYPE_CHECKING

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from starlette.responses import Response

from app.core.errors import DuplicateCredentialError, InvalidCredentialsError
from app.core.security import (
    InvalidSessionTokenError,
    create_session_token,
    decode_session_token,
    hash_password,
    verify_password,
)
from app.models.user import ROLE_ADMIN, ROLE_USER, User
from app.schemas.auth import UserClaims

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "Email already exists"
INVALID_CREDENTIALS_MESSAGE = "Invalid Credentials"
# 40 random bytes -> 80 hex chars
VERIFICATION_TOKEN_BYTES = 40


@lru_cache
def _placeholder_hash(rounds: int) -> str:
    """Digest checked when the email is unknown, so both login failures cost one bcrypt run."""
    return hash_password(secrets.token_hex(16), rounds=rounds)


class AuthService:
    """
    Stateless auth flow. Holds only read-only configuration; every call gets
    the DB session it should use.
    """

    def __init__(self, settings: "Settings") -> None:
        self.settings = settings
        self._secret = settings.JWT_SECRET.get_secret_value()
        self.token_ttl = timedelta(days=settings.JWT_EXPIRE_DAYS)
        self.cookie_ttl = timedelta(hours=settings.SESSION_COOKIE_HOURS)

    def register(self, db: Session, email: str, name: str, password: str) -> User:
        """
        Create an account. The first account ever becomes admin.
        Raises DuplicateCredentialError if the email is taken.
        """
        if db.query(User).filter(User.email == email).first() is not None:
            raise DuplicateCredentialError(DUPLICATE_EMAIL_MESSAGE)

        role = ROLE_ADMIN if db.query(User).count() == 0 else ROLE_USER
        user = User(
            email=email,
            name=name,
            password_hash=hash_password(password, rounds=self.settings.BCRYPT_ROUNDS),
            role=role,
            verification_token=secrets.token_hex(VERIFICATION_TOKEN_BYTES),
        )
        db.add(user)
        try:
            db.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent registration for the same email.
            db.rollback()
            raise DuplicateCredentialError(DUPLICATE_EMAIL_MESSAGE) from e
        db.refresh(user)
        logger.info("User registered", extra={"user_id": user.id, "role": user.role})
        return user

    def login(self, db: Session, email: str, password: str) -> tuple[UserClaims, str]:
        """Check credentials; return the user projection and a signed session token."""
        user = db.query(User).filter(User.email == email).first()
        if user is None:
            stored_hash = _placeholder_hash(self.settings.BCRYPT_ROUNDS)
        else:
            stored_hash = user.password_hash
        password_ok = verify_password(password, stored_hash)
        if user is None or not password_ok:
            logger.warning("Login failed", extra={"user_found": user is not None})
            raise InvalidCredentialsError(INVALID_CREDENTIALS_MESSAGE)

        claims = UserClaims.model_validate(user)
        token = create_session_token(
            claims.model_dump(),
            self._secret,
            self.token_ttl,
            algorithm=self.settings.JWT_ALGORITHM,
        )
        return claims, token

    def check_login_status(self, token: str | None) -> bool:
        """True only for a present, well-formed, correctly signed, unexpired token."""
        if not token:
            return False
        try:
            decode_session_token(token, self._secret, algorithm=self.settings.JWT_ALGORITHM)
        except InvalidSessionTokenError as e:
            logger.debug("Session token rejected: %s", e.message)
            return False
        return True

    def set_session_cookie(self, response: Response, token: str) -> None:
        response.set_cookie(
            key=self.settings.SESSION_COOKIE_NAME,
            value=token,
            expires=datetime.now(UTC) + self.cookie_ttl,
            path="/",
            secure=self.settings.cookie_secure,
            httponly=True,
        )

    def clear_session_cookie(self, response: Response) -> None:
        """Tell the client to drop the cookie. The token itself stays valid until exp."""
        response.delete_cookie(
            key=self.settings.SESSION_COOKIE_NAME,
            path="/",
            secure=self.settings.cookie_secure,
            httponly=True,
            samesite="strict",
        )
