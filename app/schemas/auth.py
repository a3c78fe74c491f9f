"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, ConfigDict, Field

# Loose shape check only; addresses are stored exactly as given (case-sensitive).
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+$"


class RegisterRequest(BaseModel):
    """New account details."""

    email: str = Field(..., min_length=3, max_length=255, pattern=EMAIL_PATTERN)
    name: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str = Field(..., min_length=1, max_length=255, description="Email")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class UserClaims(BaseModel):
    """Minimal user projection carried in the session token (no password hash)."""

    id: int
    name: str
    role: str

    model_config = ConfigDict(from_attributes=True)


class LoginResponse(BaseModel):
    """Body of a successful login; the token itself travels in the cookie."""

    user: UserClaims


class LoginStatusResponse(BaseModel):
    is_logged_in: bool = Field(..., alias="isLoggedIn")

    model_config = ConfigDict(populate_by_name=True)


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    msg: str
