"""Pydantic request/response schemas."""

from app.schemas.auth import (
    LoginRequest,
    LoginResponse,
    LoginStatusResponse,
    MessageResponse,
    RegisterRequest,
    UserClaims,
)
from app.schemas.health import HealthResponse
from app.schemas.upload import UploadedFile, UploadResponse

__all__ = [
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "LoginStatusResponse",
    "MessageResponse",
    "RegisterRequest",
    "UploadedFile",
    "UploadResponse",
    "UserClaims",
]
