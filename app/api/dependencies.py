"""FastAPI dependencies shared across routes (services built from settings)."""

from typing import Annotated

from fastapi import Depends

from app.core.config import Settings, get_settings
from app.services.auth import AuthService
from app.services.storage import LocalImageStorage


def get_auth_service(settings: Annotated[Settings, Depends(get_settings)]) -> AuthService:
    return AuthService(settings)


def get_image_storage(
    settings: Annotated[Settings, Depends(get_settings)],
) -> LocalImageStorage:
    return LocalImageStorage(settings.UPLOAD_DIR)
