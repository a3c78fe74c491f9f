"""Health check: database connectivity and upload directory writability."""

import os
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.dependencies import get_image_storage
from app.core.config import Settings, get_settings
from app.core.database import check_db_connected, get_db
from app.schemas.health import HealthResponse
from app.services.storage import LocalImageStorage

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(
    db: Annotated[Session, Depends(get_db)],
    storage: Annotated[LocalImageStorage, Depends(get_image_storage)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> HealthResponse:
    """
    Return service health status, database connectivity and whether uploads
    can be written. Used by load balancers and monitoring.
    """
    db_status = "connected" if check_db_connected(db) else "disconnected"
    storage_ok = storage.root.is_dir() and os.access(storage.root, os.W_OK)

    return HealthResponse(
        status="ok",
        environment=settings.APP_ENV,
        database=db_status,
        storage="writable" if storage_ok else "unavailable",
    )
