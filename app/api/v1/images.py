"""Image endpoints: multipart upload to local storage and newest-first URL listing."""

import logging
import time
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, UploadFile
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from app.api.dependencies import get_image_storage
from app.core.config import Settings, get_settings
from app.core.database import get_db
from app.core.errors import FileValidationError
from app.schemas.upload import UploadResponse
from app.services.images import (
    IncomingImage,
    file_too_large_error,
    list_image_urls,
    store_image_batch,
    validate_image_batch,
)
from app.services.storage import LocalImageStorage

logger = logging.getLogger(__name__)
router = APIRouter()

UPLOAD_FIELD_NAME = "images"


def _is_upload_file(obj: object) -> bool:
    """True if obj is an uploaded file (UploadFile or file-like with filename and read)."""
    if isinstance(obj, UploadFile):
        return True
    return (
        hasattr(obj, "read")
        and callable(getattr(obj, "read", None))
        and hasattr(obj, "filename")
    )


async def _get_images_from_request(request: Request, settings: Settings) -> list[IncomingImage]:
    """Read every file part under the images field; non-multipart bodies are refused."""
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type != "multipart/form-data":
        raise HTTPException(
            status_code=415,
            detail="Content-Type must be multipart/form-data.",
        )
    images: list[IncomingImage] = []
    # One spare slot so an over-limit batch reaches validation instead of the parser.
    async with request.form(max_files=settings.UPLOAD_MAX_FILES + 1) as form:
        parts = [p for p in form.getlist(UPLOAD_FIELD_NAME) if _is_upload_file(p)]
        if len(parts) > settings.UPLOAD_MAX_FILES:
            raise FileValidationError(f"At most {settings.UPLOAD_MAX_FILES} images per upload.")
        for part in parts:
            size = getattr(part, "size", None)
            if size is not None and size > settings.UPLOAD_MAX_FILE_BYTES:
                raise file_too_large_error(settings.UPLOAD_MAX_FILE_BYTES)
        for part in parts:
            content = await part.read()
            images.append(
                IncomingImage(
                    original_name=getattr(part, "filename", None) or "",
                    content_type=getattr(part, "content_type", None) or "",
                    content=content,
                )
            )
    return images


@router.post("/upload-images", response_model=UploadResponse)
async def upload_images(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    storage: Annotated[LocalImageStorage, Depends(get_image_storage)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> UploadResponse:
    """
    Accept up to UPLOAD_MAX_FILES images under the multipart field `images`.

    The batch is all-or-nothing at validation time: one non-image file rejects
    every file. Accepted files are written to disk, then their metadata is
    inserted in one commit. Returns the stored file descriptors and the
    processing time in seconds.
    """
    start = time.perf_counter()
    images = await _get_images_from_request(request, settings)
    validate_image_batch(
        images,
        max_files=settings.UPLOAD_MAX_FILES,
        max_file_bytes=settings.UPLOAD_MAX_FILE_BYTES,
    )

    public_base_url = str(request.base_url).rstrip("/") + settings.UPLOAD_URL_PREFIX
    # Disk writes and the metadata commit block; keep them off the event loop.
    files = await run_in_threadpool(store_image_batch, db, storage, images, public_base_url)

    processing_time = time.perf_counter() - start
    logger.info(
        "Image upload completed",
        extra={"image_count": len(files), "processing_time": round(processing_time, 4)},
    )
    return UploadResponse(files=files, processing_time=processing_time)


@router.get("/images", response_model=list[str])
def get_all_images(
    db: Annotated[Session, Depends(get_db)],
) -> list[str]:
    """URLs of every uploaded image, newest first. Not paginated."""
    return list_image_urls(db)
