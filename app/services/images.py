"""Image upload (validate, store, record metadata) and newest-first listing."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import FileValidationError, StorageFailureError
from app.models import Image
from app.schemas.upload import UploadedFile
from app.services.storage import LocalImageStorage

logger = logging.getLogger(__name__)

IMAGE_MIME_PREFIX = "image/"
NOT_AN_IMAGE_MESSAGE = "Only image files are allowed!"


@dataclass(frozen=True)
class IncomingImage:
    """One file part read from the multipart request."""

    original_name: str
    content_type: str
    content: bytes


def validate_image_batch(
    images: Sequence[IncomingImage],
    max_files: int,
    max_file_bytes: int,
) -> None:
    """
    Reject the whole batch on the first problem: too many files, a file that
    is too large, or a declared media type that is not image/*.
    """
    if len(images) > max_files:
        raise FileValidationError(f"At most {max_files} images per upload.")
    for image in images:
        if not (image.content_type or "").lower().startswith(IMAGE_MIME_PREFIX):
            raise FileValidationError(NOT_AN_IMAGE_MESSAGE)
        if len(image.content) > max_file_bytes:
            raise file_too_large_error(max_file_bytes)


def file_too_large_error(max_file_bytes: int) -> FileValidationError:
    if max_file_bytes % (1024 * 1024) == 0:
        return FileValidationError(f"File size must not exceed {max_file_bytes // (1024 * 1024)} MB.")
    return FileValidationError(f"File size must not exceed {max_file_bytes} bytes.")


def store_image_batch(
    db: Session,
    storage: LocalImageStorage,
    images: Sequence[IncomingImage],
    public_base_url: str,
) -> list[UploadedFile]:
    """
    Write every file to storage, then insert all metadata rows in one commit.

    Files are not removed if the insert fails; they stay on disk as orphans and
    are listed in the error log.
    """
    stored: list[UploadedFile] = []
    for image in images:
        filename = storage.save(image.original_name, image.content)
        stored.append(
            UploadedFile(
                originalname=image.original_name,
                filename=filename,
                mimetype=image.content_type,
                size=len(image.content),
                path=storage.path_for(filename).as_posix(),
                url=f"{public_base_url.rstrip('/')}/{filename}",
            )
        )
    if not stored:
        return stored

    rows = [
        Image(filename=f.filename, url=f.url, size=f.size, mimetype=f.mimetype)
        for f in stored
    ]
    try:
        db.add_all(rows)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        orphaned = [f.filename for f in stored]
        logger.error(
            "Saving image metadata failed; orphaned files: %s",
            ", ".join(orphaned),
            extra={
                "image_count": len(stored),
                "orphaned_files": orphaned,
                "reason": str(e)[:500],
            },
        )
        raise StorageFailureError("Error saving images to the database") from e
    return stored


def list_image_urls(db: Session) -> list[str]:
    """All image URLs, most recently created first."""
    try:
        rows = db.query(Image.url).order_by(Image.created_at.desc(), Image.id.desc()).all()
    except SQLAlchemyError as e:
        raise StorageFailureError("Error retrieving images from the database") from e
    return [url for (url,) in rows]
