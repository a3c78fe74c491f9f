"""Local-disk storage for uploaded image bytes."""

import hashlib
import logging
import re
import time
from pathlib import Path

from app.core.errors import StorageFailureError

logger = logging.getLogger(__name__)

# Characters kept from the client's file name; everything else becomes "_".
_UNSAFE_NAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")
MAX_ORIGINAL_NAME_LEN = 128
# Hex chars of the content digest embedded in the storage name.
CONTENT_DIGEST_LEN = 16


def sanitize_filename(original_name: str) -> str:
    """Strip directories and unsafe characters from a client-supplied file name."""
    base = Path(original_name.replace("\\", "/")).name
    cleaned = _UNSAFE_NAME_CHARS.sub("_", base).strip("._")
    return cleaned[-MAX_ORIGINAL_NAME_LEN:] or "upload"


def build_storage_name(original_name: str, content: bytes, now_ms: int | None = None) -> str:
    """
    <epoch-ms>-<sha256 prefix>-<sanitized name>. Different content never collides,
    even within the same millisecond; identical content maps to identical bytes.
    """
    ms = int(time.time() * 1000) if now_ms is None else now_ms
    digest = hashlib.sha256(content).hexdigest()[:CONTENT_DIGEST_LEN]
    return f"{ms}-{digest}-{sanitize_filename(original_name)}"


class LocalImageStorage:
    """Writes files under a single directory that is also served statically."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def path_for(self, filename: str) -> Path:
        return self.root / filename

    def save(self, original_name: str, content: bytes) -> str:
        """Write bytes to disk and return the storage name. Raises StorageFailureError."""
        filename = build_storage_name(original_name, content)
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            self.path_for(filename).write_bytes(content)
        except OSError as e:
            logger.error(
                "Writing upload to disk failed",
                extra={"storage_name": filename, "reason": str(e)[:500]},
            )
            raise StorageFailureError("Error saving images to disk") from e
        return filename
