# File: app/services/uploads.py

"""
Image upload storage.

Uploaded images are written to `UPLOAD_DIR` under a generated name
(`<uuid1>.<ext>`). Only PNG and JPEG are accepted. Removing a stored file
is best effort: a failed delete is logged and otherwise ignored.
"""

import logging
import uuid
from pathlib import Path
from typing import BinaryIO, Final

from app.core.errors import ApiResult, validation_error
from app.core.result import Err, Ok

logger = logging.getLogger(__name__)

MIME_TYPE_MAP: Final[dict[str, str]] = {
    "image/png": "png",
    "image/jpg": "jpg",
    "image/jpeg": "jpeg",
}


def extension_for(content_type: str | None) -> str | None:
    if not content_type:
        return None
    return MIME_TYPE_MAP.get(content_type.lower())


def store_image(
    stream: BinaryIO,
    content_type: str | None,
    *,
    upload_dir: str | Path,
    max_size: int,
) -> ApiResult[str]:
    """
    Validate and persist one uploaded image.

    Returns the stored path as a string, or a validation error for a
    disallowed MIME type or a file above `max_size` bytes. Nothing is
    written to disk when validation fails.
    """
    ext = extension_for(content_type)
    if ext is None:
        return Err(validation_error("Invalid file extension!"))

    # read one byte past the ceiling so oversize files are detected
    data = stream.read(max_size + 1)
    if len(data) > max_size:
        return Err(validation_error("Uploaded file is too large."))

    target_dir = Path(upload_dir)
    target_dir.mkdir(parents=True, exist_ok=True)
    target = target_dir / f"{uuid.uuid1().hex}.{ext}"
    target.write_bytes(data)

    logger.debug(f"Stored upload at {target}")
    return Ok(str(target))


def discard_file(path: str | Path) -> None:
    try:
        Path(path).unlink()
        logger.debug(f"Discarded file {path}")
    except OSError as exc:
        logger.warning(f"Failed to delete file {path}: {exc}")
