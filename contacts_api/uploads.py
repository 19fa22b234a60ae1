"""Validation of photo uploads before they reach the photo coordinator."""
import logging
from pathlib import PurePath
from typing import Iterable, Optional

from fastapi import UploadFile

from contacts_api.exceptions import InvalidFileTypeError, PhotoTooLargeError
from contacts_api.services.photos import PhotoUpload

logger = logging.getLogger(__name__)


def has_allowed_extension(filename: str, allowed_extensions: Iterable[str]) -> bool:
    """Check a filename's extension against an allow-list (case-insensitive)."""
    extension = PurePath(filename).suffix.lower()
    return extension in {ext.lower() for ext in allowed_extensions}


def to_photo_upload(
    upload: Optional[UploadFile],
    allowed_extensions: Iterable[str],
    max_size: int,
) -> Optional[PhotoUpload]:
    """Validate an optional multipart photo and wrap it for the coordinator.

    An omitted photo part, or one sent without a filename, means "no photo".

    Raises:
        InvalidFileTypeError: If the extension is not allowed.
        PhotoTooLargeError: If the photo is larger than ``max_size`` bytes.
    """
    if upload is None or not upload.filename:
        return None

    if not has_allowed_extension(upload.filename, allowed_extensions):
        logger.warning(f"Rejected photo with unsupported type: {upload.filename!r}")
        raise InvalidFileTypeError()

    size = upload.size
    if size is None:
        upload.file.seek(0, 2)
        size = upload.file.tell()
        upload.file.seek(0)
    if size > max_size:
        logger.warning(f"Rejected photo {upload.filename!r} of {size} bytes")
        raise PhotoTooLargeError(max_size)

    return PhotoUpload(
        content=upload.file,
        filename=upload.filename,
        content_type=upload.content_type,
    )
