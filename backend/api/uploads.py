"""
Helpers for multipart uploads.

Converts FastAPI UploadFile objects into the storage layer's UploadedFile.
"""

from typing import Optional

from fastapi import UploadFile

from shared.exceptions import ValidationError
from shared.storage import UploadedFile


def _too_large(filename: str, limit: int) -> ValidationError:
    return ValidationError(
        f"{filename} is too large",
        code="FILE_TOO_LARGE",
        details={"limit": limit},
    )


async def read_upload(
    file: Optional[UploadFile],
    default_name: Optional[str] = None,
    default_type: str = "application/octet-stream",
    max_bytes: Optional[int] = None,
) -> Optional[UploadedFile]:
    """
    Read an uploaded file into memory.

    Browser recordings are posted as blobs, often with a generic name
    ("blob") or none at all; those get default_name instead.

    With max_bytes set, a file whose declared size is over the limit is
    rejected before reading, and at most max_bytes + 1 bytes are ever read.

    Returns:
        UploadedFile, or None if nothing (or an empty part) was sent

    Raises:
        ValidationError: If the file is over max_bytes.
    """
    if file is None:
        return None

    filename = file.filename or ""
    if default_name and filename in ("", "blob"):
        filename = default_name
    filename = filename or "upload"

    if max_bytes is not None:
        if file.size is not None and file.size > max_bytes:
            raise _too_large(filename, max_bytes)
        data = await file.read(max_bytes + 1)
        if len(data) > max_bytes:
            raise _too_large(filename, max_bytes)
    else:
        data = await file.read()

    if not data:
        return None

    return UploadedFile(
        filename=filename,
        content_type=file.content_type or default_type,
        data=data,
    )
