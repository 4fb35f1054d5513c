"""
Blob storage helper over a Supabase Storage bucket.

Uploads are stored under "<folder>/<owner_id>/<epoch_ms>_<filename>" and
served through the bucket's public URL.
"""

import logging
import time
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Callable, Optional

from supabase import Client

from .exceptions import ExternalServiceError, ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadedFile:
    """A file received from a form upload or an in-browser recording."""

    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class StoredBlob:
    """Location of an uploaded blob."""

    path: str
    public_url: str


def build_blob_path(folder: str, owner_id: str, filename: str, timestamp_ms: int) -> str:
    """
    Build the storage path for an upload.

    Only the final path component of the client-supplied filename is kept.
    """
    name = PurePosixPath(filename.replace("\\", "/")).name or "upload"
    return f"{folder}/{owner_id}/{timestamp_ms}_{name}"


class BlobStorage:
    """Uploads and removes blobs in a single storage bucket."""

    def __init__(
        self,
        db: Client,
        bucket: str,
        max_upload_bytes: int,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self._db = db
        self._bucket = bucket
        self._max_upload_bytes = max_upload_bytes
        self._clock = clock or time.time

    def now_ms(self) -> int:
        """Current time in epoch milliseconds, used for file naming."""
        return int(self._clock() * 1000)

    def upload(self, folder: str, owner_id: str, file: UploadedFile) -> StoredBlob:
        """
        Upload a file and return its path and public URL.

        Raises:
            ValidationError: If the file is empty or over the size limit.
            ExternalServiceError: If the storage backend rejects the upload.
        """
        if file.size == 0:
            raise ValidationError(f"{file.filename or 'File'} is empty", code="EMPTY_FILE")
        if file.size > self._max_upload_bytes:
            raise ValidationError(
                f"{file.filename} is too large",
                code="FILE_TOO_LARGE",
                details={"size": file.size, "limit": self._max_upload_bytes},
            )

        path = build_blob_path(folder, owner_id, file.filename, self.now_ms())
        bucket = self._db.storage.from_(self._bucket)

        try:
            bucket.upload(
                path,
                file.data,
                {"content-type": file.content_type or "application/octet-stream"},
            )
            public_url = bucket.get_public_url(path)
        except Exception as e:
            logger.error("Upload of %s failed: %s", path, e)
            raise ExternalServiceError(
                f"Failed to upload {file.filename}: {e}",
                service="storage",
                code="UPLOAD_FAILED",
                details={"path": path},
            ) from e

        logger.info("Uploaded %s (%d bytes)", path, file.size)
        return StoredBlob(path=path, public_url=public_url)

    def remove(self, paths: list[str]) -> None:
        """Remove blobs by path. Empty paths are skipped."""
        paths = [p for p in paths if p]
        if not paths:
            return

        try:
            self._db.storage.from_(self._bucket).remove(paths)
        except Exception as e:
            logger.error("Removing %s failed: %s", paths, e)
            raise ExternalServiceError(
                f"Failed to delete files: {e}",
                service="storage",
                code="DELETE_FAILED",
                details={"paths": paths},
            ) from e

        logger.info("Removed %d blob(s)", len(paths))
