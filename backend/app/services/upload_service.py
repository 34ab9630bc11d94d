"""
Upload service for files sent through the API (as opposed to presigned
direct uploads).
"""
import asyncio
import logging
from typing import Optional

from app.config import settings
from app.exceptions import InvalidRequestError, StorageFailureError
from app.models.bundle import UploadDescriptor
from app.storage.base import ObjectStore
from app.storage.keys import build_download_url, derive_key
from app.utils.logging import log_object_uploaded, log_storage_failure
from app.utils.metrics import uploads_total

logger = logging.getLogger(__name__)


class UploadService:
    """Stores uploaded bytes under a freshly derived key."""

    def __init__(self, store: ObjectStore, base_url: Optional[str] = None):
        self._store = store
        self._base_url = base_url or settings.public_base_url

    async def upload(
        self,
        file_name: str,
        body: bytes,
        content_type: Optional[str] = None,
        folder_path: Optional[str] = None,
    ) -> UploadDescriptor:
        """
        Store a file and describe where it lives.

        Args:
            file_name: Original file name
            body: File content
            content_type: MIME type recorded on the object
            folder_path: Optional folder to place the object under

        Returns:
            UploadDescriptor with the key, original name and download link

        Raises:
            InvalidRequestError: If no file name was given
            StorageFailureError: If the object could not be stored
        """
        if not file_name:
            raise InvalidRequestError("No file provided")

        key = derive_key(file_name, folder_path)
        try:
            await asyncio.to_thread(self._store.put_object, key, body, content_type)
        except StorageFailureError as e:
            log_storage_failure(logger, "upload", key, str(e), include_traceback=True)
            raise

        uploads_total.inc()
        log_object_uploaded(logger, key, len(body), content_type, folder_path=folder_path)

        return UploadDescriptor(
            storage_key=key,
            original_file_name=file_name,
            retrieval_url=build_download_url(key, self._base_url),
        )
