"""
Presigned URL generation service.

Lets clients move bytes directly to and from the object store without the
API proxying them.

Flow:
1. Client requests a presigned PUT URL with file name, content type, folder
2. Backend derives a unique storage key and signs a PUT for it
3. Client uploads directly to the store using the presigned URL
4. The returned key can later be bundled or served via /api/download
"""
import logging
from typing import Optional, Tuple

from app.config import settings
from app.exceptions import InvalidRequestError
from app.storage.base import ObjectStore
from app.storage.keys import derive_key, unique_file_name

logger = logging.getLogger(__name__)


class PresignService:
    """
    Service for handling presigned upload/download operations.

    Responsibilities:
    - Validate presign requests
    - Generate unique object keys
    - Create presigned URLs
    """

    def __init__(self, store: ObjectStore, expiration: Optional[int] = None):
        self._store = store
        self._expiration = expiration or settings.presign_expiration

    @property
    def expiration(self) -> int:
        return self._expiration

    def create_upload_url(
        self,
        file_name: str,
        content_type: str,
        folder_path: Optional[str] = None,
    ) -> Tuple[str, str, str]:
        """
        Create a presigned upload URL for a new object.

        Args:
            file_name: Original file name
            content_type: MIME type the upload must be sent with
            folder_path: Optional folder to place the object under

        Returns:
            Tuple of (upload_url, key, unique_file_name)

        Raises:
            InvalidRequestError: If file name or content type is missing
            ObjectStoreError: If the URL could not be signed
        """
        if not file_name or not content_type:
            raise InvalidRequestError("fileName and fileType are required")

        key = derive_key(file_name, folder_path)
        upload_url = self._store.generate_presigned_upload_url(key, content_type, self._expiration)

        logger.info(f"Created presigned upload: key={key}, content_type={content_type}")
        return upload_url, key, unique_file_name(key)

    def create_download_url(self, key: str) -> str:
        """
        Create a presigned GET URL for an existing key.

        Raises:
            InvalidRequestError: If key is missing
            ObjectStoreError: If the URL could not be signed
        """
        if not key:
            raise InvalidRequestError("key parameter is required")

        url = self._store.generate_presigned_download_url(key, self._expiration)
        logger.debug(f"Generated presigned download URL for {key} (expires in {self._expiration}s)")
        return url
