"""
Retrieval service: resolves a storage key to downloadable bytes.
"""
import asyncio
import logging
from dataclasses import dataclass

from app.exceptions import StorageFailureError
from app.storage.base import ObjectStore
from app.storage.keys import recover_file_name
from app.utils.logging import log_object_served, log_storage_failure

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class RetrievedFile:
    body: bytes
    content_type: str
    file_name: str

    @property
    def size(self) -> int:
        return len(self.body)


class RetrievalService:
    """Fetches single objects for the download endpoint. All-or-nothing."""

    def __init__(self, store: ObjectStore):
        self._store = store

    async def retrieve(self, key: str) -> RetrievedFile:
        """
        Fetch an object and work out how it should be presented.

        Raises:
            NotFoundError: If the key does not exist
            StorageFailureError: If the store could not be read
        """
        try:
            stored = await asyncio.to_thread(self._store.get_object, key)
        except StorageFailureError as e:
            log_storage_failure(logger, "retrieve", key, str(e), include_traceback=True)
            raise

        retrieved = RetrievedFile(
            body=stored.body,
            content_type=stored.content_type or DEFAULT_CONTENT_TYPE,
            file_name=recover_file_name(key),
        )
        log_object_served(logger, key, retrieved.file_name, retrieved.size)
        return retrieved
