"""
Base class for object stores.
The services only talk to this interface, so tests and alternative
backends can stand in for the S3 client.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class StoredObject:
    """Bytes fetched from the store along with their metadata."""
    key: str
    body: bytes
    content_type: Optional[str] = None
    content_length: int = 0


class ObjectStore(ABC):
    """
    Abstract byte-blob store addressed by string keys.

    Implementations provide their own atomicity per put/get. All methods are
    blocking; async callers run them on worker threads.

    Errors:
    - ObjectNotFoundError when a key does not exist
    - ObjectStoreError for every other failure
    """

    @abstractmethod
    def get_object(self, key: str) -> StoredObject:
        """
        Fetch the full content of an object.

        Raises:
            ObjectNotFoundError: If the key does not exist
            ObjectStoreError: If the store could not be read
        """
        pass

    @abstractmethod
    def put_object(self, key: str, body: bytes, content_type: Optional[str] = None) -> None:
        """
        Store bytes under a key, replacing any existing object.

        Raises:
            ObjectStoreError: If the write failed
        """
        pass

    @abstractmethod
    def generate_presigned_upload_url(self, key: str, content_type: str, expiration: int) -> str:
        """Return a time-limited URL that accepts a PUT of the object."""
        pass

    @abstractmethod
    def generate_presigned_download_url(self, key: str, expiration: int) -> str:
        """Return a time-limited URL that allows a GET of the object."""
        pass

    @abstractmethod
    def ping(self) -> bool:
        """Check whether the backing bucket is reachable."""
        pass
