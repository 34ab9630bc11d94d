"""
Error taxonomy shared by the storage layer, the services and the API.

Per-key fetch problems during bundling are NOT exceptions: they are
collected as FetchFailure records and returned with the bundle result.
"""
from typing import Optional


class BundlerError(Exception):
    """Base class for all application errors surfaced to API callers."""

    status_code = 500

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class InvalidRequestError(BundlerError):
    """Malformed caller input (e.g. an empty key list). Never retried."""

    status_code = 400


class NotFoundError(BundlerError):
    """The requested key does not exist in the object store."""

    status_code = 404


class StorageFailureError(BundlerError):
    """A storage operation failed and the whole request cannot complete."""

    status_code = 500


class ObjectNotFoundError(NotFoundError):
    """Raised by object store adapters when a key is missing."""

    def __init__(self, key: str, cause: Optional[Exception] = None):
        super().__init__(f"Object not found: {key}", cause)
        self.key = key


class ObjectStoreError(StorageFailureError):
    """Raised by object store adapters for any non-404 failure."""

    def __init__(self, operation: str, key: str, cause: Optional[Exception] = None):
        detail = f": {cause}" if cause else ""
        super().__init__(f"Object store {operation} failed for {key}{detail}", cause)
        self.operation = operation
        self.key = key
