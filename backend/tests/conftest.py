"""
Test configuration and fixtures.
Uses an in-memory object store so no S3 endpoint is needed.
"""
import os

# Set test environment before any imports
os.environ["ENVIRONMENT"] = "test"
os.environ["PUBLIC_BASE_URL"] = "http://test"
os.environ["S3_BUCKET"] = "test-bucket"

import threading
import pytest
from typing import AsyncGenerator, Dict, Optional, Set

from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport

from app.exceptions import ObjectNotFoundError, ObjectStoreError
from app.storage.base import ObjectStore, StoredObject


class InMemoryObjectStore(ObjectStore):
    """
    Dict-backed object store.

    Keys listed in `broken_keys` fail with a storage error on get;
    `fail_puts` makes every put fail.
    """

    def __init__(self):
        self.objects: Dict[str, StoredObject] = {}
        self.broken_keys: Set[str] = set()
        self.fail_puts = False
        self.get_calls = 0
        self._lock = threading.Lock()

    def add(self, key: str, body: bytes, content_type: Optional[str] = None) -> str:
        self.objects[key] = StoredObject(key, body, content_type, len(body))
        return key

    def get_object(self, key: str) -> StoredObject:
        with self._lock:
            self.get_calls += 1
        if key in self.broken_keys:
            raise ObjectStoreError("get", key, RuntimeError("connection reset"))
        try:
            return self.objects[key]
        except KeyError:
            raise ObjectNotFoundError(key)

    def put_object(self, key: str, body: bytes, content_type: Optional[str] = None) -> None:
        if self.fail_puts:
            raise ObjectStoreError("put", key, RuntimeError("access denied"))
        with self._lock:
            self.objects[key] = StoredObject(key, body, content_type, len(body))

    def generate_presigned_upload_url(self, key: str, content_type: str, expiration: int) -> str:
        return f"https://storage.test/{key}?method=PUT&expires={expiration}"

    def generate_presigned_download_url(self, key: str, expiration: int) -> str:
        return f"https://storage.test/{key}?method=GET&expires={expiration}"

    def ping(self) -> bool:
        return not self.fail_puts


@pytest.fixture(scope="function")
def object_store() -> InMemoryObjectStore:
    """Create an empty in-memory object store."""
    return InMemoryObjectStore()


@pytest.fixture(scope="function")
def stored_keys(object_store: InMemoryObjectStore) -> list:
    """Seed the store with three uploaded files."""
    return [
        object_store.add("2024/1718000000000-report.pdf", b"%PDF-1.4 report", "application/pdf"),
        object_store.add("1718000000001-photo.png", b"\x89PNG\r\n\x1a\nimage", "image/png"),
        object_store.add("1718000000002-data-2024.csv", b"a,b\n1,2\n", "text/csv"),
    ]


def get_test_app(object_store: ObjectStore) -> FastAPI:
    """Create a test FastAPI app with overridden dependencies."""
    from app.main import app
    from app.api.dependencies import get_object_store

    app.dependency_overrides[get_object_store] = lambda: object_store

    return app


@pytest.fixture(scope="function")
async def client(object_store: InMemoryObjectStore) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for API testing."""
    app = get_test_app(object_store)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    # Clean up overrides
    app.dependency_overrides.clear()
