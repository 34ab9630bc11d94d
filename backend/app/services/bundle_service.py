"""
Bundle service: packs several stored objects into one downloadable ZIP.

Flow:
1. Fetch every requested key from the object store (concurrently)
2. Skip keys that cannot be fetched and report them as failures
3. Pack the fetched objects into a ZIP named by their original filenames
4. Store the ZIP under downloads/ and return its download link

One missing file never sinks the bundle; only a failure to store the
archive itself fails the request.
"""
import asyncio
import logging
import time
from typing import List, Optional, Sequence, Union

from app.config import settings
from app.exceptions import InvalidRequestError, NotFoundError, StorageFailureError
from app.models.bundle import BundleRequest, BundleResult, FetchFailure
from app.services.archive_builder import ArchiveBuilder
from app.storage.base import ObjectStore, StoredObject
from app.storage.keys import (
    build_archive_key,
    build_download_url,
    recover_file_name,
    unique_file_name,
)
from app.utils.logging import log_bundle_created, log_bundle_fetch_failed, log_storage_failure
from app.utils.metrics import (
    bundle_duration_seconds,
    bundle_entries,
    bundle_fetch_failures_total,
    bundles_created_total,
)

logger = logging.getLogger(__name__)

ARCHIVE_CONTENT_TYPE = "application/zip"


class BundleService:
    """
    Service for bundling stored objects into ZIP archives.

    Holds only configuration; every call keeps its fetched payloads local,
    so concurrent bundles never share in-flight state.
    """

    def __init__(
        self,
        store: ObjectStore,
        base_url: Optional[str] = None,
        max_concurrency: Optional[int] = None,
        reject_empty: Optional[bool] = None,
    ):
        self._store = store
        self._base_url = base_url or settings.public_base_url
        self._max_concurrency = max(1, max_concurrency or settings.bundle_fetch_concurrency)
        self._reject_empty = settings.bundle_reject_empty if reject_empty is None else reject_empty

    async def bundle(self, keys: Sequence[str], bundle_name: Optional[str] = None) -> BundleResult:
        """
        Bundle the given keys into one archive and store it.

        Args:
            keys: Storage keys to include, in archive order
            bundle_name: Optional archive name (default from settings)

        Returns:
            BundleResult with the archive key, its download URL, the number
            of included entries and the keys that could not be fetched

        Raises:
            InvalidRequestError: If keys is empty or not a list of strings
                (or nothing could be fetched and empty bundles are rejected)
            StorageFailureError: If the archive could not be stored
        """
        request = self._validate(keys, bundle_name)

        start_time = time.time()
        logger.info(f"Creating bundle for {len(request.keys)} keys")

        outcomes = await self._fetch_all(request.keys)

        builder = ArchiveBuilder()
        failures: List[FetchFailure] = []
        for key, outcome in zip(request.keys, outcomes):
            if isinstance(outcome, FetchFailure):
                failures.append(outcome)
                continue
            entry_name = self._entry_name(key)
            if not entry_name:
                # Folder markers ("photos/") have no file name to extract to
                failures.append(FetchFailure(key=key, reason="no file name"))
                log_bundle_fetch_failed(logger, key, "no file name")
                continue
            builder.add_entry(entry_name, outcome.body)

        included_count = len(builder)
        if included_count == 0 and self._reject_empty:
            raise InvalidRequestError("None of the requested files could be fetched")

        archive = builder.finalize()
        # Fetched payloads are no longer needed once the archive exists
        del outcomes

        archive_key = build_archive_key(request.bundle_name)
        try:
            await asyncio.to_thread(
                self._store.put_object, archive_key, archive, ARCHIVE_CONTENT_TYPE
            )
        except StorageFailureError as e:
            log_storage_failure(logger, "persist_archive", archive_key, str(e), include_traceback=True)
            raise

        duration = time.time() - start_time
        bundles_created_total.inc()
        bundle_entries.observe(included_count)
        bundle_duration_seconds.observe(duration)
        log_bundle_created(
            logger,
            archive_key=archive_key,
            included_count=included_count,
            failed_count=len(failures),
            duration_ms=duration * 1000,
            size_bytes=len(archive),
        )

        return BundleResult(
            archive_key=archive_key,
            retrieval_url=build_download_url(archive_key, self._base_url),
            included_count=included_count,
            failures=tuple(failures),
        )

    @staticmethod
    def _validate(keys, bundle_name: Optional[str]) -> BundleRequest:
        """Reject anything that is not a non-empty list of string keys."""
        if not keys or not isinstance(keys, (list, tuple)):
            raise InvalidRequestError("No keys provided")
        if not all(isinstance(key, str) and key for key in keys):
            raise InvalidRequestError("Keys must be non-empty strings")
        return BundleRequest(keys=tuple(keys), bundle_name=bundle_name)

    @staticmethod
    def _entry_name(key: str) -> str:
        """Archive entry name for a key; '123-' keeps its timestamped segment."""
        return recover_file_name(key) or unique_file_name(key)

    async def _fetch_all(self, keys: Sequence[str]) -> List[Union[StoredObject, FetchFailure]]:
        """Fetch every key, returning results aligned with the input order."""
        semaphore = asyncio.Semaphore(self._max_concurrency)

        async def fetch(key: str) -> Union[StoredObject, FetchFailure]:
            async with semaphore:
                return await self._fetch_one(key)

        return await asyncio.gather(*(fetch(key) for key in keys))

    async def _fetch_one(self, key: str) -> Union[StoredObject, FetchFailure]:
        try:
            return await asyncio.to_thread(self._store.get_object, key)
        except NotFoundError:
            reason = "not found"
        except StorageFailureError as e:
            reason = e.message
        except Exception as e:
            # Anything the store raises for one key must not sink its siblings
            reason = f"unexpected error: {e}"

        bundle_fetch_failures_total.inc()
        log_bundle_fetch_failed(logger, key, reason)
        return FetchFailure(key=key, reason=reason)
