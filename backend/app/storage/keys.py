"""
Storage key naming scheme.

Pattern: [folder_path/]{timestamp}-{original_file_name}

- Timestamp disambiguates uploads that share a filename
- The original name is recovered from the key, so no metadata store is needed
- Timestamp digits never contain '-', so only the first '-' of the last
  path segment separates it from the name; hyphens inside the name survive

Archives produced by bundling live under:
    {downloads_prefix}/{bundle_name}-{timestamp}.zip
"""
import threading
import time
from typing import Callable, Optional
from urllib.parse import quote

from app.config import settings


class KeyClock:
    """
    Millisecond timestamp source that never repeats within a process.

    Wall-clock milliseconds are used while they move forward; if the clock
    stalls or steps back (same-millisecond uploads, NTP adjustments) the last
    issued value + 1 is handed out instead.
    """

    def __init__(self, now_ms: Optional[Callable[[], int]] = None):
        self._now_ms = now_ms or (lambda: time.time_ns() // 1_000_000)
        self._last = 0
        self._lock = threading.Lock()

    def next(self) -> int:
        with self._lock:
            current = self._now_ms()
            if current <= self._last:
                current = self._last + 1
            self._last = current
            return current


# Shared by every request in the process
default_clock = KeyClock()


def derive_key(
    original_file_name: str,
    folder_path: Optional[str] = None,
    timestamp: Optional[int] = None,
) -> str:
    """
    Build the storage key for an uploaded file.

    Args:
        original_file_name: Name the user gave the file
        folder_path: Optional folder to place the object under
        timestamp: Explicit timestamp (default: next value of the shared clock)

    Returns:
        Storage key string
    """
    if timestamp is None:
        timestamp = default_clock.next()

    unique_name = f"{timestamp}-{original_file_name}"
    folder = (folder_path or "").rstrip("/")
    return f"{folder}/{unique_name}" if folder else unique_name


def unique_file_name(key: str) -> str:
    """Return the last path segment of a key ({timestamp}-{name})."""
    return key.rsplit("/", 1)[-1]


def recover_file_name(key: str) -> str:
    """
    Recover the original filename from a storage key.

    A last segment without any '-' is returned unchanged.
    """
    _, sep, name = unique_file_name(key).partition("-")
    return name if sep else unique_file_name(key)


def build_archive_key(
    bundle_name: Optional[str] = None,
    timestamp: Optional[int] = None,
) -> str:
    """Build the key a generated bundle archive is stored under."""
    if timestamp is None:
        timestamp = default_clock.next()
    name = bundle_name or settings.default_bundle_name
    return f"{settings.downloads_prefix}/{name}-{timestamp}.zip"


def build_download_url(key: str, base_url: Optional[str] = None) -> str:
    """
    Build the application-routed download link for a key.

    The whole key (slashes included) is percent-encoded into one path
    segment, so direct store URLs are never exposed.
    """
    base = (base_url or settings.public_base_url).rstrip("/")
    return f"{base}/api/download/{quote(key, safe='')}"
