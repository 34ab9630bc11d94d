"""
Value objects for uploads and bundles.

Storage keys are plain strings shaped ``[folderPath/]<timestamp>-<name>``.
None of these objects are persisted on their own: the object store holds
the bytes, these only describe them for the duration of a request.
"""
from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class UploadDescriptor:
    """A stored upload: its key, the name the user gave it, and its link."""
    storage_key: str
    original_file_name: str
    retrieval_url: str


@dataclass(frozen=True)
class BundleRequest:
    """Keys to bundle, in the order their entries should appear."""
    keys: Tuple[str, ...]
    bundle_name: Optional[str] = None


@dataclass(frozen=True)
class FetchFailure:
    """A key that could not be fetched while bundling, and why."""
    key: str
    reason: str


@dataclass(frozen=True)
class BundleResult:
    """
    Outcome of one bundling call.

    ``included_count`` counts archive entries, which can be lower than the
    number of requested keys when some fetches failed.
    """
    archive_key: str
    retrieval_url: str
    included_count: int
    failures: Tuple[FetchFailure, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ArchiveEntry:
    entry_name: str
    payload: bytes
