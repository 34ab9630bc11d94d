"""
Domain models package.
"""
from app.models.bundle import (
    ArchiveEntry,
    BundleRequest,
    BundleResult,
    FetchFailure,
    UploadDescriptor,
)

__all__ = [
    "ArchiveEntry",
    "BundleRequest",
    "BundleResult",
    "FetchFailure",
    "UploadDescriptor",
]
