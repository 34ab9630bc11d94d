"""
Business logic services.
"""
from app.services.archive_builder import ArchiveBuilder
from app.services.bundle_service import BundleService
from app.services.retrieval_service import RetrievalService, RetrievedFile
from app.services.upload_service import UploadService

__all__ = [
    "ArchiveBuilder",
    "BundleService",
    "RetrievalService",
    "RetrievedFile",
    "UploadService",
]
