"""
Pydantic schemas for API request/response validation.
"""
from app.schemas.bundle import (
    BundleCreate,
    BundleResponse,
    ErrorResponse,
    FetchFailureResponse,
)
from app.schemas.upload import (
    PresignDownloadResponse,
    PresignRequest,
    PresignResponse,
    UploadResponse,
)

__all__ = [
    "BundleCreate",
    "BundleResponse",
    "ErrorResponse",
    "FetchFailureResponse",
    "PresignDownloadResponse",
    "PresignRequest",
    "PresignResponse",
    "UploadResponse",
]
