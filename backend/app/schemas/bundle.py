"""
Pydantic schemas for bundle endpoints.

Field names on the wire are camelCase to match the web client.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, List, Optional

from app.models.bundle import BundleResult


class BundleCreate(BaseModel):
    """Schema for creating a bundle from stored keys."""
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "keys": ["2024/1718000000000-report.pdf", "1718000000001-photo.png"],
                "folderName": "2024"
            }
        }
    )

    # Shape is checked by the service so malformed keys map to a 400 {error}
    keys: Any = Field(None, description="Storage keys to bundle, in order")
    folder_name: Optional[str] = Field(None, alias="folderName", description="Archive name (default: files)")


class FetchFailureResponse(BaseModel):
    """A key that was left out of the bundle."""
    key: str
    reason: str


class BundleResponse(BaseModel):
    """Schema for bundle response."""
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    download_url: str = Field(..., alias="downloadUrl")
    zip_key: str = Field(..., alias="zipKey")
    file_count: int = Field(..., alias="fileCount", description="Entries included in the archive")
    failures: List[FetchFailureResponse] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: BundleResult) -> "BundleResponse":
        return cls(
            download_url=result.retrieval_url,
            zip_key=result.archive_key,
            file_count=result.included_count,
            failures=[
                FetchFailureResponse(key=failure.key, reason=failure.reason)
                for failure in result.failures
            ],
        )


class ErrorResponse(BaseModel):
    """Error payload returned for failed requests."""
    error: str
