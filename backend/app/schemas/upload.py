"""
Pydantic schemas for upload and presign endpoints.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class UploadResponse(BaseModel):
    """Schema for a file uploaded through the API."""
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    key: str = Field(..., description="Storage key of the uploaded object")
    file_name: str = Field(..., alias="fileName", description="Key file name ({timestamp}-{name})")
    original_name: str = Field(..., alias="originalName")
    download_url: str = Field(..., alias="downloadUrl")


class PresignRequest(BaseModel):
    """Request schema for presigned upload URL generation."""
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "fileName": "report.pdf",
                "fileType": "application/pdf",
                "folderPath": "2024"
            }
        }
    )

    # Presence is checked by the service so missing values map to a 400
    file_name: Optional[str] = Field(None, alias="fileName")
    file_type: Optional[str] = Field(None, alias="fileType", description="MIME type of the file")
    folder_path: Optional[str] = Field(None, alias="folderPath")


class PresignResponse(BaseModel):
    """Response schema for presigned upload URL."""
    model_config = ConfigDict(populate_by_name=True)

    upload_url: str = Field(..., alias="uploadUrl", description="Presigned PUT URL for direct upload")
    key: str
    file_name: str = Field(..., alias="fileName")
    expires_in: int = Field(..., alias="expiresIn", description="URL expiration time in seconds")


class PresignDownloadResponse(BaseModel):
    """Response schema for presigned download URL."""
    model_config = ConfigDict(populate_by_name=True)

    download_url: str = Field(..., alias="downloadUrl")
    key: str
    expires_in: int = Field(..., alias="expiresIn")
