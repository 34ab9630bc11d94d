"""
Upload endpoints.

Two ways to get a file into storage:
1. POST /upload - send the file through the API (multipart form)
2. POST /presign - get a presigned PUT URL and upload directly to storage

/aws is kept as an alias of /presign for existing web clients.

Either way the caller ends up with a storage key that can be bundled via
/download-multiple or fetched via /download/{key}.
"""
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from app.schemas.bundle import ErrorResponse
from app.schemas.upload import (
    PresignDownloadResponse,
    PresignRequest,
    PresignResponse,
    UploadResponse,
)
from app.services.upload_service import UploadService
from app.storage.keys import unique_file_name
from app.storage.presign import PresignService
from app.api.dependencies import get_presign_service, get_upload_service

router = APIRouter()


@router.post(
    "/upload",
    response_model=UploadResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def upload_file(
    file: UploadFile = File(...),
    folder_path: Optional[str] = Form(None, alias="folderPath"),
    service: UploadService = Depends(get_upload_service),
):
    """
    Upload a single file through the API.

    The file is stored as [folderPath/]{timestamp}-{filename}.
    """
    body = await file.read()
    descriptor = await service.upload(
        file_name=file.filename,
        body=body,
        content_type=file.content_type,
        folder_path=folder_path,
    )

    return UploadResponse(
        key=descriptor.storage_key,
        file_name=unique_file_name(descriptor.storage_key),
        original_name=descriptor.original_file_name,
        download_url=descriptor.retrieval_url,
    )


@router.post("/aws", response_model=PresignResponse, include_in_schema=False)
@router.post(
    "/presign",
    response_model=PresignResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def presign_upload(
    request: PresignRequest,
    service: PresignService = Depends(get_presign_service),
):
    """
    Generate a presigned URL for direct file upload to storage.

    Client then PUTs the file to upload_url with the same Content-Type.
    """
    upload_url, key, file_name = service.create_upload_url(
        request.file_name,
        request.file_type,
        request.folder_path,
    )

    return PresignResponse(
        upload_url=upload_url,
        key=key,
        file_name=file_name,
        expires_in=service.expiration,
    )


@router.get("/aws", response_model=PresignDownloadResponse, include_in_schema=False)
@router.get(
    "/presign",
    response_model=PresignDownloadResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def presign_download(
    key: Optional[str] = None,
    service: PresignService = Depends(get_presign_service),
):
    """Generate a presigned GET URL for an existing key."""
    download_url = service.create_download_url(key)

    return PresignDownloadResponse(
        download_url=download_url,
        key=key,
        expires_in=service.expiration,
    )
