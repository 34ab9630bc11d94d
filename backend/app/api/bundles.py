"""
Bundle endpoint: zip several stored files into one download.

POST /download-multiple
    {keys: [...], folderName?: str}
    -> {success, downloadUrl, zipKey, fileCount, failures}

Files that cannot be fetched are skipped and listed in `failures`;
only a failure to store the archive itself returns an error.
"""
from fastapi import APIRouter, Depends

from app.schemas.bundle import BundleCreate, BundleResponse, ErrorResponse
from app.services.bundle_service import BundleService
from app.api.dependencies import get_bundle_service

router = APIRouter()


@router.post(
    "",
    response_model=BundleResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def create_bundle(
    request: BundleCreate,
    service: BundleService = Depends(get_bundle_service),
):
    """
    Create a ZIP archive from previously uploaded keys.

    Entries are named after the original filenames recovered from the keys.
    The archive is stored under downloads/ and served via /download/{key}.
    """
    result = await service.bundle(request.keys, request.folder_name)
    return BundleResponse.from_result(result)
