"""
Download endpoint: serves any stored object as an attachment.

GET /download/{key}

The key arrives percent-encoded as a single path segment; the ASGI server
decodes it, so keys containing '/' are matched with a path converter.
Responses are never cached: bundle links are typically short-lived.
"""
from urllib.parse import quote

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from app.schemas.bundle import ErrorResponse
from app.services.retrieval_service import RetrievalService
from app.api.dependencies import get_retrieval_service
from app.utils.metrics import downloads_served_total
from app.config import settings

router = APIRouter()

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


def content_disposition(file_name: str) -> str:
    """
    Build an attachment Content-Disposition header.

    Non-ASCII names get an ASCII fallback plus an RFC 5987 filename*.
    """
    fallback = file_name.encode("ascii", "replace").decode("ascii").replace('"', "'")
    header = f'attachment; filename="{fallback}"'
    if fallback != file_name:
        header += f"; filename*=UTF-8''{quote(file_name, safe='')}"
    return header


@router.get(
    "/{key:path}",
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def download_file(
    key: str,
    service: RetrievalService = Depends(get_retrieval_service),
):
    """Return the object's bytes with download framing."""
    retrieved = await service.retrieve(key)

    kind = "bundle" if key.startswith(f"{settings.downloads_prefix}/") else "file"
    downloads_served_total.labels(kind=kind).inc()

    return Response(
        content=retrieved.body,
        media_type=retrieved.content_type,
        headers={
            "Content-Disposition": content_disposition(retrieved.file_name),
            **NO_CACHE_HEADERS,
        },
    )
