"""
Health check endpoint.
Verifies object store connectivity.
"""
import asyncio

from fastapi import APIRouter, Depends, HTTPException

from app.api.dependencies import get_object_store
from app.config import settings
from app.storage.base import ObjectStore

router = APIRouter()


@router.get("")
async def health_check(store: ObjectStore = Depends(get_object_store)):
    """
    Health check endpoint.
    Returns status of the storage bucket.
    """
    health_status = {
        "status": "healthy",
        "storage": "unknown",
        "bucket": settings.s3_bucket,
    }

    if await asyncio.to_thread(store.ping):
        health_status["storage"] = "connected"
    else:
        health_status["storage"] = "unreachable"
        health_status["status"] = "unhealthy"

    if health_status["status"] == "unhealthy":
        raise HTTPException(status_code=503, detail=health_status)

    return health_status
