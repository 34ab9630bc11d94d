"""
FastAPI dependencies for storage-backed services.

The object store is built once in the application lifespan and kept on
app.state; services are cheap wrappers constructed per request around it.
Tests override get_object_store to swap in an in-memory store.
"""
from fastapi import Depends, Request

from app.storage.base import ObjectStore
from app.storage.presign import PresignService
from app.services.bundle_service import BundleService
from app.services.retrieval_service import RetrievalService
from app.services.upload_service import UploadService


def get_object_store(request: Request) -> ObjectStore:
    """Return the process-wide object store created at startup."""
    return request.app.state.object_store


def get_bundle_service(store: ObjectStore = Depends(get_object_store)) -> BundleService:
    return BundleService(store)


def get_retrieval_service(store: ObjectStore = Depends(get_object_store)) -> RetrievalService:
    return RetrievalService(store)


def get_upload_service(store: ObjectStore = Depends(get_object_store)) -> UploadService:
    return UploadService(store)


def get_presign_service(store: ObjectStore = Depends(get_object_store)) -> PresignService:
    return PresignService(store)
