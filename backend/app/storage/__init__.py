"""
Storage module for S3-compatible object storage.

Holds the object store interface and its boto3 implementation, the storage
key naming scheme and presigned URL issuance.
"""
from app.storage.base import ObjectStore, StoredObject
from app.storage.s3_client import S3ObjectStore
from app.storage.presign import PresignService

__all__ = ["ObjectStore", "StoredObject", "S3ObjectStore", "PresignService"]
