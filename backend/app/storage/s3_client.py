"""
S3-compatible object store client.

Uses boto3 with the S3 API, so it works against AWS S3, Cloudflare R2,
MinIO or any other S3-compatible storage. Retries and backoff are left to
botocore's own retry configuration.

One instance is built at application startup and shared for the lifetime
of the process (see app.main.lifespan).
"""
import logging
from typing import Optional
import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from app.config import Settings
from app.exceptions import ObjectNotFoundError, ObjectStoreError
from app.storage.base import ObjectStore, StoredObject
from app.utils.metrics import object_store_requests_total

logger = logging.getLogger(__name__)

# Error codes S3-compatible stores use for a missing key
NOT_FOUND_CODES = {"NoSuchKey", "404", "NotFound"}


def _is_not_found(error: ClientError) -> bool:
    return error.response.get("Error", {}).get("Code") in NOT_FOUND_CODES


class S3ObjectStore(ObjectStore):
    """
    Object store backed by a single S3 bucket.

    Accepts an already-built boto3 client so tests can wrap it with
    botocore's Stubber.
    """

    def __init__(self, client, bucket: str):
        self._client = client
        self._bucket = bucket

    @classmethod
    def from_settings(cls, settings: Settings) -> "S3ObjectStore":
        """
        Build the boto3 client from application settings.

        When no access keys are configured boto3 falls back to its default
        credential chain (environment, shared config, instance role).
        """
        client = boto3.client(
            's3',
            endpoint_url=settings.s3_endpoint,
            aws_access_key_id=settings.s3_access_key,
            aws_secret_access_key=settings.s3_secret_key,
            region_name=settings.s3_region,
            config=Config(
                signature_version='s3v4',
                # Path-style for custom endpoints (R2, MinIO)
                s3={'addressing_style': 'path' if settings.s3_endpoint else 'auto'}
            )
        )
        logger.info(f"Object store client initialized for bucket: {settings.s3_bucket}")
        return cls(client, settings.s3_bucket)

    @property
    def bucket(self) -> str:
        """Get configured bucket name."""
        return self._bucket

    def get_object(self, key: str) -> StoredObject:
        try:
            response = self._client.get_object(Bucket=self._bucket, Key=key)
            body = response['Body'].read()
        except ClientError as e:
            if _is_not_found(e):
                object_store_requests_total.labels(operation="get", status="not_found").inc()
                raise ObjectNotFoundError(key, e) from e
            object_store_requests_total.labels(operation="get", status="error").inc()
            logger.error(f"Failed to get {key} from object store: {e}")
            raise ObjectStoreError("get", key, e) from e
        except BotoCoreError as e:
            object_store_requests_total.labels(operation="get", status="error").inc()
            logger.error(f"Failed to get {key} from object store: {e}")
            raise ObjectStoreError("get", key, e) from e

        object_store_requests_total.labels(operation="get", status="ok").inc()
        logger.debug(f"Fetched {key} ({len(body)} bytes)")
        return StoredObject(
            key=key,
            body=body,
            content_type=response.get('ContentType'),
            content_length=response.get('ContentLength') or len(body),
        )

    def put_object(self, key: str, body: bytes, content_type: Optional[str] = None) -> None:
        params = {'Bucket': self._bucket, 'Key': key, 'Body': body}
        if content_type:
            params['ContentType'] = content_type

        try:
            self._client.put_object(**params)
        except (ClientError, BotoCoreError) as e:
            object_store_requests_total.labels(operation="put", status="error").inc()
            logger.error(f"Failed to put {key} to object store: {e}")
            raise ObjectStoreError("put", key, e) from e

        object_store_requests_total.labels(operation="put", status="ok").inc()
        logger.debug(f"Stored {key} ({len(body)} bytes)")

    def generate_presigned_upload_url(self, key: str, content_type: str, expiration: int) -> str:
        """
        Generate a presigned PUT URL for direct upload.

        Security:
            - URL expires after the given number of seconds
            - Only allows PUT (upload), not GET
            - Content-Type must match what was signed
        """
        try:
            return self._client.generate_presigned_url(
                ClientMethod='put_object',
                Params={
                    'Bucket': self._bucket,
                    'Key': key,
                    'ContentType': content_type,
                },
                ExpiresIn=expiration
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to generate presigned upload URL for {key}: {e}")
            raise ObjectStoreError("presign_put", key, e) from e

    def generate_presigned_download_url(self, key: str, expiration: int) -> str:
        """
        Generate a presigned GET URL for reading an object.

        This is NOT a public URL - the bucket remains private.
        """
        try:
            return self._client.generate_presigned_url(
                ClientMethod='get_object',
                Params={
                    'Bucket': self._bucket,
                    'Key': key,
                },
                ExpiresIn=expiration
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to generate presigned download URL for {key}: {e}")
            raise ObjectStoreError("presign_get", key, e) from e

    def ping(self) -> bool:
        try:
            self._client.head_bucket(Bucket=self._bucket)
            return True
        except (ClientError, BotoCoreError) as e:
            logger.warning(f"Bucket {self._bucket} not reachable: {e}")
            return False
