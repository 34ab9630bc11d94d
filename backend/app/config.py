"""
Application configuration using Pydantic Settings.
All environment variables are loaded here with sensible defaults.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Environment
    environment: str = "dev"
    log_level: str = "INFO"

    # Public address of this API, used to build credential-free download links
    public_base_url: str = "http://localhost:8000"

    # S3-compatible storage (AWS S3, Cloudflare R2, MinIO, ...)
    s3_endpoint: Optional[str] = None  # None means AWS; set for R2/MinIO
    s3_bucket: str = "file-bundler"
    s3_access_key: Optional[str] = None
    s3_secret_key: Optional[str] = None
    s3_region: str = "us-east-1"
    presign_expiration: int = 3600  # Presigned URL expiration in seconds (1 hour)

    # Bundling
    downloads_prefix: str = "downloads"  # Folder that receives generated archives
    default_bundle_name: str = "files"
    bundle_fetch_concurrency: int = 8  # Max objects fetched in parallel per bundle
    bundle_reject_empty: bool = False  # Fail instead of returning an empty archive

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()
