"""
FastAPI application entry point.
Sets up the API with lifespan events for object store initialization.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from app.config import settings
from app.api.router import api_router
from app.exceptions import BundlerError
from app.middleware.metrics_middleware import MetricsMiddleware
from app.storage.s3_client import S3ObjectStore
from app.utils.logging import configure_logging

logger = logging.getLogger(__name__)

# Messages returned for operation-level failures, keyed by route prefix.
# Details of storage errors stay in the logs.
FAILURE_MESSAGES = {
    "/api/download-multiple": "Failed to create download",
    "/api/download/": "Failed to download file",
    "/api/upload": "Upload failed",
    "/api/presign": "Failed to generate URL",
    "/api/aws": "Failed to generate URL",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup/shutdown events.
    - Startup: Configure logging, build the shared object store client
    - Shutdown: Nothing to release
    """
    # Configure structured JSON logging
    configure_logging('file-bundler-api', settings.log_level)

    # One client for the whole process, injected into services per request
    if getattr(app.state, "object_store", None) is None:
        app.state.object_store = S3ObjectStore.from_settings(settings)

    yield


async def bundler_error_handler(request: Request, exc: BundlerError) -> JSONResponse:
    """Map the application error taxonomy onto {error} payloads."""
    message = exc.message
    if exc.status_code >= 500:
        path = request.url.path
        message = next(
            (text for prefix, text in FAILURE_MESSAGES.items() if path.startswith(prefix)),
            "Internal storage error",
        )
    elif exc.status_code == 404:
        message = "File not found"

    logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": message})


# Create FastAPI app
app = FastAPI(
    title="File Bundler API",
    description="Upload files to S3-compatible storage and download them individually or as ZIP bundles",
    version="0.1.0",
    lifespan=lifespan
)

app.add_exception_handler(BundlerError, bundler_error_handler)

# CORS middleware (for the web client)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Metrics middleware (must be after CORS to track all requests)
app.add_middleware(MetricsMiddleware)

# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "File Bundler API",
        "version": "0.1.0",
        "environment": settings.environment
    }


@app.get("/metrics")
async def metrics():
    """Prometheus metrics endpoint."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )
