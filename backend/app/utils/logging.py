"""
Production logging utility for structured JSON logging.

Provides event-specific logging functions with mandatory fields:
- timestamp (ISO8601)
- level
- service
- event

Optional fields (included when applicable):
- key
- duration_ms

Usage:
    from app.utils.logging import configure_logging, log_bundle_created

    configure_logging('file-bundler-api', 'INFO')
    log_bundle_created(logger, archive_key='downloads/files-1.zip', included_count=3)
"""
import logging
import sys
from typing import Optional, Dict, Any
from pythonjsonlogger import jsonlogger


class StructuredLogger:
    """Structured JSON logger with mandatory fields."""

    _service_name = None
    _configured = False

    @classmethod
    def configure(cls, service_name: str, log_level: str = "INFO"):
        """
        Configure structured JSON logging for the application.

        Args:
            service_name: Service identifier
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        """
        if cls._configured:
            return  # Already configured

        cls._service_name = service_name

        # Remove default handlers
        root_logger = logging.getLogger()
        root_logger.handlers = []

        formatter = jsonlogger.JsonFormatter(
            '%(timestamp)s %(level)s %(name)s %(message)s',
            timestamp=True,
            json_ensure_ascii=False
        )

        # Console handler (for docker logs)
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(formatter)

        root_logger.addHandler(handler)
        root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

        # Add service name to all log records via filter
        class ServiceFilter(logging.Filter):
            def filter(self, record):
                record.service = cls._service_name
                return True

        handler.addFilter(ServiceFilter())
        cls._configured = True


def _build_log_extra(
    event: str,
    key: Optional[str] = None,
    duration_ms: Optional[float] = None,
    **kwargs
) -> Dict[str, Any]:
    """
    Build extra fields for structured logging.

    Args:
        event: Event name (mandatory)
        key: Optional storage key the event is about
        duration_ms: Optional duration in milliseconds
        **kwargs: Additional fields

    Returns:
        Dictionary of extra fields
    """
    extra = {
        "event": event,
        **kwargs
    }

    if key:
        extra["key"] = key
    if duration_ms is not None:
        extra["duration_ms"] = round(duration_ms, 2)

    return extra


# Bundle event functions

def log_bundle_created(
    logger: logging.Logger,
    archive_key: str,
    included_count: int,
    failed_count: int = 0,
    duration_ms: Optional[float] = None,
    **kwargs
):
    """
    Log bundle creation event.

    Args:
        logger: Logger instance
        archive_key: Key the archive was stored under (required)
        included_count: Entries written to the archive (required)
        failed_count: Keys skipped because they could not be fetched
        duration_ms: Optional duration in milliseconds
        **kwargs: Additional fields
    """
    extra = _build_log_extra(
        event="bundle_created",
        key=archive_key,
        duration_ms=duration_ms,
        included_count=included_count,
        failed_count=failed_count,
        **kwargs
    )

    logger.info(f"Bundle created: {archive_key}", extra=extra)


def log_bundle_fetch_failed(
    logger: logging.Logger,
    key: str,
    reason: str,
    **kwargs
):
    """Log a key that was skipped while bundling."""
    extra = _build_log_extra(
        event="bundle_fetch_failed",
        key=key,
        reason=reason,
        **kwargs
    )

    logger.warning(f"Skipping {key} in bundle: {reason}", extra=extra)


# Object event functions

def log_object_uploaded(
    logger: logging.Logger,
    key: str,
    size_bytes: int,
    content_type: Optional[str] = None,
    **kwargs
):
    """Log a file stored through the upload endpoint."""
    extra = _build_log_extra(
        event="object_uploaded",
        key=key,
        size_bytes=size_bytes,
        **kwargs
    )
    if content_type:
        extra["content_type"] = content_type

    logger.info(f"Object uploaded: {key}", extra=extra)


def log_object_served(
    logger: logging.Logger,
    key: str,
    file_name: str,
    size_bytes: int,
    **kwargs
):
    """Log an object returned by the download endpoint."""
    extra = _build_log_extra(
        event="object_served",
        key=key,
        file_name=file_name,
        size_bytes=size_bytes,
        **kwargs
    )

    logger.info(f"Serving file: {file_name}", extra=extra)


def log_storage_failure(
    logger: logging.Logger,
    operation: str,
    key: str,
    error: str,
    include_traceback: bool = False,
    **kwargs
):
    """
    Log a fatal storage failure.

    Args:
        logger: Logger instance
        operation: Operation name (persist_archive, retrieve, upload) (required)
        key: Storage key involved (required)
        error: Error message (required)
        include_traceback: Whether to include stack trace
        **kwargs: Additional fields
    """
    extra = _build_log_extra(
        event="storage_failure",
        key=key,
        operation=operation,
        error=str(error),
        **kwargs
    )

    message = f"Storage failure: {operation} {key} - {error}"

    if include_traceback:
        exc_info = sys.exc_info()
        if exc_info[0] is not None:
            logger.error(message, extra=extra, exc_info=exc_info)
        else:
            logger.error(message, extra=extra)
    else:
        logger.error(message, extra=extra)


# Convenience alias
def configure_logging(service_name: str, log_level: str = "INFO"):
    """Configure logging (alias for StructuredLogger.configure)."""
    StructuredLogger.configure(service_name, log_level)
