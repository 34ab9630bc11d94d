"""
Prometheus metrics definitions.
All metrics are registered here and can be imported by other modules.
"""
from prometheus_client import Counter, Histogram

# HTTP request metrics
http_requests_total = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'path', 'status']
)

http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'path'],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0]
)

# Error metrics
errors_total = Counter(
    'errors_total',
    'Total errors',
    ['error_type']
)

# Object store metrics
object_store_requests_total = Counter(
    'object_store_requests_total',
    'Total object store requests',
    ['operation', 'status']
)

# Bundle metrics
bundles_created_total = Counter(
    'bundles_created_total',
    'Total bundle archives created'
)

bundle_fetch_failures_total = Counter(
    'bundle_fetch_failures_total',
    'Total objects skipped while bundling because they could not be fetched'
)

bundle_entries = Histogram(
    'bundle_entries',
    'Number of entries included per bundle archive',
    buckets=[0, 1, 2, 5, 10, 25, 50, 100, 250, 500]
)

bundle_duration_seconds = Histogram(
    'bundle_duration_seconds',
    'Bundle creation duration in seconds',
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0, 120.0]
)

# Upload / download metrics
uploads_total = Counter(
    'uploads_total',
    'Total files uploaded through the API'
)

downloads_served_total = Counter(
    'downloads_served_total',
    'Total objects served through the download endpoint',
    ['kind']
)
