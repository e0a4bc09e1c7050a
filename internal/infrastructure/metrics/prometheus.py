"""
Prometheus Metrics for the catalog and payment services.

Defines the counters and histograms shared by both APIs.
"""

from prometheus_client import Counter, Histogram

# HTTP
HTTP_REQUESTS_TOTAL = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status_code']
)

HTTP_REQUEST_DURATION = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint'],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0]
)

# Catalog
PRODUCT_OPERATIONS = Counter(
    'product_operations_total',
    'Successful product mutations',
    ['operation']  # create, delete
)

# Payments
PAYMENT_OPERATIONS = Counter(
    'payment_operations_total',
    'Payment operations by outcome',
    ['operation', 'outcome']  # process/refund, success/rejected
)

# Calls to other services
UPSTREAM_REQUESTS = Counter(
    'upstream_requests_total',
    'Outbound calls to other internal services',
    ['service', 'outcome']  # ok, not_found, rejected, error, circuit_open
)

UPSTREAM_REQUEST_DURATION = Histogram(
    'upstream_request_duration_seconds',
    'Outbound call duration',
    ['service'],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0]
)
