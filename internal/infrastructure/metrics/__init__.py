"""
Metrics package.
"""
from .prometheus import (
    HTTP_REQUESTS_TOTAL,
    HTTP_REQUEST_DURATION,
    PAYMENT_OPERATIONS,
    PRODUCT_OPERATIONS,
    UPSTREAM_REQUESTS,
    UPSTREAM_REQUEST_DURATION,
)

__all__ = [
    "HTTP_REQUESTS_TOTAL",
    "HTTP_REQUEST_DURATION",
    "PAYMENT_OPERATIONS",
    "PRODUCT_OPERATIONS",
    "UPSTREAM_REQUESTS",
    "UPSTREAM_REQUEST_DURATION",
]
