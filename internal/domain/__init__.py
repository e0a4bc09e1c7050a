"""
Domain package for the catalog and payment services.

Contains domain entities, value objects, the service result wrapper and
domain errors.
"""
from .product import Product
from .category import Category
from .supplier import Supplier
from .payment import Cart, Payment, PaymentMethod, PaymentStatus
from .value_objects import BearerToken, Money
from .result import ErrorKind, ServiceResult
from .errors import (
    DomainError,
    DomainValidationError,
    DuplicateKeyError,
    UpstreamError,
    SupplierLookupError,
    CartLookupError,
)

__all__ = [
    "Product",
    "Category",
    "Supplier",
    # Payments
    "Cart",
    "Payment",
    "PaymentMethod",
    "PaymentStatus",
    "BearerToken",
    "Money",
    "ErrorKind",
    "ServiceResult",
    "DomainError",
    "DomainValidationError",
    "DuplicateKeyError",
    "UpstreamError",
    "SupplierLookupError",
    "CartLookupError",
]
