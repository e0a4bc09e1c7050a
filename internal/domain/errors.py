"""
Domain-specific exceptions.

Raised by entities and infrastructure adapters. Domain services translate
them into ServiceResult failures before anything crosses the service boundary.
"""


class DomainError(Exception):
    """Base exception for domain errors."""

    def __init__(self, message: str) -> None:
        """
        Initialize domain error.

        Args:
            message: Error message describing the issue.
        """
        self.message = message
        super().__init__(self.message)


class DomainValidationError(DomainError):
    """Exception raised when an entity invariant is violated."""
    pass


class DuplicateKeyError(DomainError):
    """Exception raised when a unique key is already taken in the store."""

    def __init__(self, field: str, message: str) -> None:
        """
        Initialize duplicate key error.

        Args:
            field: Name of the unique field (e.g. "sku", "serial").
            message: Human-readable message.
        """
        super().__init__(message)
        self.field = field


class UpstreamError(DomainError):
    """Exception raised when a call to another service fails."""

    def __init__(self, service: str, reason: str) -> None:
        """
        Initialize upstream error.

        Args:
            service: Name of the remote service.
            reason: The reason for the failure.
        """
        super().__init__(f"Call to {service} failed: {reason}")
        self.service = service
        self.reason = reason


class SupplierLookupError(UpstreamError):
    """Exception raised when the supplier service cannot be queried."""

    def __init__(self, supplier_id: int, reason: str) -> None:
        super().__init__("supplier-service", reason)
        self.supplier_id = supplier_id


class CartLookupError(UpstreamError):
    """Exception raised when the cart service cannot be queried."""

    def __init__(self, cart_id: int, reason: str) -> None:
        super().__init__("cart-service", reason)
        self.cart_id = cart_id
