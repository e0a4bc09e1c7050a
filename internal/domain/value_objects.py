"""
Value Objects shared by the catalog and payment domains.

Value objects are immutable and defined by their attributes.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from .errors import DomainValidationError


@dataclass(frozen=True)
class Money:
    """
    Non-negative monetary amount.

    Attributes:
        amount: The amount, always >= 0.
    """
    amount: Decimal

    def __post_init__(self) -> None:
        """Validate money constraints."""
        if self.amount is None:
            raise DomainValidationError("El monto es obligatorio")
        if self.amount < 0:
            raise DomainValidationError("El monto no puede ser negativo")

    @property
    def is_zero(self) -> bool:
        """Whether the amount equals zero."""
        return self.amount == Decimal("0")


@dataclass(frozen=True)
class BearerToken:
    """
    Caller credential forwarded to other internal services.

    Attributes:
        value: The raw token, without the "Bearer " prefix.
    """
    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise DomainValidationError("El token de autorización no puede estar vacío")

    @classmethod
    def from_header(cls, authorization: Optional[str]) -> Optional["BearerToken"]:
        """
        Parse an Authorization header value.

        Args:
            authorization: Header value such as "Bearer eyJ...".

        Returns:
            BearerToken, or None when the header is absent or not a bearer credential.
        """
        if not authorization:
            return None
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() != "bearer" or not credentials.strip():
            return None
        return cls(value=credentials.strip())

    def as_header(self) -> dict[str, str]:
        """Render the token as an HTTP Authorization header."""
        return {"Authorization": f"Bearer {self.value}"}
