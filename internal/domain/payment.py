"""
Domain model for payments.

Payments are created when a cart is paid, mutated in place when refunded and
never deleted. Status is a flat string field; the only guarded transition is
the refund, which is allowed from COMPLETADO only.
"""
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from .errors import DomainValidationError
from .value_objects import Money


class PaymentMethod(str, Enum):
    """Accepted payment methods."""
    CREDIT_CARD = "TARJETA_CREDITO"
    PAYPAL = "PAYPAL"
    BANK_TRANSFER = "TRANSFERENCIA"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["PaymentMethod"]:
        """Return the matching method, or None when the value is not recognised."""
        if not value:
            return None
        try:
            return cls(value.strip().upper())
        except ValueError:
            return None

    @classmethod
    def allowed_values(cls) -> list[str]:
        """Wire values of every accepted method."""
        return [m.value for m in cls]


class PaymentStatus(str, Enum):
    """Payment status values."""
    PENDING = "PENDIENTE"
    COMPLETED = "COMPLETADO"
    REFUNDED = "REEMBOLSADO"


@dataclass
class Cart:
    """
    Cart read model, owned by the cart service.

    Attributes:
        id: Cart identifier.
        user_id: Owner of the cart.
        total: Amount to pay.
    """
    id: int
    user_id: int
    total: Decimal

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "Cart":
        """Build a cart from the cart service JSON body (Spanish or English keys)."""
        return cls(
            id=int(payload["id"]),
            user_id=int(payload.get("usuarioId", payload.get("user_id", 0))),
            total=Decimal(str(payload.get("total", "0"))),
        )

    @property
    def is_empty(self) -> bool:
        """Whether there is nothing to pay."""
        return self.total <= 0


@dataclass
class Payment:
    """
    Payment aggregate.

    Attributes:
        id: Store-assigned identifier (0 until persisted).
        cart_id: Paid cart.
        user_id: Paying user.
        payment_method: One of PaymentMethod.
        amount: Paid amount, strictly positive.
        status: One of PaymentStatus values.
        created_at: Timestamp of creation.
        refunded_at: Timestamp of the refund, if any.
        refund_amount: Refunded amount, if any.
    """
    id: int = 0
    cart_id: int = 0
    user_id: int = 0
    payment_method: PaymentMethod = PaymentMethod.CREDIT_CARD
    amount: Decimal = Decimal("0")
    status: str = PaymentStatus.PENDING.value
    created_at: datetime = field(default_factory=datetime.utcnow)
    refunded_at: Optional[datetime] = None
    refund_amount: Optional[Decimal] = None

    def __post_init__(self) -> None:
        """Validate domain invariants after initialization."""
        if self.cart_id <= 0:
            raise DomainValidationError("El ID del carrito debe ser positivo")
        if self.user_id <= 0:
            raise DomainValidationError("El ID del usuario debe ser positivo")
        if Money(self.amount).is_zero:
            raise DomainValidationError("El monto del pago debe ser mayor a cero")

    @property
    def is_refundable(self) -> bool:
        """Whether the payment is in the completed sentinel state."""
        return self.status == PaymentStatus.COMPLETED.value

    def complete(self) -> None:
        """Mark the payment as completed by the payment gateway."""
        if self.status != PaymentStatus.PENDING.value:
            raise DomainValidationError(
                f"Solo se pueden completar pagos en estado {PaymentStatus.PENDING.value}"
            )
        self.status = PaymentStatus.COMPLETED.value

    def refund(self) -> None:
        """
        Refund the full amount.

        Raises:
            DomainValidationError: If the payment is not completed.
        """
        if not self.is_refundable:
            raise DomainValidationError(
                f"Solo se pueden reembolsar pagos en estado {PaymentStatus.COMPLETED.value}"
            )
        self.status = PaymentStatus.REFUNDED.value
        self.refunded_at = datetime.utcnow()
        self.refund_amount = self.amount

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {
            "id": self.id,
            "cart_id": self.cart_id,
            "user_id": self.user_id,
            "payment_method": self.payment_method.value,
            "amount": str(self.amount),
            "status": self.status,
            "created_at": self.created_at.isoformat(),
            "refunded_at": self.refunded_at.isoformat() if self.refunded_at else None,
            "refund_amount": str(self.refund_amount) if self.refund_amount is not None else None,
        }
