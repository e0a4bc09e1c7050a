"""
Payment Service Use Case.

Processes cart payments, reads them back and refunds completed ones. Failures
are reported as lists of human-readable messages inside a ServiceResult.
"""
from typing import Optional, Protocol

from internal.domain.errors import DomainValidationError, DuplicateKeyError, UpstreamError
from internal.domain.payment import Cart, Payment, PaymentMethod, PaymentStatus
from internal.domain.result import ErrorKind, ServiceResult
from internal.domain.value_objects import BearerToken
from internal.infrastructure.metrics import PAYMENT_OPERATIONS
from pkg.logger.logger import get_logger

logger = get_logger(__name__)


class PaymentRepository(Protocol):
    """Protocol for payment repository operations."""

    async def get_by_id(self, payment_id: int) -> Optional[Payment]:
        ...

    async def list_by_user(self, user_id: int) -> list[Payment]:
        ...

    async def exists_completed_for_cart(self, cart_id: int) -> bool:
        ...

    async def save(self, payment: Payment) -> Payment:
        """
        Insert a payment and return it with its assigned ID.

        Raises DuplicateKeyError when the cart already has a completed payment.
        """
        ...

    async def update_status_if(self, payment: Payment, expected_status: str) -> Optional[Payment]:
        """
        Persist the payment's status and refund fields only if the stored
        status still equals expected_status. Returns None otherwise.
        """
        ...


class CartGateway(Protocol):
    """Protocol for the cart service client."""

    async def get_cart(self, cart_id: int, token: Optional[BearerToken] = None) -> Optional[Cart]:
        """Return the cart, or None when the cart service answers 404."""
        ...


class PaymentService:
    """
    Service for payment operations.

    Payments move PENDIENTE -> COMPLETADO when processed and
    COMPLETADO -> REEMBOLSADO when refunded.
    """

    def __init__(self, repository: PaymentRepository, carts: CartGateway) -> None:
        """
        Initialize the service.

        Args:
            repository: Payment repository for persistence.
            carts: Cart service client used to resolve user and amount.
        """
        self._repository = repository
        self._carts = carts

    async def process(
        self,
        cart_id: int,
        payment_method: str,
        token: Optional[BearerToken] = None,
    ) -> ServiceResult[Payment]:
        """
        Pay a cart.

        Args:
            cart_id: Cart to pay.
            payment_method: Wire value of a PaymentMethod.
            token: Caller's bearer token, forwarded to the cart service.

        Returns:
            Result with the completed payment, or the list of problems found.
        """
        errors: list[str] = []
        if cart_id is None or cart_id <= 0:
            errors.append("El ID del carrito debe ser positivo")
        method = PaymentMethod.parse(payment_method)
        if method is None:
            errors.append(
                f"Método de pago no válido: {payment_method}. "
                f"Valores permitidos: {', '.join(PaymentMethod.allowed_values())}"
            )
        if errors:
            return self._rejected("process", ErrorKind.VALIDATION, *errors)

        try:
            cart = await self._carts.get_cart(cart_id, token)
        except UpstreamError as e:
            logger.error("Cart lookup failed", cart_id=cart_id, error=e.reason)
            return self._rejected(
                "process", ErrorKind.UPSTREAM, f"No se pudo consultar el carrito con ID {cart_id}"
            )

        if cart is None:
            return self._rejected("process", ErrorKind.NOT_FOUND, f"Carrito no encontrado con ID {cart_id}")
        if cart.is_empty:
            return self._rejected("process", ErrorKind.VALIDATION, "El carrito no tiene monto a pagar")
        if await self._repository.exists_completed_for_cart(cart_id):
            return self._rejected(
                "process", ErrorKind.VALIDATION, f"El carrito {cart_id} ya tiene un pago completado"
            )

        try:
            payment = Payment(
                cart_id=cart.id,
                user_id=cart.user_id,
                payment_method=method,
                amount=cart.total,
            )
            payment.complete()
        except DomainValidationError as e:
            return self._rejected("process", ErrorKind.VALIDATION, e.message)

        try:
            saved = await self._repository.save(payment)
        except DuplicateKeyError as e:
            # A concurrent request paid the same cart first
            logger.warning("Cart paid concurrently", cart_id=cart_id)
            return self._rejected("process", ErrorKind.VALIDATION, e.message)

        PAYMENT_OPERATIONS.labels(operation="process", outcome="success").inc()
        logger.info(
            "Payment processed",
            payment_id=saved.id,
            cart_id=saved.cart_id,
            method=saved.payment_method.value,
        )
        return ServiceResult.ok(saved)

    async def get_by_id(self, payment_id: int) -> ServiceResult[Payment]:
        """Get a payment by ID."""
        payment = await self._repository.get_by_id(payment_id)
        if payment is None:
            return ServiceResult.fail(ErrorKind.NOT_FOUND, f"Pago no encontrado con ID {payment_id}")
        return ServiceResult.ok(payment)

    async def get_by_user(self, user_id: int) -> ServiceResult[list[Payment]]:
        """Get every payment of a user; an empty list is a success."""
        if user_id is None or user_id <= 0:
            return ServiceResult.fail(ErrorKind.VALIDATION, "El ID del usuario debe ser positivo")
        return ServiceResult.ok(await self._repository.list_by_user(user_id))

    async def refund(self, payment_id: int) -> ServiceResult[Payment]:
        """
        Refund a completed payment.

        The status write is a compare-and-set on COMPLETADO, so two concurrent
        refunds of the same payment cannot both succeed.

        Args:
            payment_id: Payment to refund.

        Returns:
            Result with the refunded payment.
        """
        payment = await self._repository.get_by_id(payment_id)
        if payment is None:
            return self._rejected("refund", ErrorKind.NOT_FOUND, f"Pago no encontrado con ID {payment_id}")

        try:
            payment.refund()
        except DomainValidationError as e:
            logger.warning("Refund rejected", payment_id=payment_id, status=payment.status)
            return self._rejected("refund", ErrorKind.VALIDATION, e.message)

        updated = await self._repository.update_status_if(payment, PaymentStatus.COMPLETED.value)
        if updated is None:
            logger.warning("Refund lost a concurrent update", payment_id=payment_id)
            return self._rejected(
                "refund",
                ErrorKind.VALIDATION,
                f"Solo se pueden reembolsar pagos en estado {PaymentStatus.COMPLETED.value}",
            )

        PAYMENT_OPERATIONS.labels(operation="refund", outcome="success").inc()
        logger.info("Payment refunded", payment_id=payment_id, amount=str(updated.refund_amount))
        return ServiceResult.ok(updated)

    @staticmethod
    def _rejected(operation: str, kind: ErrorKind, *messages: str) -> ServiceResult[Payment]:
        PAYMENT_OPERATIONS.labels(operation=operation, outcome="rejected").inc()
        return ServiceResult.fail(kind, *messages)
