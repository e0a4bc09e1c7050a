"""
Unit tests for the payment service.
"""
from decimal import Decimal

import pytest

from internal.domain.errors import CartLookupError, DuplicateKeyError
from internal.domain.payment import Cart, PaymentMethod
from internal.domain.result import ErrorKind
from internal.domain.value_objects import BearerToken
from internal.usecase.payment_service import PaymentService


REFUND_MESSAGE = "Solo se pueden reembolsar pagos en estado COMPLETADO"


@pytest.fixture
def service(payment_repository, cart_gateway):
    return PaymentService(repository=payment_repository, carts=cart_gateway)


class TestProcessPayment:
    """Tests for PaymentService.process."""

    @pytest.mark.asyncio
    async def test_process_completes_payment(self, service, payment_repository):
        result = await service.process(7, "TARJETA_CREDITO")

        assert not result.has_errors
        payment = result.data
        assert payment.id == 10
        assert payment.status == "COMPLETADO"
        assert payment.user_id == 3
        assert payment.amount == Decimal("150.00")
        assert payment.payment_method is PaymentMethod.CREDIT_CARD
        payment_repository.save.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_method_is_case_insensitive(self, service):
        result = await service.process(7, "paypal")

        assert result.data.payment_method is PaymentMethod.PAYPAL

    @pytest.mark.asyncio
    async def test_token_is_forwarded_to_cart_service(self, service, cart_gateway):
        token = BearerToken("abc")

        await service.process(7, "PAYPAL", token)

        cart_gateway.get_cart.assert_awaited_once_with(7, token)

    @pytest.mark.asyncio
    async def test_validation_errors_are_collected(self, service, cart_gateway, payment_repository):
        result = await service.process(0, "BITCOIN")

        assert result.kind == ErrorKind.VALIDATION
        assert result.errors[0] == "El ID del carrito debe ser positivo"
        assert result.errors[1].startswith("Método de pago no válido: BITCOIN")
        assert "TRANSFERENCIA" in result.errors[1]
        cart_gateway.get_cart.assert_not_awaited()
        payment_repository.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_cart(self, service, cart_gateway):
        cart_gateway.get_cart.return_value = None

        result = await service.process(7, "PAYPAL")

        assert result.errors == ["Carrito no encontrado con ID 7"]
        assert result.kind == ErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_cart_service_failure(self, service, cart_gateway, payment_repository):
        cart_gateway.get_cart.side_effect = CartLookupError(7, "connection refused")

        result = await service.process(7, "PAYPAL")

        assert result.errors == ["No se pudo consultar el carrito con ID 7"]
        assert result.kind == ErrorKind.UPSTREAM
        payment_repository.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_cart(self, service, cart_gateway):
        cart_gateway.get_cart.return_value = Cart(id=7, user_id=3, total=Decimal("0"))

        result = await service.process(7, "PAYPAL")

        assert result.errors == ["El carrito no tiene monto a pagar"]

    @pytest.mark.asyncio
    async def test_cart_already_paid(self, service, payment_repository):
        payment_repository.exists_completed_for_cart.return_value = True

        result = await service.process(7, "PAYPAL")

        assert result.errors == ["El carrito 7 ya tiene un pago completado"]
        payment_repository.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_cart_paid_by_concurrent_request(self, service, payment_repository):
        payment_repository.save.side_effect = DuplicateKeyError(
            "cart_id", "El carrito 7 ya tiene un pago completado"
        )

        result = await service.process(7, "PAYPAL")

        assert result.errors == ["El carrito 7 ya tiene un pago completado"]
        assert result.kind == ErrorKind.VALIDATION


class TestReadPayments:
    """Tests for reading payments."""

    @pytest.mark.asyncio
    async def test_get_missing_payment(self, service):
        result = await service.get_by_id(99)

        assert result.errors == ["Pago no encontrado con ID 99"]
        assert result.kind == ErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_get_existing_payment(self, service, payment_repository, completed_payment):
        payment_repository.get_by_id.return_value = completed_payment

        result = await service.get_by_id(10)

        assert result.data is completed_payment

    @pytest.mark.asyncio
    async def test_user_without_payments(self, service, payment_repository):
        result = await service.get_by_user(3)

        assert not result.has_errors
        assert result.data == []
        payment_repository.list_by_user.assert_awaited_once_with(3)

    @pytest.mark.asyncio
    async def test_invalid_user_id(self, service, payment_repository):
        result = await service.get_by_user(0)

        assert result.kind == ErrorKind.VALIDATION
        payment_repository.list_by_user.assert_not_awaited()


class TestRefund:
    """Tests for PaymentService.refund."""

    @pytest.mark.asyncio
    async def test_refund_completed_payment(self, service, payment_repository, completed_payment):
        payment_repository.get_by_id.return_value = completed_payment

        result = await service.refund(10)

        assert not result.has_errors
        assert result.data.status == "REEMBOLSADO"
        assert result.data.refund_amount == Decimal("150.00")
        assert result.data.refunded_at is not None
        payment_repository.update_status_if.assert_awaited_once_with(completed_payment, "COMPLETADO")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", ["PENDIENTE", "REEMBOLSADO"])
    async def test_refund_requires_completed_status(
        self, service, payment_repository, completed_payment, status
    ):
        completed_payment.status = status
        payment_repository.get_by_id.return_value = completed_payment

        result = await service.refund(10)

        assert result.errors == [REFUND_MESSAGE]
        assert result.kind == ErrorKind.VALIDATION
        payment_repository.update_status_if.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_refund_losing_concurrent_update(
        self, service, payment_repository, completed_payment
    ):
        payment_repository.get_by_id.return_value = completed_payment
        payment_repository.update_status_if.side_effect = None
        payment_repository.update_status_if.return_value = None

        result = await service.refund(10)

        assert result.errors == [REFUND_MESSAGE]
        assert result.kind == ErrorKind.VALIDATION

    @pytest.mark.asyncio
    async def test_refund_missing_payment(self, service):
        result = await service.refund(99)

        assert result.errors == ["Pago no encontrado con ID 99"]
        assert result.kind == ErrorKind.NOT_FOUND
