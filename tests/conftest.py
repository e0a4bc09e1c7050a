"""
Pytest configuration and fixtures.
"""
from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from internal.domain.category import Category
from internal.domain.payment import Cart, Payment, PaymentMethod
from internal.usecase.product_service import ProductDTO


@pytest.fixture
def category():
    """Existing category."""
    return Category(id=1, name="Electrónicos", description="Productos electrónicos")


@pytest.fixture
def product_dto():
    """Sample product request data."""
    return ProductDTO(
        sku="SKU123",
        name="Laptop",
        description="Laptop de última generación",
        price=Decimal("1200.00"),
        cost=Decimal("900.00"),
        serial="SER123",
        category_id=1,
        supplier_id=4,
    )


@pytest.fixture
def product_repository():
    """Product repository where nothing collides and saves get ID 1."""
    repository = AsyncMock()
    repository.exists_by_sku.return_value = False
    repository.exists_by_serial.return_value = False
    repository.exists_by_id.return_value = True
    repository.get_by_id.return_value = None
    repository.list_all.return_value = []
    repository.delete_by_id.return_value = True

    async def save(product):
        product.id = 1
        return product

    repository.save.side_effect = save
    return repository


@pytest.fixture
def category_repository(category):
    """Category repository that knows the sample category."""
    repository = AsyncMock()
    repository.get_by_id.return_value = category
    repository.list_all.return_value = [category]

    async def save(new_category):
        new_category.id = 2
        return new_category

    repository.save.side_effect = save
    return repository


@pytest.fixture
def cart():
    """Cart of user 3 with something to pay."""
    return Cart(id=7, user_id=3, total=Decimal("150.00"))


@pytest.fixture
def cart_gateway(cart):
    """Cart service client returning the sample cart."""
    gateway = AsyncMock()
    gateway.get_cart.return_value = cart
    return gateway


@pytest.fixture
def completed_payment():
    """Stored payment in the refundable state."""
    return Payment(
        id=10,
        cart_id=7,
        user_id=3,
        payment_method=PaymentMethod.PAYPAL,
        amount=Decimal("150.00"),
        status="COMPLETADO",
        created_at=datetime(2024, 5, 1, 12, 0, 0),
    )


@pytest.fixture
def payment_repository():
    """Payment repository with no prior payments; saves get ID 10."""
    repository = AsyncMock()
    repository.get_by_id.return_value = None
    repository.list_by_user.return_value = []
    repository.exists_completed_for_cart.return_value = False

    async def save(payment):
        payment.id = 10
        return payment

    async def update_status_if(payment, expected_status):
        return payment

    repository.save.side_effect = save
    repository.update_status_if.side_effect = update_status_if
    return repository
