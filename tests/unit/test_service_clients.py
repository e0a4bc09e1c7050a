"""
Unit tests for the supplier and cart service clients.
"""
from decimal import Decimal

import httpx
import pytest
import pytest_asyncio

from internal.domain.errors import CartLookupError, SupplierLookupError
from internal.domain.value_objects import BearerToken
from internal.infrastructure.services import CartClient, SupplierClient


SUPPLIER_BODY = {
    "id": 4,
    "nombre": "Distribuidora Sur",
    "email": "ventas@sur.cl",
    "rut": "76.123.456-7",
    "activo": True,
    "productos": [5],
}


@pytest_asyncio.fixture
async def supplier_client():
    """Factory for supplier clients backed by a mock transport; closes them afterwards."""
    clients = []

    def make(handler, **kwargs) -> SupplierClient:
        client = SupplierClient(
            base_url="http://suppliers",
            transport=httpx.MockTransport(handler),
            **kwargs,
        )
        clients.append(client)
        return client

    yield make

    for client in clients:
        await client.close()


@pytest_asyncio.fixture
async def cart_client():
    """Factory for cart clients backed by a mock transport; closes them afterwards."""
    clients = []

    def make(handler) -> CartClient:
        client = CartClient(base_url="http://carts", transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield make

    for client in clients:
        await client.close()


class TestSupplierClient:
    """Tests for SupplierClient."""

    @pytest.mark.asyncio
    async def test_get_supplier_forwards_token(self, supplier_client):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["authorization"] = request.headers.get("Authorization")
            return httpx.Response(200, json=SUPPLIER_BODY)

        supplier = await supplier_client(handler).get_supplier(4, BearerToken("abc"))

        assert supplier.name == "Distribuidora Sur"
        assert supplier.product_ids == [5]
        assert seen == {"path": "/api/v1/suppliers/4", "authorization": "Bearer abc"}

    @pytest.mark.asyncio
    async def test_not_found_returns_none(self, supplier_client):
        client = supplier_client(lambda request: httpx.Response(404))

        assert await client.get_supplier(4, BearerToken("abc")) is None

    @pytest.mark.asyncio
    async def test_server_error_raises_lookup_error(self, supplier_client):
        client = supplier_client(lambda request: httpx.Response(503))

        with pytest.raises(SupplierLookupError) as exc_info:
            await client.get_supplier(4, BearerToken("abc"))

        assert exc_info.value.supplier_id == 4

    @pytest.mark.asyncio
    async def test_unauthorized_raises_lookup_error(self, supplier_client):
        client = supplier_client(lambda request: httpx.Response(401))

        with pytest.raises(SupplierLookupError) as exc_info:
            await client.get_supplier(4, BearerToken("expired"))

        assert "401" in exc_info.value.reason

    @pytest.mark.asyncio
    async def test_transport_error_raises_lookup_error(self, supplier_client):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        client = supplier_client(handler)

        with pytest.raises(SupplierLookupError):
            await client.get_supplier(4, BearerToken("abc"))

    @pytest.mark.asyncio
    async def test_malformed_body_raises_lookup_error(self, supplier_client):
        client = supplier_client(lambda request: httpx.Response(200, json={"nombre": "Sin ID"}))

        with pytest.raises(SupplierLookupError):
            await client.get_supplier(4, BearerToken("abc"))

    @pytest.mark.asyncio
    async def test_non_object_body_raises_lookup_error(self, supplier_client):
        client = supplier_client(lambda request: httpx.Response(200, json=[1, 2]))

        with pytest.raises(SupplierLookupError):
            await client.get_supplier(4, BearerToken("abc"))

    @pytest.mark.asyncio
    async def test_circuit_opens_after_repeated_failures(self, supplier_client):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(500)

        client = supplier_client(handler, failure_threshold=2, recovery_timeout=60)

        for _ in range(3):
            with pytest.raises(SupplierLookupError):
                await client.get_supplier(4, BearerToken("abc"))

        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_rejected_tokens_do_not_open_circuit(self, supplier_client):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.headers["Authorization"] == "Bearer expired":
                return httpx.Response(401)
            return httpx.Response(200, json=SUPPLIER_BODY)

        client = supplier_client(handler, failure_threshold=5, recovery_timeout=60)

        for _ in range(5):
            with pytest.raises(SupplierLookupError):
                await client.get_supplier(4, BearerToken("expired"))

        supplier = await client.get_supplier(4, BearerToken("valid"))

        assert supplier.id == 4


class TestCartClient:
    """Tests for CartClient."""

    @pytest.mark.asyncio
    async def test_get_cart(self, cart_client):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["authorization"] = request.headers.get("Authorization")
            return httpx.Response(200, json={"id": 7, "usuarioId": 3, "total": 150.0})

        cart = await cart_client(handler).get_cart(7)

        assert cart.user_id == 3
        assert cart.total == Decimal("150.0")
        assert seen == {"path": "/api/v1/carts/7", "authorization": None}

    @pytest.mark.asyncio
    async def test_unknown_cart_returns_none(self, cart_client):
        client = cart_client(lambda request: httpx.Response(404))

        assert await client.get_cart(7) is None

    @pytest.mark.asyncio
    async def test_forbidden_raises_lookup_error(self, cart_client):
        client = cart_client(lambda request: httpx.Response(403))

        with pytest.raises(CartLookupError):
            await client.get_cart(7, BearerToken("other-user"))

    @pytest.mark.asyncio
    async def test_bad_total_raises_lookup_error(self, cart_client):
        client = cart_client(
            lambda request: httpx.Response(200, json={"id": 7, "usuarioId": 3, "total": "abc"})
        )

        with pytest.raises(CartLookupError) as exc_info:
            await client.get_cart(7)

        assert exc_info.value.cart_id == 7
