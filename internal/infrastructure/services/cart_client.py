"""
Cart service client.
"""
from typing import Optional

from internal.domain.errors import CartLookupError, UpstreamError
from internal.domain.payment import Cart
from internal.domain.value_objects import BearerToken

from .base import InternalServiceClient


class CartClient(InternalServiceClient):
    """Resolves the owner and total of a cart before it is paid."""

    service_name = "cart-service"
    path_template = "/api/v1/carts/{cart_id}"

    async def get_cart(self, cart_id: int, token: Optional[BearerToken] = None) -> Optional[Cart]:
        """
        Fetch a cart.

        Args:
            cart_id: Cart identifier.
            token: Caller's bearer token, if the request carried one.

        Returns:
            Cart, or None when the cart service does not know it.

        Raises:
            CartLookupError: On transport failure or an unreadable body.
        """
        body = await self._get_json(self.path_template.format(cart_id=cart_id), cart_id, token)
        if body is None:
            return None

        try:
            return Cart.from_payload(body)
        except (KeyError, TypeError, ValueError, ArithmeticError) as e:
            raise CartLookupError(cart_id, f"malformed cart: {e}") from e

    def _lookup_error(self, entity_id: int, reason: str) -> UpstreamError:
        return CartLookupError(entity_id, reason)
