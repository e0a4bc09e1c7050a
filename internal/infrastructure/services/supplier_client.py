"""
Supplier service client.
"""
from typing import Optional

from internal.domain.errors import SupplierLookupError, UpstreamError
from internal.domain.supplier import Supplier
from internal.domain.value_objects import BearerToken

from .base import InternalServiceClient


class SupplierClient(InternalServiceClient):
    """Reads suppliers on behalf of the caller, forwarding their token."""

    service_name = "supplier-service"
    path_template = "/api/v1/suppliers/{supplier_id}"

    async def get_supplier(self, supplier_id: int, token: BearerToken) -> Optional[Supplier]:
        """
        Fetch a supplier.

        Args:
            supplier_id: Supplier identifier.
            token: Caller's bearer token.

        Returns:
            Supplier, or None when the supplier service does not know it.

        Raises:
            SupplierLookupError: On transport failure or an unreadable body.
        """
        body = await self._get_json(
            self.path_template.format(supplier_id=supplier_id),
            supplier_id,
            token,
        )
        if body is None:
            return None

        try:
            return Supplier.from_payload(body)
        except (KeyError, TypeError, ValueError) as e:
            raise SupplierLookupError(supplier_id, f"malformed supplier: {e}") from e

    def _lookup_error(self, entity_id: int, reason: str) -> UpstreamError:
        return SupplierLookupError(entity_id, reason)
