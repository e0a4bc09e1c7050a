"""
Supplier read model.

Suppliers are owned by the supplier service; the catalog only reads them on
demand and never persists them.
"""
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class Supplier:
    """
    Supplier as returned by the supplier service.

    Attributes:
        id: Supplier identifier.
        name: Legal or trade name.
        email: Contact email.
        tax_id: Tax identifier (RUT).
        address: Postal address.
        phone: Contact phone.
        active: Whether the supplier is currently active.
        product_ids: Identifiers of the products the supplier provides.
    """
    id: int
    name: str
    email: Optional[str] = None
    tax_id: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    active: bool = True
    product_ids: list[int] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "Supplier":
        """
        Build a supplier from the supplier service JSON body.

        The supplier service speaks Spanish field names; English names are
        accepted too.

        Args:
            payload: Decoded JSON object.

        Returns:
            Supplier instance.
        """
        return cls(
            id=int(payload["id"]),
            name=payload.get("nombre", payload.get("name", "")),
            email=payload.get("email"),
            tax_id=payload.get("rut", payload.get("tax_id")),
            address=payload.get("direccion", payload.get("address")),
            phone=payload.get("telefono", payload.get("phone")),
            active=bool(payload.get("activo", payload.get("active", True))),
            product_ids=[int(p) for p in payload.get("productos", payload.get("product_ids")) or []],
        )

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "tax_id": self.tax_id,
            "address": self.address,
            "phone": self.phone,
            "active": self.active,
            "product_ids": list(self.product_ids),
        }
