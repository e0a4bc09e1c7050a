"""
Domain model for catalog products.

A product carries two globally unique business keys (SKU and serial) and a
read reference to its Category. Suppliers live in another service and are
kept here only as an identifier.
"""
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from .category import Category
from .errors import DomainValidationError


CATALOG_VALUES = ("true", "false")


@dataclass
class Product:
    """
    Product is the aggregate root of the catalog.

    Attributes:
        id: Store-assigned surrogate identifier (0 until persisted).
        sku: Stock Keeping Unit, unique and immutable after creation.
        name: Commercial name.
        description: Optional long description.
        price: Sale price, non-negative.
        cost: Purchase cost, non-negative.
        catalog: Boolean-like flag stored as "true"/"false".
        serial: Serial number, unique.
        supplier_id: Identifier of the supplier in the supplier service.
        category: Referenced category.
        created_at: Timestamp of creation.
    """
    id: int = 0
    sku: str = ""
    name: str = ""
    description: Optional[str] = None
    price: Decimal = Decimal("0")
    cost: Decimal = Decimal("0")
    catalog: str = "true"
    serial: str = ""
    supplier_id: Optional[int] = None
    category: Optional[Category] = None
    created_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Validate domain invariants after initialization."""
        self._validate()

    def _validate(self) -> None:
        """
        Validate domain invariants.

        Raises:
            DomainValidationError: If validation fails.
        """
        if not self.sku or not self.sku.strip():
            raise DomainValidationError("El SKU es obligatorio")
        if not self.serial or not self.serial.strip():
            raise DomainValidationError("El serial es obligatorio")
        if not self.name or not self.name.strip():
            raise DomainValidationError("El nombre del producto es obligatorio")
        if self.price is None or self.price < 0:
            raise DomainValidationError("El precio no puede ser negativo")
        if self.cost is None or self.cost < 0:
            raise DomainValidationError("El costo no puede ser negativo")
        if self.catalog.lower() not in CATALOG_VALUES:
            raise DomainValidationError("El indicador de catálogo debe ser 'true' o 'false'")
        if self.category is None:
            raise DomainValidationError("La categoría es obligatoria")

    @property
    def category_id(self) -> Optional[int]:
        """Identifier of the referenced category."""
        return self.category.id if self.category else None
