"""
Product Service Use Case.

Validation-before-mutation workflow for catalog products, mapping between
persisted entities and their transport representation, and the supplier
lookup against the supplier service.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Protocol

from internal.domain.category import Category
from internal.domain.errors import DomainValidationError, DuplicateKeyError, UpstreamError
from internal.domain.product import Product
from internal.domain.result import ErrorKind, ServiceResult
from internal.domain.supplier import Supplier
from internal.domain.value_objects import BearerToken
from internal.infrastructure.metrics import PRODUCT_OPERATIONS
from pkg.logger.logger import get_logger

logger = get_logger(__name__)


class ProductRepository(Protocol):
    """Protocol for product repository operations."""

    async def exists_by_sku(self, sku: str) -> bool:
        ...

    async def exists_by_serial(self, serial: str) -> bool:
        ...

    async def exists_by_id(self, product_id: int) -> bool:
        ...

    async def get_by_id(self, product_id: int) -> Optional[Product]:
        ...

    async def list_all(self) -> list[Product]:
        ...

    async def save(self, product: Product) -> Product:
        """Insert a product and return it with its assigned ID."""
        ...

    async def delete_by_id(self, product_id: int) -> bool:
        """Delete a product, returning whether a row was removed."""
        ...


class CategoryLookup(Protocol):
    """Protocol for reading categories."""

    async def get_by_id(self, category_id: int) -> Optional[Category]:
        ...


class SupplierGateway(Protocol):
    """Protocol for the supplier service client."""

    async def get_supplier(self, supplier_id: int, token: BearerToken) -> Optional[Supplier]:
        """Return the supplier, or None when the supplier service answers 404."""
        ...


@dataclass
class ProductDTO:
    """Transport representation of a product."""

    sku: str
    name: str
    price: Decimal
    cost: Decimal
    serial: str
    category_id: int
    description: Optional[str] = None
    catalog: str = "true"
    supplier_id: Optional[int] = None
    id: Optional[int] = None


class ProductService:
    """
    Service for catalog product operations.

    Every operation returns a ServiceResult; expected business failures are
    never raised to the caller.
    """

    def __init__(
        self,
        repository: ProductRepository,
        categories: CategoryLookup,
        suppliers: Optional[SupplierGateway] = None,
    ) -> None:
        """
        Initialize the service.

        Args:
            repository: Product repository for persistence.
            categories: Category lookup used to resolve references.
            suppliers: Supplier service client (optional for write-only setups).
        """
        self._repository = repository
        self._categories = categories
        self._suppliers = suppliers

    async def create(self, dto: ProductDTO) -> ServiceResult[ProductDTO]:
        """
        Create a product.

        Checks, in order: SKU uniqueness, serial uniqueness, category
        existence, entity invariants. Persists only when all pass.

        Args:
            dto: Product data from the request.

        Returns:
            Result with the created product.
        """
        if await self._repository.exists_by_sku(dto.sku):
            logger.warning("Duplicate SKU rejected", sku=dto.sku)
            return ServiceResult.fail(ErrorKind.DUPLICATE_KEY, "El SKU ya existe")

        if await self._repository.exists_by_serial(dto.serial):
            logger.warning("Duplicate serial rejected", serial=dto.serial)
            return ServiceResult.fail(ErrorKind.DUPLICATE_KEY, "El serial ya existe")

        category = await self._categories.get_by_id(dto.category_id)
        if category is None:
            return ServiceResult.fail(
                ErrorKind.NOT_FOUND,
                f"Categoría no encontrada con ID {dto.category_id}",
            )

        try:
            product = self.to_entity(dto, category)
        except DomainValidationError as e:
            return ServiceResult.fail(ErrorKind.VALIDATION, e.message)

        try:
            saved = await self._repository.save(product)
        except DuplicateKeyError as e:
            # Lost a race with a concurrent insert of the same key
            logger.warning("Unique constraint hit on insert", field=e.field, sku=dto.sku)
            return ServiceResult.fail(ErrorKind.DUPLICATE_KEY, e.message)

        PRODUCT_OPERATIONS.labels(operation="create").inc()
        logger.info("Product created", product_id=saved.id, sku=saved.sku)
        return ServiceResult.ok(self.to_transport(saved))

    async def list_all(self) -> ServiceResult[list[ProductDTO]]:
        """List every product."""
        products = await self._repository.list_all()
        return ServiceResult.ok([self.to_transport(p) for p in products])

    async def get_by_id(self, product_id: int) -> ServiceResult[ProductDTO]:
        """
        Get a product by ID.

        Args:
            product_id: Product identifier.

        Returns:
            Result with the product, or NOT_FOUND.
        """
        product = await self._repository.get_by_id(product_id)
        if product is None:
            return ServiceResult.fail(
                ErrorKind.NOT_FOUND,
                f"Producto no encontrado con ID {product_id}",
            )
        return ServiceResult.ok(self.to_transport(product))

    async def delete_by_id(self, product_id: int) -> ServiceResult[None]:
        """
        Delete a product by ID.

        The store delete is only invoked when the product exists.

        Args:
            product_id: Product identifier.

        Returns:
            Empty success, or NOT_FOUND.
        """
        not_found = ServiceResult.fail(
            ErrorKind.NOT_FOUND,
            f"Producto con ID {product_id} no existe",
        )

        if not await self._repository.exists_by_id(product_id):
            return not_found

        if not await self._repository.delete_by_id(product_id):
            # Removed by a concurrent request between the check and the delete
            return not_found

        PRODUCT_OPERATIONS.labels(operation="delete").inc()
        logger.info("Product deleted", product_id=product_id)
        return ServiceResult.ok()

    async def fetch_supplier(
        self,
        supplier_id: int,
        token: BearerToken,
    ) -> ServiceResult[Supplier]:
        """
        Fetch a supplier from the supplier service.

        One attempt only; transport failures become UPSTREAM errors.

        Args:
            supplier_id: Supplier identifier.
            token: Caller's bearer token, forwarded as-is.

        Returns:
            Result with the supplier.
        """
        if self._suppliers is None:
            return ServiceResult.fail(
                ErrorKind.UPSTREAM,
                f"No se pudo consultar el proveedor con ID {supplier_id}",
            )

        try:
            supplier = await self._suppliers.get_supplier(supplier_id, token)
        except UpstreamError as e:
            logger.error("Supplier lookup failed", supplier_id=supplier_id, error=e.reason)
            return ServiceResult.fail(
                ErrorKind.UPSTREAM,
                f"No se pudo consultar el proveedor con ID {supplier_id}",
            )

        if supplier is None:
            return ServiceResult.fail(
                ErrorKind.NOT_FOUND,
                f"Proveedor no encontrado con ID {supplier_id}",
            )
        return ServiceResult.ok(supplier)

    @staticmethod
    def to_transport(product: Product) -> ProductDTO:
        """
        Map a product entity to its transport representation.

        The category is flattened to its identifier.
        """
        return ProductDTO(
            id=product.id,
            sku=product.sku,
            name=product.name,
            description=product.description,
            price=product.price,
            cost=product.cost,
            catalog=product.catalog,
            serial=product.serial,
            supplier_id=product.supplier_id,
            category_id=product.category_id,
        )

    @staticmethod
    def to_entity(dto: ProductDTO, category: Category) -> Product:
        """
        Map a transport representation back to an entity.

        Raises:
            DomainValidationError: If the data breaks an entity invariant.
        """
        return Product(
            id=dto.id or 0,
            sku=dto.sku,
            name=dto.name,
            description=dto.description,
            price=dto.price,
            cost=dto.cost,
            catalog=dto.catalog,
            serial=dto.serial,
            supplier_id=dto.supplier_id,
            category=category,
        )
