"""
PostgreSQL Product Repository.

Implements the repository pattern for Product persistence with asyncpg.
Products are always read joined with their category.
"""

from decimal import Decimal
from typing import Optional

import asyncpg
from asyncpg import Pool

from internal.domain.category import Category
from internal.domain.errors import DuplicateKeyError
from internal.domain.product import Product


_PRODUCT_COLUMNS = """
    p.id, p.sku, p.name, p.description, p.price, p.cost, p.catalog,
    p.serial, p.supplier_id, p.created_at,
    c.id AS category_id, c.name AS category_name,
    c.description AS category_description
"""

# Unique constraint name -> (field, message)
_UNIQUE_CONSTRAINTS = {
    "products_sku_key": ("sku", "El SKU ya existe"),
    "products_serial_key": ("serial", "El serial ya existe"),
}


class PostgresProductRepository:
    """
    PostgreSQL implementation of the Product Repository.

    Uses asyncpg for async database operations.
    """

    def __init__(self, pool: Pool) -> None:
        """
        Initialize the repository.

        Args:
            pool: asyncpg connection pool.
        """
        self._pool = pool

    async def exists_by_sku(self, sku: str) -> bool:
        """Whether a product already uses this SKU."""
        async with self._pool.acquire() as conn:
            return await conn.fetchval(
                "SELECT EXISTS(SELECT 1 FROM products WHERE sku = $1)",
                sku,
            )

    async def exists_by_serial(self, serial: str) -> bool:
        """Whether a product already uses this serial number."""
        async with self._pool.acquire() as conn:
            return await conn.fetchval(
                "SELECT EXISTS(SELECT 1 FROM products WHERE serial = $1)",
                serial,
            )

    async def exists_by_id(self, product_id: int) -> bool:
        """Whether a product with this ID exists."""
        async with self._pool.acquire() as conn:
            return await conn.fetchval(
                "SELECT EXISTS(SELECT 1 FROM products WHERE id = $1)",
                product_id,
            )

    async def get_by_id(self, product_id: int) -> Optional[Product]:
        """
        Get a product by ID.

        Args:
            product_id: The ID of the product.

        Returns:
            Product if found, None otherwise.
        """
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                f"""
                SELECT {_PRODUCT_COLUMNS}
                FROM products p
                JOIN categories c ON c.id = p.category_id
                WHERE p.id = $1
                """,
                product_id,
            )

            if not row:
                return None

            return self._row_to_entity(row)

    async def list_all(self) -> list[Product]:
        """
        List every product ordered by ID.

        Returns:
            List of products.
        """
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                f"""
                SELECT {_PRODUCT_COLUMNS}
                FROM products p
                JOIN categories c ON c.id = p.category_id
                ORDER BY p.id
                """
            )

            return [self._row_to_entity(row) for row in rows]

    async def save(self, product: Product) -> Product:
        """
        Insert a new product.

        Args:
            product: The product to create.

        Returns:
            The product with its assigned ID.

        Raises:
            DuplicateKeyError: If SKU or serial is already taken.
        """
        async with self._pool.acquire() as conn:
            try:
                row = await conn.fetchrow(
                    """
                    INSERT INTO products (
                        sku, name, description, price, cost, catalog,
                        serial, supplier_id, category_id, created_at
                    ) VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10)
                    RETURNING id
                    """,
                    product.sku,
                    product.name,
                    product.description,
                    product.price,
                    product.cost,
                    product.catalog,
                    product.serial,
                    product.supplier_id,
                    product.category_id,
                    product.created_at,
                )
            except asyncpg.UniqueViolationError as e:
                field, message = _UNIQUE_CONSTRAINTS.get(
                    e.constraint_name or "", ("unknown", "El producto ya existe")
                )
                raise DuplicateKeyError(field, message) from e

        product.id = row["id"]
        return product

    async def delete_by_id(self, product_id: int) -> bool:
        """
        Delete a product.

        Args:
            product_id: The ID of the product.

        Returns:
            True if a row was deleted.
        """
        async with self._pool.acquire() as conn:
            deleted = await conn.fetchval(
                "DELETE FROM products WHERE id = $1 RETURNING id",
                product_id,
            )
            return deleted is not None

    def _row_to_entity(self, row: asyncpg.Record) -> Product:
        """
        Convert a database row to a Product entity.

        Args:
            row: Database row.

        Returns:
            Product entity.
        """
        category = Category(
            id=row["category_id"],
            name=row["category_name"],
            description=row["category_description"],
        )

        return Product(
            id=row["id"],
            sku=row["sku"],
            name=row["name"],
            description=row["description"],
            price=Decimal(str(row["price"])),
            cost=Decimal(str(row["cost"])),
            catalog=row["catalog"],
            serial=row["serial"],
            supplier_id=row["supplier_id"],
            category=category,
            created_at=row["created_at"],
        )


async def create_pool(dsn: str, min_size: int = 2, max_size: int = 20) -> Pool:
    """
    Create an asyncpg connection pool.

    Args:
        dsn: Database connection string.
        min_size: Minimum pool size.
        max_size: Maximum pool size.

    Returns:
        asyncpg connection pool.
    """
    return await asyncpg.create_pool(
        dsn=dsn,
        min_size=min_size,
        max_size=max_size,
    )
