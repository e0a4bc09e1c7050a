"""
PostgreSQL Category Repository.

Implements the repository pattern for Category persistence with asyncpg.
"""

from typing import Optional

import asyncpg
from asyncpg import Pool

from internal.domain.category import Category


class PostgresCategoryRepository:
    """
    PostgreSQL implementation of the Category Repository.

    Uses asyncpg for async database operations.
    """

    def __init__(self, pool: Pool) -> None:
        """
        Initialize the repository.

        Args:
            pool: asyncpg connection pool.
        """
        self._pool = pool

    async def get_by_id(self, category_id: int) -> Optional[Category]:
        """
        Get a category by ID.

        Args:
            category_id: The ID of the category.

        Returns:
            Category if found, None otherwise.
        """
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                """
                SELECT id, name, description
                FROM categories
                WHERE id = $1
                """,
                category_id,
            )

            if not row:
                return None

            return self._row_to_entity(row)

    async def list_all(self) -> list[Category]:
        """
        Get all categories ordered by name.

        Returns:
            List of all categories.
        """
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                """
                SELECT id, name, description
                FROM categories
                ORDER BY name
                """
            )

            return [self._row_to_entity(row) for row in rows]

    async def save(self, category: Category) -> Category:
        """
        Create a new category.

        Args:
            category: The category to create.

        Returns:
            The created category with assigned ID.
        """
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                """
                INSERT INTO categories (name, description)
                VALUES ($1, $2)
                RETURNING id, name, description
                """,
                category.name,
                category.description,
            )

            return self._row_to_entity(row)

    def _row_to_entity(self, row: asyncpg.Record) -> Category:
        """Convert a database row to a Category entity."""
        return Category(
            id=row["id"],
            name=row["name"],
            description=row["description"],
        )
