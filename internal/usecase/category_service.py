"""
Category Service Use Case.

Categories must exist before products can reference them; this service is
how they get created and read.
"""

from typing import Optional, Protocol

from internal.domain.category import Category
from internal.domain.errors import DomainValidationError
from internal.domain.result import ErrorKind, ServiceResult
from pkg.logger.logger import get_logger

logger = get_logger(__name__)


class CategoryRepository(Protocol):
    """Protocol for category repository operations."""

    async def get_by_id(self, category_id: int) -> Optional[Category]:
        ...

    async def list_all(self) -> list[Category]:
        ...

    async def save(self, category: Category) -> Category:
        ...


class CategoryService:
    """Service for category operations."""

    def __init__(self, repository: CategoryRepository) -> None:
        """
        Initialize the category service.

        Args:
            repository: Category repository instance.
        """
        self._repository = repository

    async def create(self, name: str, description: Optional[str] = None) -> ServiceResult[Category]:
        """
        Create a category.

        Args:
            name: Category name.
            description: Optional description.

        Returns:
            Result with the created category.
        """
        try:
            category = Category(name=name, description=description)
        except DomainValidationError as e:
            return ServiceResult.fail(ErrorKind.VALIDATION, e.message)

        saved = await self._repository.save(category)
        logger.info("Category created", category_id=saved.id, category_name=saved.name)
        return ServiceResult.ok(saved)

    async def list_all(self) -> ServiceResult[list[Category]]:
        """List every category."""
        return ServiceResult.ok(await self._repository.list_all())

    async def get_by_id(self, category_id: int) -> ServiceResult[Category]:
        """
        Get category by ID.

        Args:
            category_id: The ID of the category.

        Returns:
            Result with the category, or NOT_FOUND.
        """
        category = await self._repository.get_by_id(category_id)
        if category is None:
            return ServiceResult.fail(
                ErrorKind.NOT_FOUND,
                f"Categoría no encontrada con ID {category_id}",
            )
        return ServiceResult.ok(category)
