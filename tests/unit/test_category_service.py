"""
Unit tests for the category service.
"""
import pytest

from internal.domain.result import ErrorKind
from internal.usecase.category_service import CategoryService


class TestCategoryService:
    """Tests for CategoryService."""

    @pytest.fixture
    def service(self, category_repository):
        return CategoryService(category_repository)

    @pytest.mark.asyncio
    async def test_create_category(self, service, category_repository):
        result = await service.create("Hogar", "Artículos para el hogar")

        assert result.data.id == 2
        assert result.data.name == "Hogar"
        category_repository.save.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_category_without_name(self, service, category_repository):
        result = await service.create("")

        assert result.errors == ["El nombre de la categoría es obligatorio"]
        assert result.kind == ErrorKind.VALIDATION
        category_repository.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_list_categories(self, service):
        result = await service.list_all()

        assert [c.name for c in result.data] == ["Electrónicos"]

    @pytest.mark.asyncio
    async def test_get_missing_category(self, service, category_repository):
        category_repository.get_by_id.return_value = None

        result = await service.get_by_id(8)

        assert result.errors == ["Categoría no encontrada con ID 8"]
        assert result.kind == ErrorKind.NOT_FOUND
