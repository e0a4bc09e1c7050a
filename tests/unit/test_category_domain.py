"""
Unit tests for category and supplier domain entities.
"""
import pytest

from internal.domain.category import Category
from internal.domain.errors import DomainValidationError
from internal.domain.supplier import Supplier


class TestCategory:
    """Tests for Category entity."""

    def test_create_valid_category(self):
        category = Category(id=1, name="Electrónicos", description="Productos electrónicos")

        assert category.id == 1
        assert category.name == "Electrónicos"

    def test_empty_name_raises_error(self):
        with pytest.raises(DomainValidationError) as exc_info:
            Category(name=" ")

        assert exc_info.value.message == "El nombre de la categoría es obligatorio"

    def test_long_name_raises_error(self):
        with pytest.raises(DomainValidationError):
            Category(name="x" * 256)

    def test_to_dict(self):
        category = Category(id=3, name="Hogar")

        assert category.to_dict() == {"id": 3, "name": "Hogar", "description": None}


class TestSupplier:
    """Tests for the Supplier read model."""

    def test_from_spanish_payload(self):
        supplier = Supplier.from_payload({
            "id": 4,
            "nombre": "Distribuidora Sur",
            "email": "ventas@sur.cl",
            "rut": "76.123.456-7",
            "direccion": "Av. Siempre Viva 123",
            "telefono": "+56 2 2345 6789",
            "activo": False,
            "productos": [1, "2"],
        })

        assert supplier.name == "Distribuidora Sur"
        assert supplier.tax_id == "76.123.456-7"
        assert supplier.active is False
        assert supplier.product_ids == [1, 2]

    def test_from_english_payload(self):
        supplier = Supplier.from_payload({"id": "4", "name": "Acme"})

        assert supplier.id == 4
        assert supplier.name == "Acme"
        assert supplier.active is True
        assert supplier.product_ids == []

    def test_missing_id_raises(self):
        with pytest.raises(KeyError):
            Supplier.from_payload({"nombre": "Sin ID"})

    def test_to_dict(self):
        supplier = Supplier(id=4, name="Acme", product_ids=[9])

        assert supplier.to_dict()["product_ids"] == [9]
        assert supplier.to_dict()["name"] == "Acme"
