"""
Data Transfer Objects for the catalog and payment APIs.

Contains Pydantic models for request/response validation.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


# Category DTOs
class CategoryCreateRequest(BaseModel):
    """Request body for creating a category."""

    name: str = Field(..., min_length=1, max_length=255, description="Category name")
    description: Optional[str] = Field(None, description="Category description")

    class Config:
        json_schema_extra = {
            "example": {"name": "Electrónicos", "description": "Productos electrónicos"}
        }


class CategoryResponse(BaseModel):
    """Category representation."""

    id: int = Field(..., description="Category ID")
    name: str = Field(..., description="Category name")
    description: Optional[str] = Field(None, description="Category description")


# Product DTOs
class ProductCreateRequest(BaseModel):
    """Request body for creating a product."""

    sku: str = Field(..., min_length=1, max_length=64, description="Stock Keeping Unit, unique")
    name: str = Field(..., min_length=1, max_length=255, description="Product name")
    description: Optional[str] = Field(None, description="Product description")
    price: Decimal = Field(..., ge=0, description="Sale price")
    cost: Decimal = Field(..., ge=0, description="Purchase cost")
    catalog: str = Field("true", description="Published in catalog (\"true\"/\"false\")")
    serial: str = Field(..., min_length=1, max_length=64, description="Serial number, unique")
    supplier_id: Optional[int] = Field(None, gt=0, description="Supplier identifier")
    category_id: int = Field(..., gt=0, description="Existing category identifier")

    class Config:
        json_schema_extra = {
            "example": {
                "sku": "SKU123",
                "name": "Laptop",
                "description": "Laptop de última generación",
                "price": "1200.00",
                "cost": "900.00",
                "catalog": "true",
                "serial": "SER123",
                "supplier_id": 1,
                "category_id": 1,
            }
        }


class ProductResponse(BaseModel):
    """Transport representation of a product."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Product ID")
    sku: str = Field(..., description="Stock Keeping Unit")
    name: str = Field(..., description="Product name")
    description: Optional[str] = Field(None, description="Product description")
    price: Decimal = Field(..., description="Sale price")
    cost: Decimal = Field(..., description="Purchase cost")
    catalog: str = Field(..., description="Published in catalog")
    serial: str = Field(..., description="Serial number")
    supplier_id: Optional[int] = Field(None, description="Supplier identifier")
    category_id: int = Field(..., description="Category identifier")


# Supplier DTOs
class SupplierResponse(BaseModel):
    """Supplier as read from the supplier service."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: Optional[str] = None
    tax_id: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    active: bool = True
    product_ids: List[int] = Field(default_factory=list)


# Payment DTOs
class LinkDTO(BaseModel):
    """Hypermedia link."""

    href: str


class PaymentResponse(BaseModel):
    """Payment with its hypermedia links."""

    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(..., description="Payment ID")
    cart_id: int = Field(..., description="Paid cart")
    user_id: int = Field(..., description="Paying user")
    payment_method: str = Field(..., description="TARJETA_CREDITO, PAYPAL or TRANSFERENCIA")
    amount: Decimal = Field(..., description="Paid amount")
    status: str = Field(..., description="PENDIENTE, COMPLETADO or REEMBOLSADO")
    created_at: datetime = Field(..., description="Creation timestamp")
    refunded_at: Optional[datetime] = Field(None, description="Refund timestamp")
    refund_amount: Optional[Decimal] = Field(None, description="Refunded amount")
    links: Dict[str, LinkDTO] = Field(default_factory=dict, alias="_links")


class PaymentCollectionResponse(BaseModel):
    """Payments of a user with collection-level links."""

    model_config = ConfigDict(populate_by_name=True)

    data: List[PaymentResponse] = Field(..., description="Payments")
    links: Dict[str, LinkDTO] = Field(default_factory=dict, alias="_links")


class ErrorResponse(BaseModel):
    """Error response body."""

    detail: List[str]
