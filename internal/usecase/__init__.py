"""
Use case package.

Domain services for the catalog and payment APIs.
"""
from .category_service import CategoryService
from .payment_service import PaymentService
from .product_service import ProductDTO, ProductService

__all__ = [
    "CategoryService",
    "PaymentService",
    "ProductDTO",
    "ProductService",
]
