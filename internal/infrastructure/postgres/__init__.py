"""
PostgreSQL infrastructure package.
"""
from .category_repository import PostgresCategoryRepository
from .payment_repository import PostgresPaymentRepository
from .repository import PostgresProductRepository, create_pool

__all__ = [
    "PostgresCategoryRepository",
    "PostgresPaymentRepository",
    "PostgresProductRepository",
    "create_pool",
]
