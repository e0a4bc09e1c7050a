"""
Clients for other internal services.
"""
from .cart_client import CartClient
from .supplier_client import SupplierClient

__all__ = ["CartClient", "SupplierClient"]
