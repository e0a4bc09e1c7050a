"""
FastAPI HTTP Handlers for the Product Service API v1.

Implements REST endpoints for products and categories.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Path, status
from fastapi.responses import Response

from internal.domain.result import ErrorKind, ServiceResult
from internal.domain.value_objects import BearerToken
from internal.transport.http.dto import (
    CategoryCreateRequest,
    CategoryResponse,
    ErrorResponse,
    ProductCreateRequest,
    ProductResponse,
    SupplierResponse,
)
from internal.usecase.category_service import CategoryService
from internal.usecase.product_service import ProductDTO, ProductService
from pkg.logger.logger import get_logger

logger = get_logger(__name__)


router = APIRouter(prefix="/api/v1", tags=["products"])


# Dependency injection container (simplified)
class Dependencies:
    """Container for handler dependencies."""

    product_service: Optional[ProductService] = None
    category_service: Optional[CategoryService] = None


_deps = Dependencies()


def get_product_service() -> ProductService:
    """Get ProductService instance."""
    if _deps.product_service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service not initialized",
        )
    return _deps.product_service


def get_category_service() -> CategoryService:
    """Get CategoryService instance."""
    if _deps.category_service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service not initialized",
        )
    return _deps.category_service


def set_dependencies(
    product_service: ProductService,
    category_service: Optional[CategoryService] = None,
) -> None:
    """
    Set handler dependencies.

    Called during application startup.
    """
    _deps.product_service = product_service
    _deps.category_service = category_service


def _raise_for_errors(result: ServiceResult, default_status: int = status.HTTP_400_BAD_REQUEST) -> None:
    """Turn a failed result into an HTTPException carrying its messages."""
    if not result.has_errors:
        return
    status_by_kind = {
        ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
        ErrorKind.UPSTREAM: status.HTTP_502_BAD_GATEWAY,
    }
    raise HTTPException(
        status_code=status_by_kind.get(result.kind, default_status),
        detail=result.errors,
    )


def _to_response(dto: ProductDTO) -> ProductResponse:
    return ProductResponse.model_validate(dto)


# Products
@router.post(
    "/products",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "Product created successfully"},
        400: {"model": ErrorResponse, "description": "Duplicate key, unknown category or invalid data"},
        503: {"description": "Service unavailable"},
    },
)
async def create_product(
    request: ProductCreateRequest,
    service: ProductService = Depends(get_product_service),
) -> ProductResponse:
    """
    Create a product.

    SKU and serial must be unused and the category must already exist.
    """
    logger.info("Creating product", sku=request.sku, serial=request.serial)

    result = await service.create(ProductDTO(**request.model_dump()))
    if result.has_errors:
        logger.warning("Product rejected", sku=request.sku, errors=result.errors)
        # Every creation failure is a problem with the submitted payload
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=result.errors)

    return _to_response(result.data)


@router.get(
    "/products",
    response_model=List[ProductResponse],
    responses={200: {"description": "List of products"}},
)
async def list_products(
    service: ProductService = Depends(get_product_service),
) -> List[ProductResponse]:
    """Get every product."""
    result = await service.list_all()
    return [_to_response(p) for p in result.data]


@router.get(
    "/products/{product_id}",
    response_model=ProductResponse,
    responses={
        200: {"description": "Product found"},
        404: {"model": ErrorResponse, "description": "Product not found"},
    },
)
async def get_product(
    product_id: int = Path(..., description="Product ID"),
    service: ProductService = Depends(get_product_service),
) -> ProductResponse:
    """Get a product by ID."""
    result = await service.get_by_id(product_id)
    _raise_for_errors(result)
    return _to_response(result.data)


@router.delete(
    "/products/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        204: {"description": "Product deleted"},
        404: {"model": ErrorResponse, "description": "Product not found"},
    },
)
async def delete_product(
    product_id: int = Path(..., description="Product ID"),
    service: ProductService = Depends(get_product_service),
) -> Response:
    """Delete a product by ID."""
    logger.info("Deleting product", product_id=product_id)

    result = await service.delete_by_id(product_id)
    _raise_for_errors(result)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/products/{product_id}/supplier",
    response_model=SupplierResponse,
    responses={
        200: {"description": "Supplier of the product"},
        401: {"description": "Missing bearer token"},
        404: {"model": ErrorResponse, "description": "Product or supplier not found"},
        502: {"model": ErrorResponse, "description": "Supplier service unavailable"},
    },
)
async def get_product_supplier(
    product_id: int = Path(..., description="Product ID"),
    authorization: Optional[str] = Header(None),
    service: ProductService = Depends(get_product_service),
) -> SupplierResponse:
    """
    Get the supplier of a product from the supplier service.

    The caller's bearer token is forwarded to the supplier service.
    """
    token = BearerToken.from_header(authorization)
    if token is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=["Se requiere un token Bearer"],
            headers={"WWW-Authenticate": "Bearer"},
        )

    product = await service.get_by_id(product_id)
    _raise_for_errors(product)

    if product.data.supplier_id is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=[f"El producto con ID {product_id} no tiene proveedor"],
        )

    result = await service.fetch_supplier(product.data.supplier_id, token)
    _raise_for_errors(result)
    return SupplierResponse.model_validate(result.data)


# Categories
@router.post(
    "/categories",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse, "description": "Invalid category"}},
)
async def create_category(
    request: CategoryCreateRequest,
    service: CategoryService = Depends(get_category_service),
) -> CategoryResponse:
    """Create a category."""
    result = await service.create(request.name, request.description)
    _raise_for_errors(result)
    return CategoryResponse(**result.data.to_dict())


@router.get(
    "/categories",
    response_model=List[CategoryResponse],
)
async def list_categories(
    service: CategoryService = Depends(get_category_service),
) -> List[CategoryResponse]:
    """Get every category."""
    result = await service.list_all()
    return [CategoryResponse(**c.to_dict()) for c in result.data]


@router.get(
    "/categories/{category_id}",
    response_model=CategoryResponse,
    responses={404: {"model": ErrorResponse, "description": "Category not found"}},
)
async def get_category(
    category_id: int = Path(..., description="Category ID"),
    service: CategoryService = Depends(get_category_service),
) -> CategoryResponse:
    """Get a category by ID."""
    result = await service.get_by_id(category_id)
    _raise_for_errors(result)
    return CategoryResponse(**result.data.to_dict())
