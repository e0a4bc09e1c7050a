"""
FastAPI HTTP Handlers for the Payment Service API v1.

Every payment in a response carries HAL-style ``_links``.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Path, Query, Request, Response, status

from internal.domain.payment import Payment
from internal.domain.result import ErrorKind
from internal.domain.value_objects import BearerToken
from internal.transport.http.dto import ErrorResponse, PaymentCollectionResponse, PaymentResponse
from internal.transport.http.links import PAYMENTS_PATH, PaymentLinks
from internal.usecase.payment_service import PaymentService
from pkg.logger.logger import get_logger

logger = get_logger(__name__)


router = APIRouter(prefix=PAYMENTS_PATH, tags=["payments"])


class Dependencies:
    """Container for handler dependencies."""

    payment_service: Optional[PaymentService] = None


_deps = Dependencies()


def get_payment_service() -> PaymentService:
    """Get PaymentService instance."""
    if _deps.payment_service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service not initialized",
        )
    return _deps.payment_service


def set_payment_service(payment_service: PaymentService) -> None:
    """Set the payment service. Called during application startup."""
    _deps.payment_service = payment_service


def get_links(request: Request) -> PaymentLinks:
    """Link builder rooted at the URL the client used."""
    return PaymentLinks(str(request.base_url))


def _to_response(payment: Payment, links: dict) -> PaymentResponse:
    return PaymentResponse(**payment.to_dict(), links=links)


@router.post(
    "/process",
    response_model=PaymentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "Payment completed"},
        400: {"model": ErrorResponse, "description": "Payment rejected"},
    },
)
async def process_payment(
    response: Response,
    cart_id: int = Query(..., description="Cart to pay"),
    payment_method: str = Query(..., description="TARJETA_CREDITO, PAYPAL or TRANSFERENCIA"),
    authorization: Optional[str] = Header(None),
    service: PaymentService = Depends(get_payment_service),
    links: PaymentLinks = Depends(get_links),
) -> PaymentResponse:
    """
    Pay a cart.

    User and amount are taken from the cart service. The Location header
    points at the new payment.
    """
    logger.info("Processing payment", cart_id=cart_id, method=payment_method)

    result = await service.process(cart_id, payment_method, BearerToken.from_header(authorization))
    if result.has_errors:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=result.errors)

    payment = result.data
    response.headers["Location"] = links.payment(payment.id).href
    return _to_response(payment, links.for_processed(payment.id, payment.is_refundable))


@router.get(
    "/user/{user_id}",
    response_model=PaymentCollectionResponse,
    responses={400: {"model": ErrorResponse, "description": "Invalid user ID"}},
)
async def get_user_payments(
    user_id: int = Path(..., description="Paying user"),
    service: PaymentService = Depends(get_payment_service),
    links: PaymentLinks = Depends(get_links),
) -> PaymentCollectionResponse:
    """Get every payment of a user, newest first."""
    result = await service.get_by_user(user_id)
    if result.has_errors:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=result.errors)

    return PaymentCollectionResponse(
        data=[
            _to_response(p, links.for_processed(p.id, p.is_refundable))
            for p in result.data
        ],
        links=links.for_collection(user_id),
    )


@router.get(
    "/{payment_id}",
    response_model=PaymentResponse,
    responses={404: {"model": ErrorResponse, "description": "Payment not found"}},
)
async def get_payment(
    payment_id: int = Path(..., description="Payment ID"),
    service: PaymentService = Depends(get_payment_service),
    links: PaymentLinks = Depends(get_links),
) -> PaymentResponse:
    """Get a payment by ID."""
    result = await service.get_by_id(payment_id)
    if result.has_errors:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=result.errors)

    payment = result.data
    return _to_response(
        payment,
        links.for_payment(payment.id, payment.user_id, payment.is_refundable),
    )


@router.post(
    "/{payment_id}/refund",
    response_model=PaymentResponse,
    responses={400: {"model": ErrorResponse, "description": "Payment missing or not refundable"}},
)
async def refund_payment(
    payment_id: int = Path(..., description="Payment ID"),
    service: PaymentService = Depends(get_payment_service),
    links: PaymentLinks = Depends(get_links),
) -> PaymentResponse:
    """
    Refund a completed payment.

    A missing payment is reported like any other refusal.
    """
    logger.info("Refunding payment", payment_id=payment_id)

    result = await service.refund(payment_id)
    if result.has_errors:
        if result.kind is ErrorKind.NOT_FOUND:
            logger.warning("Refund of unknown payment", payment_id=payment_id)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=result.errors)

    payment = result.data
    return _to_response(payment, links.for_refunded(payment.id, payment.user_id))
