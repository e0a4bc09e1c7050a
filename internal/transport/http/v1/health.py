"""
Operational endpoints shared by the product and payment APIs.
"""

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest


def build_health_router(service_name: str) -> APIRouter:
    """
    Build the health and metrics router for one service.

    Args:
        service_name: Name reported by the health check.
    """
    router = APIRouter(tags=["health"])

    @router.get("/health")
    async def health_check() -> dict:
        """
        Health check endpoint.

        Returns:
            Health status.
        """
        return {"status": "healthy", "service": service_name}

    @router.get("/metrics")
    async def metrics() -> Response:
        """Prometheus metrics in text format."""
        return Response(
            content=generate_latest(),
            media_type=CONTENT_TYPE_LATEST,
        )

    return router
