"""
FastAPI Application Entry Point.

REST API server for payments.
"""
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.settings import get_settings
from internal.infrastructure.postgres import PostgresPaymentRepository, create_pool
from internal.infrastructure.services import CartClient
from internal.transport.http.middleware import MetricsMiddleware, RequestIDMiddleware
from internal.transport.http.v1.health import build_health_router
from internal.transport.http.v1.payments import router, set_payment_service
from internal.usecase.payment_service import PaymentService
from pkg.logger.logger import get_logger, setup_logging


SERVICE_NAME = "payment-service"

# Load environment variables
load_dotenv()

settings = get_settings()

setup_logging(
    service=SERVICE_NAME,
    level=settings.log_level,
    json_format=settings.log_format == "json",
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Handles startup and shutdown of resources.
    """
    logger.info("Starting Payment Service API...")

    try:
        db_pool = await create_pool(
            settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
        )
        logger.info("Database pool created")
    except Exception as e:
        logger.error("Failed to create database pool", error=str(e))
        raise

    cart_client = CartClient(
        base_url=settings.cart_service_url,
        timeout=settings.http_timeout_seconds,
        failure_threshold=settings.circuit_failure_threshold,
        recovery_timeout=settings.circuit_recovery_timeout,
    )

    set_payment_service(
        PaymentService(
            repository=PostgresPaymentRepository(db_pool),
            carts=cart_client,
        )
    )

    logger.info("Payment Service API started successfully")

    yield

    logger.info("Shutting down Payment Service API...")
    await cart_client.close()
    await db_pool.close()
    logger.info("Payment Service API shutdown complete")


app = FastAPI(
    title="Payment Service API",
    description="Cart payments and refunds with hypermedia links",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestIDMiddleware)

app.include_router(router)
app.include_router(build_health_router(SERVICE_NAME))


@app.get("/")
async def root() -> dict:
    """Root endpoint with service information."""
    return {
        "service": SERVICE_NAME,
        "version": "1.0.0",
        "status": "running",
    }


if __name__ == "__main__":
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
    )
