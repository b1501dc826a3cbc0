"""FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from order_numbering.api.v1 import health, order_numbers
from order_numbering.config import settings
from order_numbering.db import create_tables, dispose_engine
from order_numbering.logging import setup_logging

# Configure logging before anything else
setup_logging()

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup/shutdown events."""
    logger.info("Starting order number API", debug=settings.debug, timezone=settings.timezone)

    await create_tables()
    logger.info("Database tables ready")

    yield

    logger.info("Shutting down order number API")
    await dispose_engine()
    logger.info("Database connections disposed")


app = FastAPI(
    title="Pharmacy POS Order Numbers API",
    description="Date-scoped order numbers for purchase orders, shipping orders and sales",
    version="0.1.0",
    lifespan=lifespan,
)

# API routes
app.include_router(health.router, prefix="/api/v1", tags=["health"])
app.include_router(order_numbers.router, prefix="/api/v1", tags=["order-numbers"])
