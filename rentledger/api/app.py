"""FastAPI application for the rent ledger."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from rentledger.api.errors import request_validation_handler
from rentledger.api.rents import router as rents_router
from rentledger.config import settings
from rentledger.scheduler import start_scheduler

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle (startup and shutdown)."""
    scheduler = start_scheduler() if settings.scheduler_enabled else None
    yield
    if scheduler:
        scheduler.shutdown(wait=False)
        logger.info("Overdue sweep scheduler stopped")
    logger.info("Application shutting down")


app = FastAPI(
    title=settings.api_title,
    description="Rent billing ledger: rents, payments, overdue tracking, invoices and summaries",
    version=settings.api_version,
    lifespan=lifespan,
)

app.add_exception_handler(RequestValidationError, request_validation_handler)

app.include_router(rents_router)


@app.get("/health")
async def health_check() -> dict:
    """Health check endpoint for monitoring."""
    return {"status": "ok"}


__all__ = ["app"]
