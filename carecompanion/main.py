"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from carecompanion import __version__
from carecompanion.api.v1.router import api_router
from carecompanion.assessment import get_question_bank, get_resource_catalog
from carecompanion.core.config import settings
from carecompanion.core.logging import setup_logging
from carecompanion.db.init_db import create_tables

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup and shutdown events."""
    logger.info(f"Starting CareCompanion API (env={settings.env})")

    # Fail fast on a malformed catalog rather than on the first request
    get_question_bank()
    get_resource_catalog()

    if settings.init_db_on_startup:
        logger.info("Initializing database...")
        await create_tables()

    yield

    logger.info("Shutting down CareCompanion API")


app = FastAPI(
    title="CareCompanion API",
    description="Senior-care companion: wellness check-ins, medications and appointments",
    version=__version__,
    docs_url="/docs" if not settings.is_prod else None,
    redoc_url="/redoc" if not settings.is_prod else None,
    openapi_url="/openapi.json" if not settings.is_prod else None,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unhandled exceptions."""
    logger.exception(f"Unhandled exception: {exc}")

    # Don't expose internal errors in production
    if settings.is_prod:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc)},
    )


app.include_router(api_router, prefix="/api/v1")


@app.get("/", include_in_schema=False)
async def root() -> dict:
    """Root endpoint with service info."""
    return {
        "service": "CareCompanion API",
        "version": __version__,
        "docs": "/docs" if not settings.is_prod else "Disabled in production",
    }
