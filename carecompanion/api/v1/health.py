"""Health check endpoints."""

from fastapi import APIRouter, status
from pydantic import BaseModel
from sqlalchemy import text

from carecompanion.api.deps import DbSession
from carecompanion.assessment import get_question_bank, get_resource_catalog

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response."""

    status: str


@router.get(
    "",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
    description="Returns service health status",
)
async def health_check() -> HealthResponse:
    """Check if the service is healthy.

    Returns:
        Health status response
    """
    return HealthResponse(status="ok")


@router.get(
    "/ready",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Readiness check",
    description="Returns service readiness status for k8s probes",
)
async def readiness_check(session: DbSession) -> HealthResponse:
    """Check that catalogs load and the database answers.

    Returns:
        Readiness status response
    """
    get_question_bank()
    get_resource_catalog()
    await session.execute(text("SELECT 1"))
    return HealthResponse(status="ok")
