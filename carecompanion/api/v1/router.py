"""API v1 router aggregating all endpoints."""

from fastapi import APIRouter

from carecompanion.api.v1 import (
    appointments,
    assessment,
    chat,
    health,
    medications,
)

api_router = APIRouter()

# Health check
api_router.include_router(
    health.router,
    prefix="/health",
    tags=["health"],
)

# Mental wellness assessment
api_router.include_router(
    assessment.router,
    prefix="/assessment",
    tags=["assessment"],
)

# Telemedicine appointments
api_router.include_router(
    appointments.router,
    prefix="/appointments",
    tags=["appointments"],
)

# Medication tracker
api_router.include_router(
    medications.router,
    prefix="/medications",
    tags=["medications"],
)

# Health assistant
api_router.include_router(
    chat.router,
    prefix="/chat",
    tags=["chat"],
)
