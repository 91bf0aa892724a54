"""FastAPI dependency injection utilities."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from carecompanion.db.session import get_db
from carecompanion.services.assessment import AssessmentSessionStore
from carecompanion.services.assistant import AssistantService


@lru_cache
def get_session_store() -> AssessmentSessionStore:
    """Process-wide store of in-memory assessment sessions."""
    return AssessmentSessionStore()


def get_assistant_service() -> AssistantService:
    """Assistant backed by the configured chat provider."""
    return AssistantService()


# Type aliases for cleaner dependency injection
DbSession = Annotated[AsyncSession, Depends(get_db)]
SessionStore = Annotated[AssessmentSessionStore, Depends(get_session_store)]
Assistant = Annotated[AssistantService, Depends(get_assistant_service)]
