"""Service layer for CareCompanion."""

from carecompanion.services.assessment import AssessmentSessionStore
from carecompanion.services.assistant import (
    AssistantService,
    ChatProvider,
    ChatProviderError,
    OpenAIChatProvider,
)
from carecompanion.services.records import (
    AppointmentService,
    MedicationService,
    RecordNotFoundError,
)

__all__ = [
    "AssessmentSessionStore",
    "AssistantService",
    "ChatProvider",
    "ChatProviderError",
    "OpenAIChatProvider",
    "AppointmentService",
    "MedicationService",
    "RecordNotFoundError",
]
