"""Database models for CareCompanion."""

from carecompanion.models.appointment import Appointment, AppointmentStatus
from carecompanion.models.medication import Medication

__all__ = [
    "Appointment",
    "AppointmentStatus",
    "Medication",
]
