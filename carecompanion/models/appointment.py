"""Appointment model for telemedicine scheduling."""

from enum import Enum

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from carecompanion.db.base import Base, TimestampMixin


class AppointmentStatus(str, Enum):
    """Lifecycle status of an appointment."""

    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Appointment(Base, TimestampMixin):
    """A booked consultation with a doctor.

    Date and time are kept as the strings the client picked; no timezone
    conversion is applied.
    """

    __tablename__ = "appointments"

    doctor_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    doctor_name: Mapped[str] = mapped_column(String(200), nullable=False)
    date: Mapped[str] = mapped_column(String(20), nullable=False)
    time: Mapped[str] = mapped_column(String(20), nullable=False)
    status: Mapped[AppointmentStatus] = mapped_column(
        String(20),
        nullable=False,
        default=AppointmentStatus.SCHEDULED,
    )

    def __repr__(self) -> str:
        return f"<Appointment {self.doctor_name} {self.date} {self.time} ({self.status})>"
