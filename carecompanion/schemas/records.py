"""Pydantic schemas for appointment and medication records."""

from datetime import datetime

from pydantic import BaseModel, Field

from carecompanion.models.appointment import AppointmentStatus


class AppointmentCreate(BaseModel):
    """Schema for booking an appointment."""

    doctor_id: str = Field(..., min_length=1, max_length=64)
    doctor_name: str = Field(..., min_length=1, max_length=200)
    date: str = Field(..., min_length=1, max_length=20, description="YYYY-MM-DD")
    time: str = Field(..., min_length=1, max_length=20, description="HH:MM")
    status: AppointmentStatus = AppointmentStatus.SCHEDULED


class AppointmentUpdate(BaseModel):
    """Schema for a partial appointment update."""

    doctor_id: str | None = Field(None, min_length=1, max_length=64)
    doctor_name: str | None = Field(None, min_length=1, max_length=200)
    date: str | None = Field(None, min_length=1, max_length=20)
    time: str | None = Field(None, min_length=1, max_length=20)
    status: AppointmentStatus | None = None


class AppointmentRead(BaseModel):
    """Schema for reading an appointment."""

    id: str
    doctor_id: str
    doctor_name: str
    date: str
    time: str
    status: AppointmentStatus
    created_at: datetime
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class MedicationCreate(BaseModel):
    """Schema for adding a medication."""

    name: str = Field(..., min_length=1, max_length=200)
    dosage: str = Field("", max_length=100)
    frequency: str = Field("", max_length=100)
    time: str = Field("", max_length=20)
    taken: bool = False


class MedicationUpdate(BaseModel):
    """Schema for a partial medication update."""

    name: str | None = Field(None, min_length=1, max_length=200)
    dosage: str | None = Field(None, max_length=100)
    frequency: str | None = Field(None, max_length=100)
    time: str | None = Field(None, max_length=20)
    taken: bool | None = None


class MedicationRead(BaseModel):
    """Schema for reading a medication."""

    id: str
    name: str
    dosage: str
    frequency: str
    time: str
    taken: bool
    created_at: datetime
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class DeleteResponse(BaseModel):
    """Confirmation of a deleted record."""

    message: str
