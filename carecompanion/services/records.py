"""CRUD services for appointments and medications."""

import logging
from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from carecompanion.db.base import Base
from carecompanion.models.appointment import Appointment, AppointmentStatus
from carecompanion.models.medication import Medication

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class RecordNotFoundError(Exception):
    """Raised when a record id does not exist."""

    pass


class RecordService(Generic[ModelT]):
    """Create, list, update and delete records of one model."""

    model: type[ModelT]
    label: str = "Record"

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, data: dict[str, Any]) -> ModelT:
        """Insert a new record."""
        record = self.model(**self._prepare(data))
        self.session.add(record)
        await self.session.commit()
        await self.session.refresh(record)

        logger.info(f"Created {self.label.lower()} {record.id}")
        return record

    async def list(self) -> Sequence[ModelT]:
        """List records, newest first."""
        result = await self.session.execute(
            select(self.model).order_by(self.model.created_at.desc())
        )
        return result.scalars().all()

    async def get(self, record_id: str) -> ModelT:
        """Fetch a record by id.

        Raises:
            RecordNotFoundError: If no record has this id
        """
        result = await self.session.execute(
            select(self.model).where(self.model.id == record_id)
        )
        record = result.scalar_one_or_none()
        if record is None:
            raise RecordNotFoundError(f"{self.label} not found")
        return record

    async def update(self, record_id: str, changes: dict[str, Any]) -> ModelT:
        """Apply a partial update; fields absent from changes are kept."""
        record = await self.get(record_id)
        for key, value in self._prepare(changes).items():
            setattr(record, key, value)

        await self.session.commit()
        await self.session.refresh(record)

        logger.info(f"Updated {self.label.lower()} {record_id}: {sorted(changes)}")
        return record

    async def delete(self, record_id: str) -> None:
        """Remove a record permanently."""
        record = await self.get(record_id)
        await self.session.delete(record)
        await self.session.commit()

        logger.info(f"Deleted {self.label.lower()} {record_id}")

    def _prepare(self, data: dict[str, Any]) -> dict[str, Any]:
        return dict(data)


class AppointmentService(RecordService[Appointment]):
    """Appointments booked from the telemedicine screen."""

    model = Appointment
    label = "Appointment"

    def _prepare(self, data: dict[str, Any]) -> dict[str, Any]:
        prepared = dict(data)
        if isinstance(prepared.get("status"), AppointmentStatus):
            prepared["status"] = prepared["status"].value
        return prepared


class MedicationService(RecordService[Medication]):
    """Medications on the tracker, including today's taken flag."""

    model = Medication
    label = "Medication"
