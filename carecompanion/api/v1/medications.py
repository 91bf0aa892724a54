"""Medication tracker endpoints."""

from fastapi import APIRouter, HTTPException, status

from carecompanion.api.deps import DbSession
from carecompanion.schemas.records import (
    DeleteResponse,
    MedicationCreate,
    MedicationRead,
    MedicationUpdate,
)
from carecompanion.services.records import MedicationService, RecordNotFoundError

router = APIRouter()


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Medication not found",
    )


@router.post(
    "",
    response_model=MedicationRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_medication(
    request: MedicationCreate,
    session: DbSession,
) -> MedicationRead:
    """Add a medication."""
    service = MedicationService(session)
    medication = await service.create(request.model_dump())
    return MedicationRead.model_validate(medication)


@router.get(
    "",
    response_model=list[MedicationRead],
)
async def list_medications(session: DbSession) -> list[MedicationRead]:
    """List medications, newest first."""
    service = MedicationService(session)
    medications = await service.list()
    return [MedicationRead.model_validate(m) for m in medications]


@router.get(
    "/{medication_id}",
    response_model=MedicationRead,
)
async def get_medication(medication_id: str, session: DbSession) -> MedicationRead:
    """Get a single medication."""
    service = MedicationService(session)
    try:
        medication = await service.get(medication_id)
    except RecordNotFoundError:
        raise _not_found()
    return MedicationRead.model_validate(medication)


@router.put(
    "/{medication_id}",
    response_model=MedicationRead,
)
async def update_medication(
    medication_id: str,
    request: MedicationUpdate,
    session: DbSession,
) -> MedicationRead:
    """Update a medication, such as marking it taken."""
    service = MedicationService(session)
    try:
        medication = await service.update(
            medication_id, request.model_dump(exclude_unset=True, exclude_none=True)
        )
    except RecordNotFoundError:
        raise _not_found()
    return MedicationRead.model_validate(medication)


@router.delete(
    "/{medication_id}",
    response_model=DeleteResponse,
)
async def delete_medication(medication_id: str, session: DbSession) -> DeleteResponse:
    """Delete a medication."""
    service = MedicationService(session)
    try:
        await service.delete(medication_id)
    except RecordNotFoundError:
        raise _not_found()
    return DeleteResponse(message="Medication deleted successfully")
