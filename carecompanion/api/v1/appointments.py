"""Appointment endpoints for telemedicine scheduling."""

from fastapi import APIRouter, HTTPException, status

from carecompanion.api.deps import DbSession
from carecompanion.schemas.records import (
    AppointmentCreate,
    AppointmentRead,
    AppointmentUpdate,
    DeleteResponse,
)
from carecompanion.services.records import AppointmentService, RecordNotFoundError

router = APIRouter()


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Appointment not found",
    )


@router.post(
    "",
    response_model=AppointmentRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_appointment(
    request: AppointmentCreate,
    session: DbSession,
) -> AppointmentRead:
    """Book an appointment."""
    service = AppointmentService(session)
    appointment = await service.create(request.model_dump())
    return AppointmentRead.model_validate(appointment)


@router.get(
    "",
    response_model=list[AppointmentRead],
)
async def list_appointments(session: DbSession) -> list[AppointmentRead]:
    """List appointments, newest first."""
    service = AppointmentService(session)
    appointments = await service.list()
    return [AppointmentRead.model_validate(a) for a in appointments]


@router.get(
    "/{appointment_id}",
    response_model=AppointmentRead,
)
async def get_appointment(appointment_id: str, session: DbSession) -> AppointmentRead:
    """Get a single appointment."""
    service = AppointmentService(session)
    try:
        appointment = await service.get(appointment_id)
    except RecordNotFoundError:
        raise _not_found()
    return AppointmentRead.model_validate(appointment)


@router.put(
    "/{appointment_id}",
    response_model=AppointmentRead,
)
async def update_appointment(
    appointment_id: str,
    request: AppointmentUpdate,
    session: DbSession,
) -> AppointmentRead:
    """Update an appointment; omitted fields are left as they are."""
    service = AppointmentService(session)
    try:
        appointment = await service.update(
            appointment_id, request.model_dump(exclude_unset=True, exclude_none=True)
        )
    except RecordNotFoundError:
        raise _not_found()
    return AppointmentRead.model_validate(appointment)


@router.delete(
    "/{appointment_id}",
    response_model=DeleteResponse,
)
async def delete_appointment(appointment_id: str, session: DbSession) -> DeleteResponse:
    """Delete an appointment."""
    service = AppointmentService(session)
    try:
        await service.delete(appointment_id)
    except RecordNotFoundError:
        raise _not_found()
    return DeleteResponse(message="Appointment deleted successfully")
