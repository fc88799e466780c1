from fastapi import APIRouter, Depends, Response, status
from typing import Iterable, List, Optional
import logging

from ...api.deps import get_audit_logger, get_current_user, get_uow, require_role
from ...core.exceptions import NotFoundError
from ...core.security import UserRole
from ...models.appointment import Appointment
from ...models.user import User
from ...repositories.unit_of_work import UnitOfWork
from ...services.appointment_service import AppointmentService
from ...schemas.appointment import (
    AppointmentCreate, AppointmentReschedule, AppointmentCancel, AppointmentComplete,
    AppointmentByDoctorResponse, AppointmentDetailResponse
)

router = APIRouter(prefix="/appointment", tags=["Appointments"])


def _to_details(uow: UnitOfWork, appointments: Iterable[Appointment]) -> List[AppointmentDetailResponse]:
    """Project appointments with patient and doctor names looked up by id."""
    appointments = list(appointments)
    patient_names = uow.patients.get_names(a.patient_id for a in appointments)
    doctor_names = uow.doctors.get_names(a.doctor_id for a in appointments)
    return [
        AppointmentDetailResponse(
            id=a.id,
            patient_id=a.patient_id,
            patient_name=patient_names.get(a.patient_id),
            doctor_id=a.doctor_id,
            doctor_name=doctor_names.get(a.doctor_id),
            appointment_date=a.appointment_date,
            description=a.description,
            status=a.status,
            created_at=a.created_at,
        )
        for a in appointments
    ]


@router.post("", response_model=AppointmentDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_appointment(
    data: AppointmentCreate,
    response: Response,
    uow: UnitOfWork = Depends(get_uow),
    _: User = Depends(require_role(UserRole.RECEPTIONIST, UserRole.ADMIN)),
):
    appointment = AppointmentService(uow).create(data)
    response.headers["Location"] = f"/api/appointment/{appointment.id}"
    return _to_details(uow, [appointment])[0]


@router.put("/{appointment_id}/reschedule", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def reschedule_appointment(
    appointment_id: int,
    data: AppointmentReschedule,
    uow: UnitOfWork = Depends(get_uow),
    _: User = Depends(require_role(UserRole.RECEPTIONIST)),
):
    AppointmentService(uow).reschedule(appointment_id, data.new_date)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{appointment_id}/cancel", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def cancel_appointment(
    appointment_id: int,
    data: Optional[AppointmentCancel] = None,
    uow: UnitOfWork = Depends(get_uow),
    _: User = Depends(require_role(UserRole.RECEPTIONIST)),
    audit_logger: logging.Logger = Depends(get_audit_logger),
):
    reason = data.cancellation_reason if data else None
    AppointmentService(uow, audit_logger).cancel(appointment_id, reason)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{appointment_id}/complete", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def complete_appointment(
    appointment_id: int,
    data: Optional[AppointmentComplete] = None,
    uow: UnitOfWork = Depends(get_uow),
    _: User = Depends(require_role(UserRole.DOCTOR)),
):
    notes = data.completion_notes if data else None
    AppointmentService(uow).complete(appointment_id, notes)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/doctor/{doctor_id}", response_model=List[AppointmentByDoctorResponse])
async def list_doctor_appointments(
    doctor_id: int,
    uow: UnitOfWork = Depends(get_uow),
    _: User = Depends(require_role(UserRole.DOCTOR)),
):
    appointments = uow.appointments.list_by_doctor_id(doctor_id)
    patient_names = uow.patients.get_names(a.patient_id for a in appointments)
    return [
        AppointmentByDoctorResponse(
            id=a.id,
            patient_id=a.patient_id,
            patient_name=patient_names.get(a.patient_id),
            appointment_date=a.appointment_date,
            description=a.description,
            status=a.status,
            created_at=a.created_at,
        )
        for a in appointments
    ]


@router.get("/all", response_model=List[AppointmentDetailResponse])
async def list_all_appointments(
    uow: UnitOfWork = Depends(get_uow),
    _: User = Depends(require_role(UserRole.ADMIN)),
):
    return _to_details(uow, uow.appointments.list_all())


@router.get("/{appointment_id}", response_model=AppointmentDetailResponse)
async def get_appointment(
    appointment_id: int,
    uow: UnitOfWork = Depends(get_uow),
    _: User = Depends(get_current_user),
):
    appointment = uow.appointments.get_by_id(appointment_id)
    if not appointment:
        raise NotFoundError(f"Appointment {appointment_id} not found")
    return _to_details(uow, [appointment])[0]
