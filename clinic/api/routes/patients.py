from fastapi import APIRouter, Depends, Response, status
from typing import List
import logging

from ...api.deps import get_audit_logger, get_uow, require_role
from ...core.exceptions import NotFoundError
from ...core.logging import LOG_TYPE_DELETION
from ...core.security import UserRole
from ...models.patient import Patient
from ...models.user import User
from ...repositories.unit_of_work import UnitOfWork
from ...schemas.patient import PatientCreate, PatientUpdate, PatientResponse

router = APIRouter(prefix="/patient", tags=["Patients"])

staff = require_role(UserRole.ADMIN, UserRole.DOCTOR, UserRole.RECEPTIONIST)
front_desk = require_role(UserRole.ADMIN, UserRole.RECEPTIONIST)


def _get_patient_or_404(uow: UnitOfWork, patient_id: int) -> Patient:
    patient = uow.patients.get_by_id(patient_id)
    if not patient:
        raise NotFoundError(f"Patient {patient_id} not found")
    return patient


@router.get("", response_model=List[PatientResponse])
async def list_patients(
    uow: UnitOfWork = Depends(get_uow),
    _: User = Depends(staff),
):
    return [PatientResponse.model_validate(p) for p in uow.patients.list_all()]


@router.get("/{patient_id}", response_model=PatientResponse)
async def get_patient(
    patient_id: int,
    uow: UnitOfWork = Depends(get_uow),
    _: User = Depends(staff),
):
    return PatientResponse.model_validate(_get_patient_or_404(uow, patient_id))


@router.post("", response_model=PatientResponse, status_code=status.HTTP_201_CREATED)
async def create_patient(
    data: PatientCreate,
    response: Response,
    uow: UnitOfWork = Depends(get_uow),
    _: User = Depends(front_desk),
):
    patient = Patient(**data.model_dump())
    uow.patients.add(patient)
    uow.commit()
    uow.refresh(patient)

    response.headers["Location"] = f"/api/patient/{patient.id}"
    return PatientResponse.model_validate(patient)


@router.put("/{patient_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def update_patient(
    patient_id: int,
    data: PatientUpdate,
    uow: UnitOfWork = Depends(get_uow),
    _: User = Depends(front_desk),
):
    patient = _get_patient_or_404(uow, patient_id)

    for key, value in data.model_dump().items():
        setattr(patient, key, value)

    uow.patients.update(patient)
    uow.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{patient_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_patient(
    patient_id: int,
    uow: UnitOfWork = Depends(get_uow),
    current_user: User = Depends(require_role(UserRole.ADMIN)),
    audit_logger: logging.Logger = Depends(get_audit_logger),
):
    """Soft delete: the row stays, flagged as deleted."""
    patient = _get_patient_or_404(uow, patient_id)

    uow.patients.soft_delete(patient)
    uow.commit()

    audit_logger.info(
        f"Patient {patient_id} soft-deleted",
        extra={
            "log_type": LOG_TYPE_DELETION,
            "patient_id": patient_id,
            "user_email": current_user.email,
        },
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
