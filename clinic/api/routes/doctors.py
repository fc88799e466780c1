from fastapi import APIRouter, Depends, Response, status
from typing import List

from ...api.deps import get_current_user, get_uow, require_role
from ...core.exceptions import NotFoundError, ValidationError
from ...core.security import UserRole
from ...models.doctor import Doctor
from ...models.user import User
from ...repositories.unit_of_work import UnitOfWork
from ...schemas.doctor import DoctorCreate, DoctorUpdate, DoctorResponse

router = APIRouter(prefix="/doctor", tags=["Doctors"])

admin_only = require_role(UserRole.ADMIN)


def _get_doctor_or_404(uow: UnitOfWork, doctor_id: int) -> Doctor:
    doctor = uow.doctors.get_by_id(doctor_id)
    if not doctor:
        raise NotFoundError(f"Doctor {doctor_id} not found")
    return doctor


@router.get("", response_model=List[DoctorResponse])
async def list_doctors(
    uow: UnitOfWork = Depends(get_uow),
    _: User = Depends(get_current_user),
):
    return [DoctorResponse.model_validate(d) for d in uow.doctors.list_all()]


@router.get("/{doctor_id}", response_model=DoctorResponse)
async def get_doctor(
    doctor_id: int,
    uow: UnitOfWork = Depends(get_uow),
    _: User = Depends(get_current_user),
):
    return DoctorResponse.model_validate(_get_doctor_or_404(uow, doctor_id))


@router.post("", response_model=DoctorResponse, status_code=status.HTTP_201_CREATED)
async def create_doctor(
    data: DoctorCreate,
    response: Response,
    uow: UnitOfWork = Depends(get_uow),
    _: User = Depends(admin_only),
):
    doctor = Doctor(**data.model_dump())
    uow.doctors.add(doctor)
    uow.commit()
    uow.refresh(doctor)

    response.headers["Location"] = f"/api/doctor/{doctor.id}"
    return DoctorResponse.model_validate(doctor)


@router.put("/{doctor_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def update_doctor(
    doctor_id: int,
    data: DoctorUpdate,
    uow: UnitOfWork = Depends(get_uow),
    _: User = Depends(admin_only),
):
    if doctor_id != data.id:
        raise ValidationError("Doctor ID mismatch.")

    doctor = _get_doctor_or_404(uow, doctor_id)
    for key, value in data.model_dump(exclude={"id"}).items():
        setattr(doctor, key, value)

    uow.doctors.update(doctor)
    uow.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{doctor_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_doctor(
    doctor_id: int,
    uow: UnitOfWork = Depends(get_uow),
    _: User = Depends(admin_only),
):
    doctor = _get_doctor_or_404(uow, doctor_id)
    # No cascade: schedules and appointments still referencing the doctor
    # are left to the database's foreign key constraints.
    uow.doctors.delete(doctor)
    uow.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
