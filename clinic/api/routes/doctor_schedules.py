from fastapi import APIRouter, Depends, Response, status
from typing import Iterable, List, Optional
import logging

from ...api.deps import get_uow, require_role
from ...core.exceptions import NotFoundError, ValidationError
from ...core.security import UserRole
from ...models.doctor_schedule import DoctorSchedule
from ...models.user import User
from ...repositories.unit_of_work import UnitOfWork
from ...schemas.doctor_schedule import (
    DoctorScheduleBase, DoctorScheduleCreate, DoctorScheduleUpdate, DoctorScheduleResponse
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/doctorschedule", tags=["Doctor Schedules"])

admin_only = require_role(UserRole.ADMIN)
schedule_readers = require_role(UserRole.ADMIN, UserRole.RECEPTIONIST)


def _to_responses(uow: UnitOfWork, schedules: Iterable[DoctorSchedule]) -> List[DoctorScheduleResponse]:
    schedules = list(schedules)
    names = uow.doctors.get_names(s.doctor_id for s in schedules)
    return [
        DoctorScheduleResponse(
            id=s.id,
            doctor_id=s.doctor_id,
            doctor_name=names.get(s.doctor_id),
            day_of_week=s.day_of_week,
            start_time=s.start_time,
            end_time=s.end_time,
        )
        for s in schedules
    ]


def _check_schedule(uow: UnitOfWork, data: DoctorScheduleBase, schedule_id: Optional[int] = None) -> None:
    """Reject unknown doctors; log, but accept, suspicious time windows."""
    if not uow.doctors.exists(data.doctor_id):
        raise ValidationError(f"Doctor {data.doctor_id} does not exist")

    # TODO: decide with the clinic whether inverted or overlapping windows should be rejected
    if data.start_time >= data.end_time:
        logger.warning(
            f"Schedule for doctor {data.doctor_id} on {data.day_of_week.value} "
            f"starts at {data.start_time} but ends at {data.end_time}"
        )
    for other in uow.doctor_schedules.list_by_doctor_id(data.doctor_id):
        if other.id == schedule_id or other.day_of_week != data.day_of_week:
            continue
        if data.start_time < other.end_time and other.start_time < data.end_time:
            logger.warning(
                f"Schedule for doctor {data.doctor_id} on {data.day_of_week.value} "
                f"overlaps schedule {other.id}"
            )


def _get_schedule_or_404(uow: UnitOfWork, schedule_id: int) -> DoctorSchedule:
    schedule = uow.doctor_schedules.get_by_id(schedule_id)
    if not schedule:
        raise NotFoundError(f"Doctor schedule {schedule_id} not found")
    return schedule


@router.get("", response_model=List[DoctorScheduleResponse])
async def list_schedules(
    uow: UnitOfWork = Depends(get_uow),
    _: User = Depends(schedule_readers),
):
    return _to_responses(uow, uow.doctor_schedules.list_all())


@router.get("/bydoctor/{doctor_id}", response_model=List[DoctorScheduleResponse])
async def list_schedules_by_doctor(
    doctor_id: int,
    uow: UnitOfWork = Depends(get_uow),
    _: User = Depends(schedule_readers),
):
    return _to_responses(uow, uow.doctor_schedules.list_by_doctor_id(doctor_id))


@router.get("/{schedule_id}", response_model=DoctorScheduleResponse)
async def get_schedule(
    schedule_id: int,
    uow: UnitOfWork = Depends(get_uow),
    _: User = Depends(schedule_readers),
):
    return _to_responses(uow, [_get_schedule_or_404(uow, schedule_id)])[0]


@router.post("", response_model=DoctorScheduleResponse, status_code=status.HTTP_201_CREATED)
async def create_schedule(
    data: DoctorScheduleCreate,
    response: Response,
    uow: UnitOfWork = Depends(get_uow),
    _: User = Depends(admin_only),
):
    _check_schedule(uow, data)

    schedule = DoctorSchedule(**data.model_dump())
    uow.doctor_schedules.add(schedule)
    uow.commit()
    uow.refresh(schedule)

    response.headers["Location"] = f"/api/doctorschedule/{schedule.id}"
    return _to_responses(uow, [schedule])[0]


@router.put("/{schedule_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def update_schedule(
    schedule_id: int,
    data: DoctorScheduleUpdate,
    uow: UnitOfWork = Depends(get_uow),
    _: User = Depends(admin_only),
):
    if schedule_id != data.id:
        raise ValidationError("ID mismatch")

    schedule = _get_schedule_or_404(uow, schedule_id)
    _check_schedule(uow, data, schedule_id=schedule_id)

    for key, value in data.model_dump(exclude={"id"}).items():
        setattr(schedule, key, value)

    uow.doctor_schedules.update(schedule)
    uow.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{schedule_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_schedule(
    schedule_id: int,
    uow: UnitOfWork = Depends(get_uow),
    _: User = Depends(admin_only),
):
    schedule = _get_schedule_or_404(uow, schedule_id)
    uow.doctor_schedules.remove(schedule)
    uow.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
