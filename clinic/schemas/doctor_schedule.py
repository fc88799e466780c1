from datetime import time
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from ..models.doctor_schedule import DayOfWeek


class DoctorScheduleBase(BaseModel):
    doctor_id: int
    day_of_week: DayOfWeek
    start_time: time
    end_time: time

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_local_time(cls, value: time) -> time:
        # Schedules are wall-clock times at the clinic
        if value.tzinfo is not None:
            raise ValueError("Time must not carry a timezone offset")
        return value


class DoctorScheduleCreate(DoctorScheduleBase):
    pass


class DoctorScheduleUpdate(DoctorScheduleBase):
    id: int


class DoctorScheduleResponse(DoctorScheduleBase):
    id: int
    doctor_name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
