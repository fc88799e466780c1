from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models.appointment import AppointmentStatus


class AppointmentCreate(BaseModel):
    patient_id: int
    doctor_id: int
    appointment_date: datetime
    description: Optional[str] = Field(None, max_length=500)


class AppointmentReschedule(BaseModel):
    new_date: datetime


class AppointmentCancel(BaseModel):
    cancellation_reason: Optional[str] = Field(None, max_length=500)


class AppointmentComplete(BaseModel):
    completion_notes: Optional[str] = Field(None, max_length=1000)


class AppointmentByDoctorResponse(BaseModel):
    id: int
    patient_id: int
    patient_name: Optional[str] = None
    appointment_date: datetime
    description: Optional[str] = None
    status: AppointmentStatus
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AppointmentDetailResponse(AppointmentByDoctorResponse):
    doctor_id: int
    doctor_name: Optional[str] = None
