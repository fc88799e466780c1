from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class PatientBase(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone_number: Optional[str] = Field(None, max_length=20)
    date_of_birth: date


class PatientCreate(PatientBase):
    pass


class PatientUpdate(PatientBase):
    """Full replacement of a patient's mutable fields."""


class PatientResponse(PatientBase):
    id: int
    created_at: datetime
    is_deleted: bool

    model_config = ConfigDict(from_attributes=True)
