from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class DoctorBase(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=150)
    specialization: Optional[str] = Field(None, max_length=150)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=20)


class DoctorCreate(DoctorBase):
    pass


class DoctorUpdate(DoctorBase):
    id: int


class DoctorResponse(DoctorBase):
    id: int

    model_config = ConfigDict(from_attributes=True)
