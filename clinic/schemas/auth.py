from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from ..core.security import UserRole


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str
    full_name: str = Field(..., min_length=1, max_length=150)
    role: str = UserRole.RECEPTIONIST.value

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        if len(value) < 6:
            raise ValueError("Password must be at least 6 characters long")
        if not any(c.isupper() for c in value):
            raise ValueError("Password must contain an uppercase letter")
        if not any(c.islower() for c in value):
            raise ValueError("Password must contain a lowercase letter")
        if not any(c.isdigit() for c in value):
            raise ValueError("Password must contain a digit")
        if all(c.isalnum() for c in value):
            raise ValueError("Password must contain a non-alphanumeric character")
        return value


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class AssignRoleRequest(BaseModel):
    user_id: int
    role: str


class UserSummary(BaseModel):
    id: int
    email: str
    full_name: Optional[str] = None
    roles: List[str]


class RegisterResponse(BaseModel):
    message: str
    user: UserSummary


class LoginResponse(BaseModel):
    message: str
    token: str
    token_type: str = "bearer"
    expiration: datetime
    user: UserSummary


class MessageResponse(BaseModel):
    message: str
