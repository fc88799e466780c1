from datetime import datetime, timedelta
from typing import List, Optional, Tuple
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi.security import HTTPBearer
from pydantic import BaseModel
import uuid
from enum import Enum

from .config import settings

# Password hashing
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)

# JWT Security; a missing header is reported as 401 by get_current_user_token
security = HTTPBearer(auto_error=False)

class UserRole(str, Enum):
    ADMIN = "Admin"
    DOCTOR = "Doctor"
    RECEPTIONIST = "Receptionist"

    @classmethod
    def names(cls) -> List[str]:
        return [role.value for role in cls]

class TokenPayload(BaseModel):
    sub: Optional[int] = None
    email: Optional[str] = None
    roles: List[str] = []
    jti: Optional[str] = None
    exp: Optional[int] = None

# Password utilities
def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password: str) -> str:
    """Generate password hash."""
    return pwd_context.hash(password)

# JWT utilities
def create_access_token(
    user_id: int,
    email: str,
    roles: List[str],
    expires_delta: Optional[timedelta] = None
) -> Tuple[str, datetime]:
    """Create a signed JWT carrying the user's id, email and role claims.

    Returns the encoded token together with its expiry time (UTC).
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    expire = datetime.utcnow() + expires_delta

    to_encode = {
        "sub": str(user_id),
        "email": email,
        "roles": list(roles),
        "jti": str(uuid.uuid4()),
        "iss": settings.JWT_ISSUER,
        "aud": settings.JWT_AUDIENCE,
        "exp": expire,
    }

    encoded_jwt = jwt.encode(
        to_encode,
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM
    )
    return encoded_jwt, expire

def verify_token(token: str) -> Optional[TokenPayload]:
    """Verify and decode JWT token."""
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            issuer=settings.JWT_ISSUER,
        )

        return TokenPayload(**payload)

    except JWTError:
        return None
