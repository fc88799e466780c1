from fastapi import Depends, HTTPException, status, Request
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from typing import Optional
import logging
import redis

from ..core.config import settings
from ..core.database import get_db, get_redis
from ..core.exceptions import AuthenticationError, AuthorizationError
from ..core.logging import AUDIT_LOGGER_NAME
from ..core.security import security, verify_token, UserRole, TokenPayload
from ..models.user import User
from ..repositories.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

def get_uow(db: Session = Depends(get_db)) -> UnitOfWork:
    """Unit of work bound to the request's database session."""
    return UnitOfWork(db)

def get_audit_logger(request: Request) -> logging.Logger:
    """Audit logger built at startup, see clinic.core.logging.setup_logging."""
    audit_logger = getattr(request.app.state, "audit_logger", None)
    return audit_logger or logging.getLogger(AUDIT_LOGGER_NAME)

async def get_current_user_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> TokenPayload:
    """Extract and verify JWT token from Authorization header."""
    if credentials is None:
        raise AuthenticationError("Not authenticated")

    token_payload = verify_token(credentials.credentials)
    if not token_payload:
        raise AuthenticationError("Invalid or expired token")

    return token_payload

async def get_current_user(
    token_payload: TokenPayload = Depends(get_current_user_token),
    uow: UnitOfWork = Depends(get_uow)
) -> User:
    """Get current authenticated user from database."""
    if not token_payload.sub:
        raise AuthenticationError("Invalid token payload")

    user = uow.users.get_by_id(token_payload.sub)
    if not user:
        raise AuthenticationError("User not found")

    return user

# Role-based access control dependencies
def require_role(*allowed_roles: UserRole):
    """Create a dependency that requires one of the given user roles.

    Roles are read from the store rather than the token so that a role
    assignment takes effect on the user's next request.
    """
    allowed = {role.value for role in allowed_roles}

    async def role_checker(
        current_user: User = Depends(get_current_user)
    ) -> User:
        if not allowed.intersection(current_user.role_names):
            logger.info(
                f"Denied {current_user.email} with roles {current_user.role_names}; "
                f"required one of {sorted(allowed)}"
            )
            raise AuthorizationError(
                f"Access denied. Required roles: {[role.value for role in allowed_roles]}"
            )
        return current_user

    return role_checker

# Rate limiting dependency
async def rate_limit_check(
    request: Request,
    redis_client = Depends(get_redis)
) -> None:
    """Limit login attempts per client address."""
    client_ip = request.client.host if request.client else "unknown"
    key = f"rate_limit:{request.url.path}:{client_ip}"

    try:
        # One INCR per attempt; the first attempt of a window sets its expiry
        current_requests = redis_client.incr(key)
        if current_requests == 1:
            redis_client.expire(key, settings.LOGIN_RATE_WINDOW_SECONDS)
        if current_requests > settings.LOGIN_RATE_LIMIT:
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail="Too many requests. Please try again later."
            )
    except redis.RedisError as e:
        logger.warning(f"Rate limiting skipped, Redis unavailable: {e}")
