from fastapi import APIRouter, Depends

from ...api.deps import get_current_user, get_uow, rate_limit_check, require_role
from ...core.security import UserRole
from ...models.user import User
from ...repositories.unit_of_work import UnitOfWork
from ...services.auth_service import AuthService, to_user_summary
from ...schemas.auth import (
    RegisterRequest, LoginRequest, AssignRoleRequest,
    RegisterResponse, LoginResponse, MessageResponse, UserSummary
)

router = APIRouter(prefix="/auth", tags=["Authentication"])

@router.post("/register", response_model=RegisterResponse)
async def register(
    user_data: RegisterRequest,
    uow: UnitOfWork = Depends(get_uow),
    _: User = Depends(require_role(UserRole.ADMIN))
):
    """Register a new user (admin only)."""
    auth_service = AuthService(uow)
    return auth_service.register_user(user_data)

@router.post("/login", response_model=LoginResponse)
async def login(
    login_data: LoginRequest,
    uow: UnitOfWork = Depends(get_uow),
    _: None = Depends(rate_limit_check)
):
    """Authenticate user and return an access token."""
    auth_service = AuthService(uow)
    return auth_service.authenticate_user(login_data)

@router.post("/assign-role", response_model=MessageResponse)
async def assign_role(
    assign_data: AssignRoleRequest,
    uow: UnitOfWork = Depends(get_uow),
    _: User = Depends(require_role(UserRole.ADMIN))
):
    """Replace a user's roles with a single new role (admin only)."""
    auth_service = AuthService(uow)
    return MessageResponse(message=auth_service.assign_role(assign_data))

@router.get("/me", response_model=UserSummary)
async def get_current_user_info(
    current_user: User = Depends(get_current_user)
):
    """Get current user information."""
    return to_user_summary(current_user)
