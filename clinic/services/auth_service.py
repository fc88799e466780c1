from datetime import datetime
import logging

from ..models.user import Role, User
from ..repositories.unit_of_work import UnitOfWork
from ..core.config import settings
from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from ..core.security import (
    verify_password, get_password_hash, create_access_token, UserRole
)
from ..schemas.auth import (
    RegisterRequest, LoginRequest, AssignRoleRequest,
    RegisterResponse, LoginResponse, UserSummary
)

logger = logging.getLogger(__name__)

def to_user_summary(user: User) -> UserSummary:
    return UserSummary(
        id=user.id,
        email=user.email,
        full_name=user.full_name,
        roles=user.role_names,
    )

class AuthService:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    def _get_valid_role(self, role_name: str) -> Role:
        if role_name not in UserRole.names():
            raise ValidationError("Invalid role")
        role = self.uow.users.get_role(role_name)
        if not role:
            # Roles are seeded at startup; a missing row means the seed never ran
            logger.error(f"Role '{role_name}' is missing from the roles table")
            raise ValidationError("Invalid role")
        return role

    def register_user(self, user_data: RegisterRequest) -> RegisterResponse:
        """Register a new user holding a single role."""
        role = self._get_valid_role(user_data.role)

        # Check if user already exists
        if self.uow.users.get_by_email(user_data.email):
            raise ValidationError("Email already registered")

        new_user = User(
            email=user_data.email,
            full_name=user_data.full_name,
            password_hash=get_password_hash(user_data.password),
            created_at=datetime.utcnow(),
        )
        new_user.roles = [role]

        self.uow.users.add(new_user)
        self.uow.commit()
        self.uow.refresh(new_user)

        logger.info(f"Registered user {new_user.email} with role {role.name}")
        return RegisterResponse(
            message="User registered successfully!",
            user=to_user_summary(new_user),
        )

    def authenticate_user(self, login_data: LoginRequest) -> LoginResponse:
        """Verify credentials and issue an access token."""
        user = self.uow.users.get_by_email(login_data.email)

        if not user or not verify_password(login_data.password, user.password_hash):
            logger.warning(f"Failed login attempt for {login_data.email}")
            raise AuthenticationError("Invalid login attempt.")

        token, expiration = create_access_token(user.id, user.email, user.role_names)

        return LoginResponse(
            message="User logged in successfully!",
            token=token,
            expiration=expiration,
            user=to_user_summary(user),
        )

    def assign_role(self, assign_data: AssignRoleRequest) -> str:
        """Replace the user's role set with exactly one role."""
        user = self.uow.users.get_by_id(assign_data.user_id)
        if not user:
            raise NotFoundError("User not found")

        role = self._get_valid_role(assign_data.role)

        user.roles = [role]
        self.uow.commit()

        logger.info(f"Assigned role {role.name} to user {user.email}")
        return f"Role '{role.name}' assigned to user '{user.email}'"

    def seed_roles_and_admin(self) -> None:
        """Create the fixed roles and the initial admin account if missing."""
        for role_name in UserRole.names():
            if not self.uow.users.get_role(role_name):
                self.uow.users.add_role(Role(name=role_name))
                logger.info(f"Created role {role_name}")
        self.uow.commit()

        if self.uow.users.get_by_email(settings.ADMIN_EMAIL):
            return

        admin = User(
            email=settings.ADMIN_EMAIL,
            full_name=settings.ADMIN_FULL_NAME,
            password_hash=get_password_hash(settings.ADMIN_PASSWORD),
            created_at=datetime.utcnow(),
        )
        admin.roles = [self.uow.users.get_role(UserRole.ADMIN.value)]
        self.uow.users.add(admin)
        self.uow.commit()
        logger.info(f"Created initial admin account {settings.ADMIN_EMAIL}")
