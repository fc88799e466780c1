from typing import Optional

from sqlalchemy.orm import Session

from ..models.user import Role, User


class UserRepository:
    """Application users and the fixed set of roles they can hold."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def add(self, user: User) -> User:
        self.db.add(user)
        return user

    def get_role(self, name: str) -> Optional[Role]:
        return self.db.query(Role).filter(Role.name == name).first()

    def add_role(self, role: Role) -> Role:
        self.db.add(role)
        return role
