"""Users, credentials and employee lookups."""

from __future__ import annotations

from sqlalchemy import select

from crm.core.config import get_config
from crm.core.exceptions import AuthenticationError, ValidationError
from crm.core.security import hash_password, verify_password
from crm.models import User, UserRole
from crm.services.base_service import BaseService
from crm.utils.validators import sanitize_text


class UserService(BaseService):
    def get(self, user_id: int) -> User:
        return self._get_or_raise(User, user_id, "User")

    def get_by_email(self, email: str) -> User | None:
        stmt = select(User).where(User.email == email.strip().lower())
        return self.db.scalars(stmt).first()

    def create_user(self, name: str, email: str, password: str, role: UserRole = UserRole.EMPLOYEE) -> User:
        cleaned_name = sanitize_text(name, max_len=255)
        normalized_email = email.strip().lower()
        if not cleaned_name or not normalized_email:
            raise ValidationError("Name and email are required.")
        if self.get_by_email(normalized_email) is not None:
            raise ValidationError(f"A user with email {normalized_email} already exists.")

        user = User(
            name=cleaned_name,
            email=normalized_email,
            hashed_password=hash_password(password, pepper=get_config().PASSWORD_PEPPER),
            role=role,
        )
        self.db.add(user)
        self.commit()
        self.db.refresh(user)
        return user

    def authenticate(self, email: str, password: str) -> User:
        user = self.get_by_email(email)
        if user is None or not user.is_active:
            raise AuthenticationError("Invalid credentials.")
        if not verify_password(password, user.hashed_password, pepper=get_config().PASSWORD_PEPPER):
            raise AuthenticationError("Invalid credentials.")
        return user

    def list_employees(self) -> list[User]:
        stmt = (
            select(User)
            .where(User.role == UserRole.EMPLOYEE, User.is_active.is_(True))
            .order_by(User.name, User.id)
        )
        return list(self.db.scalars(stmt))
