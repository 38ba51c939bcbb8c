from __future__ import annotations

import pytest

from crm.core.exceptions import AuthenticationError, ValidationError
from crm.models import UserRole
from crm.services.user_service import UserService


def test_create_and_authenticate_user(session):
    service = UserService(db=session)
    user = service.create_user("Eve", " Eve@Example.com ", "password123")

    assert user.email == "eve@example.com"
    assert service.authenticate("EVE@example.com", "password123").id == user.id
    with pytest.raises(AuthenticationError):
        service.authenticate("eve@example.com", "wrong-password")
    with pytest.raises(ValidationError):
        service.create_user("Eve Again", "eve@example.com", "password123")


def test_inactive_user_cannot_authenticate(session):
    service = UserService(db=session)
    user = service.create_user("Eve", "eve@example.com", "password123")
    user.is_active = False
    session.commit()
    with pytest.raises(AuthenticationError):
        service.authenticate("eve@example.com", "password123")


def test_list_employees_excludes_admins(session):
    service = UserService(db=session)
    service.create_user("Admin", "admin@example.com", "password123", role=UserRole.ADMIN)
    employee = service.create_user("Bob", "bob@example.com", "password123")

    assert [user.id for user in service.list_employees()] == [employee.id]
