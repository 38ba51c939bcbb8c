"""User and employee endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Header, status

from crm.api.v1._authz import require_auth
from crm.api.v1._errors import service_errors
from crm.database.db import get_db_session
from crm.schemas.users import UserCreateRequest, UserResponse
from crm.services.user_service import UserService

router = APIRouter(tags=["users"])


@router.get("/employees")
def list_employees(authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    require_auth(authorization, scopes=["users.read"])
    with get_db_session() as session:
        employees = UserService(db=session).list_employees()
        return {"items": [UserResponse.model_validate(user).model_dump() for user in employees]}


@router.get("/users/me")
def me(authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    user = require_auth(authorization, scopes=["users.read"])
    with get_db_session() as session, service_errors():
        return UserResponse.model_validate(UserService(db=session).get(user.user_id)).model_dump()


@router.post("/users", status_code=status.HTTP_201_CREATED)
def create_user(payload: UserCreateRequest, authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    require_auth(authorization, scopes=["users.manage"])
    with get_db_session() as session, service_errors():
        user = UserService(db=session).create_user(payload.name, payload.email, payload.password, role=payload.role)
        return {"item": UserResponse.model_validate(user).model_dump()}
