"""User schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from crm.models.enums import UserRole


class UserCreateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=3, max_length=320)
    password: str = Field(min_length=8, max_length=256)
    role: UserRole = UserRole.EMPLOYEE


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: UserRole
    is_active: bool
