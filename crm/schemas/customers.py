"""Customer request/response schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CustomerCreateRequest(BaseModel):
    first_name: str | None = Field(default=None, max_length=255)
    last_name: str | None = Field(default=None, max_length=255)
    email: str | None = Field(default=None, max_length=320)
    phone_number: str | None = Field(default=None, max_length=255)
    description: str | None = Field(default=None, max_length=20000)
    lead_source_id: int | None = Field(default=None, ge=1)
    pipeline_stage_id: int | None = Field(default=None, ge=1)
    employee_id: int | None = Field(default=None, ge=1)
    tag_ids: list[int] = Field(default_factory=list)
    custom_fields: dict[int, str] = Field(default_factory=dict)


class CustomerUpdateRequest(BaseModel):
    """Partial update; only fields that are sent are applied.

    There is deliberately no `pipeline_stage_id`: stage moves use the
    move-stage action.
    """

    model_config = ConfigDict(extra="forbid")

    first_name: str | None = Field(default=None, max_length=255)
    last_name: str | None = Field(default=None, max_length=255)
    email: str | None = Field(default=None, max_length=320)
    phone_number: str | None = Field(default=None, max_length=255)
    description: str | None = Field(default=None, max_length=20000)
    lead_source_id: int | None = Field(default=None, ge=1)
    employee_id: int | None = Field(default=None, ge=1)
    tag_ids: list[int] | None = None
    custom_fields: dict[int, str] | None = None


class StageChangeRequest(BaseModel):
    pipeline_stage_id: int = Field(ge=1)
    notes: str | None = Field(default=None, max_length=20000)


class EmployeeChangeRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    employee_id: int | None = Field(default=None, ge=1)


class CustomFieldValueRequest(BaseModel):
    value: str = Field(min_length=1, max_length=255)


class TagSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    color: str | None = None


class CustomFieldValueResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    custom_field_id: int
    value: str


class CustomerResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone_number: str | None = None
    description: str | None = None
    lead_source_id: int | None = None
    pipeline_stage_id: int | None = None
    employee_id: int | None = None
    tags: list[TagSummary] = Field(default_factory=list)
    custom_fields: list[CustomFieldValueResponse] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None


class CustomerTabResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    key: str
    label: str
    count: int
    pipeline_stage_id: int | None = None
