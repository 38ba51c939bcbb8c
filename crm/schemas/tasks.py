"""Task request/response schemas."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class TaskCreateRequest(BaseModel):
    customer_id: int = Field(ge=1)
    description: str = Field(min_length=1, max_length=65535)
    user_id: int | None = Field(default=None, ge=1)
    due_date: date | None = None


class TaskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    customer_id: int
    user_id: int | None = None
    description: str
    due_date: date | None = None
    is_completed: bool


class CalendarEventResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    start: date
    end: date
    customer_id: int
