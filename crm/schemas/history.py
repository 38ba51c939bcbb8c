"""Customer history schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class HistoryEntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    customer_id: int
    created_at: datetime
    actor_name: str
    stage_name: str | None = None
    employee_name: str | None = None
    notes: str | None = None
    pipeline_stage_id: int | None = None
    employee_id: int | None = None
    user_id: int | None = None
