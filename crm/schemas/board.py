"""Board view schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class BoardRecordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str


class BoardColumnResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    group: str
    records_id: str
    records: list[BoardRecordResponse] = Field(default_factory=list)


class BoardMoveRequest(BaseModel):
    customer_id: int = Field(ge=1)
    pipeline_stage_id: int = Field(ge=1)
