"""Pipeline stage request/response schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class PipelineStageCreateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)


class PipelineStageRenameRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)


class PipelineStageReorderRequest(BaseModel):
    stage_ids: list[int] = Field(min_length=1)


class PipelineStageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    position: int
    is_default: bool
