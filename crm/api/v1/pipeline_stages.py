"""Pipeline stage registry endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Header, status

from crm.api.v1._authz import require_auth
from crm.api.v1._errors import drain_notifications, service_errors
from crm.core.exceptions import InUseError
from crm.database.db import get_db_session
from crm.schemas.pipeline_stages import (
    PipelineStageCreateRequest,
    PipelineStageRenameRequest,
    PipelineStageReorderRequest,
    PipelineStageResponse,
)
from crm.services.pipeline_stage_service import PipelineStageService

router = APIRouter(prefix="/pipeline-stages", tags=["pipeline-stages"])


def _dump(stage) -> dict:
    return PipelineStageResponse.model_validate(stage).model_dump()


@router.get("")
def list_stages(authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    require_auth(authorization, scopes=["stages.read"])
    with get_db_session() as session:
        stages = PipelineStageService(db=session).list()
        return {"items": [_dump(stage) for stage in stages]}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_stage(
    payload: PipelineStageCreateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict:
    require_auth(authorization, scopes=["stages.manage"])
    with get_db_session() as session, service_errors():
        service = PipelineStageService(db=session)
        stage = service.create(payload.name)
        service.notifier.success("Pipeline Stage created")
        return {"item": _dump(stage), "notifications": drain_notifications(service.notifier)}


@router.patch("/{stage_id}")
def rename_stage(
    stage_id: int,
    payload: PipelineStageRenameRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict:
    require_auth(authorization, scopes=["stages.manage"])
    with get_db_session() as session, service_errors():
        service = PipelineStageService(db=session)
        stage = service.rename(stage_id, payload.name)
        service.notifier.success("Pipeline Stage updated")
        return {"item": _dump(stage), "notifications": drain_notifications(service.notifier)}


@router.post("/{stage_id}/default")
def set_default_stage(stage_id: int, authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    require_auth(authorization, scopes=["stages.manage"])
    with get_db_session() as session, service_errors():
        service = PipelineStageService(db=session)
        service.set_default(stage_id)
        return {"items": [_dump(stage) for stage in service.list()]}


@router.put("/order")
def reorder_stages(
    payload: PipelineStageReorderRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict:
    require_auth(authorization, scopes=["stages.manage"])
    with get_db_session() as session, service_errors():
        stages = PipelineStageService(db=session).reorder(payload.stage_ids)
        return {"items": [_dump(stage) for stage in stages]}


@router.delete("/{stage_id}")
def delete_stage(stage_id: int, authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    require_auth(authorization, scopes=["stages.manage"])
    with get_db_session() as session, service_errors():
        service = PipelineStageService(db=session)
        try:
            service.delete(stage_id)
        except InUseError as exc:
            service.notifier.danger(str(exc))
            return {"deleted": False, "notifications": drain_notifications(service.notifier)}
        service.notifier.success("Pipeline Stage deleted")
        return {"deleted": True, "notifications": drain_notifications(service.notifier)}
