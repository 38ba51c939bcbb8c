"""Tag endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Header, status

from crm.api.v1._authz import require_auth
from crm.api.v1._errors import drain_notifications, service_errors
from crm.database.db import get_db_session
from crm.schemas.catalog import TagRequest, TagResponse, TagUpdateRequest
from crm.services.tag_service import TagService

router = APIRouter(prefix="/tags", tags=["tags"])


@router.get("")
def list_tags(authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    require_auth(authorization, scopes=["tags.read"])
    with get_db_session() as session:
        return {"items": [TagResponse.model_validate(tag).model_dump() for tag in TagService(db=session).list()]}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_tag(payload: TagRequest, authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    require_auth(authorization, scopes=["tags.manage"])
    with get_db_session() as session, service_errors():
        tag = TagService(db=session).create(payload.name, color=payload.color)
        return {"item": TagResponse.model_validate(tag).model_dump()}


@router.patch("/{tag_id}")
def update_tag(
    tag_id: int,
    payload: TagUpdateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict:
    require_auth(authorization, scopes=["tags.manage"])
    with get_db_session() as session, service_errors():
        tag = TagService(db=session).update(tag_id, name=payload.name, color=payload.color)
        return {"item": TagResponse.model_validate(tag).model_dump()}


@router.delete("/{tag_id}")
def delete_tag(tag_id: int, authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    require_auth(authorization, scopes=["tags.manage"])
    with get_db_session() as session, service_errors():
        service = TagService(db=session)
        service.delete(tag_id)
        service.notifier.success("Tag deleted")
        return {"deleted": True, "notifications": drain_notifications(service.notifier)}
