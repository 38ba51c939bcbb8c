"""Custom field definition endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Header, status

from crm.api.v1._authz import require_auth
from crm.api.v1._errors import drain_notifications, service_errors
from crm.core.exceptions import InUseError
from crm.database.db import get_db_session
from crm.schemas.catalog import CustomFieldResponse, NameRequest
from crm.services.custom_field_service import CustomFieldService

router = APIRouter(prefix="/custom-fields", tags=["custom-fields"])


@router.get("")
def list_custom_fields(authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    require_auth(authorization, scopes=["custom_fields.read"])
    with get_db_session() as session:
        items = CustomFieldService(db=session).list()
        return {"items": [CustomFieldResponse.model_validate(item).model_dump() for item in items]}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_custom_field(payload: NameRequest, authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    require_auth(authorization, scopes=["custom_fields.manage"])
    with get_db_session() as session, service_errors():
        item = CustomFieldService(db=session).create(payload.name)
        return {"item": CustomFieldResponse.model_validate(item).model_dump()}


@router.patch("/{custom_field_id}")
def rename_custom_field(
    custom_field_id: int,
    payload: NameRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict:
    require_auth(authorization, scopes=["custom_fields.manage"])
    with get_db_session() as session, service_errors():
        item = CustomFieldService(db=session).rename(custom_field_id, payload.name)
        return {"item": CustomFieldResponse.model_validate(item).model_dump()}


@router.delete("/{custom_field_id}")
def delete_custom_field(custom_field_id: int, authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    require_auth(authorization, scopes=["custom_fields.manage"])
    with get_db_session() as session, service_errors():
        service = CustomFieldService(db=session)
        try:
            service.delete(custom_field_id)
        except InUseError as exc:
            service.notifier.danger(str(exc))
            return {"deleted": False, "notifications": drain_notifications(service.notifier)}
        return {"deleted": True, "notifications": drain_notifications(service.notifier)}
