"""Lead source endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Header, status

from crm.api.v1._authz import require_auth
from crm.api.v1._errors import drain_notifications, service_errors
from crm.core.exceptions import InUseError
from crm.database.db import get_db_session
from crm.schemas.catalog import LeadSourceResponse, NameRequest
from crm.services.lead_source_service import LeadSourceService

router = APIRouter(prefix="/lead-sources", tags=["lead-sources"])


@router.get("")
def list_lead_sources(authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    require_auth(authorization, scopes=["lead_sources.read"])
    with get_db_session() as session:
        items = LeadSourceService(db=session).list()
        return {"items": [LeadSourceResponse.model_validate(item).model_dump() for item in items]}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_lead_source(payload: NameRequest, authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    require_auth(authorization, scopes=["lead_sources.manage"])
    with get_db_session() as session, service_errors():
        service = LeadSourceService(db=session)
        item = service.create(payload.name)
        service.notifier.success("Lead Source created")
        return {
            "item": LeadSourceResponse.model_validate(item).model_dump(),
            "notifications": drain_notifications(service.notifier),
        }


@router.patch("/{lead_source_id}")
def rename_lead_source(
    lead_source_id: int,
    payload: NameRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict:
    require_auth(authorization, scopes=["lead_sources.manage"])
    with get_db_session() as session, service_errors():
        item = LeadSourceService(db=session).rename(lead_source_id, payload.name)
        return {"item": LeadSourceResponse.model_validate(item).model_dump()}


@router.delete("/{lead_source_id}")
def delete_lead_source(lead_source_id: int, authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    require_auth(authorization, scopes=["lead_sources.manage"])
    with get_db_session() as session, service_errors():
        service = LeadSourceService(db=session)
        try:
            service.delete(lead_source_id)
        except InUseError as exc:
            service.notifier.danger(str(exc))
            return {"deleted": False, "notifications": drain_notifications(service.notifier)}
        service.notifier.success("Lead Source deleted")
        return {"deleted": True, "notifications": drain_notifications(service.notifier)}
