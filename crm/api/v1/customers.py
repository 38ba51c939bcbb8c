"""Customer endpoints for API v1, including stage moves and history."""

from __future__ import annotations

from fastapi import APIRouter, Header, Query, status

from crm.api.v1._authz import require_auth
from crm.api.v1._errors import drain_notifications, service_errors
from crm.core.dependencies import current_actor_id
from crm.database.db import get_db_session
from crm.schemas.customers import (
    CustomerCreateRequest,
    CustomerResponse,
    CustomerTabResponse,
    CustomerUpdateRequest,
    CustomFieldValueRequest,
    EmployeeChangeRequest,
    StageChangeRequest,
)
from crm.schemas.history import HistoryEntryResponse
from crm.schemas.pipeline_stages import PipelineStageResponse
from crm.services.audit_log_service import AuditLogService
from crm.services.customer_service import CustomerService
from crm.services.pipeline_stage_service import PipelineStageService
from crm.services.stage_transition_service import StageTransitionService

router = APIRouter(prefix="/customers", tags=["customers"])


def _dump(customer) -> dict:
    return CustomerResponse.model_validate(customer).model_dump()


@router.get("")
def list_customers(
    tab: str = Query(default="all", max_length=255),
    search: str | None = Query(default=None, max_length=255),
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict:
    user = require_auth(authorization, scopes=["customers.read"])
    with get_db_session() as session, service_errors():
        customers = CustomerService(db=session).list(tab=tab, viewer_id=user.user_id, search=search)
        return {"items": [_dump(customer) for customer in customers], "total": len(customers), "tab": tab}


@router.get("/tabs")
def customer_tabs(authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    user = require_auth(authorization, scopes=["customers.read"])
    with get_db_session() as session:
        counts = CustomerService(db=session).tab_counts(viewer_id=user.user_id, viewer_is_admin=user.is_admin)
        return {"items": [CustomerTabResponse.model_validate(item).model_dump() for item in counts]}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_customer(
    payload: CustomerCreateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict:
    scopes = ["customers.write"]
    if payload.employee_id is not None:
        scopes.append("customers.assign")
    user = require_auth(authorization, scopes=scopes)
    with get_db_session() as session, service_errors():
        service = CustomerService(db=session)
        customer = service.create(payload.model_dump(), actor_user_id=current_actor_id(user))
        return {"item": _dump(customer), "notifications": drain_notifications(service.notifier)}


@router.get("/{customer_id}")
def get_customer(
    customer_id: int,
    include_deleted: bool = Query(default=False),
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict:
    require_auth(authorization, scopes=["customers.read"])
    with get_db_session() as session, service_errors():
        customer = CustomerService(db=session).get(customer_id, include_deleted=include_deleted)
        return _dump(customer)


@router.patch("/{customer_id}")
def update_customer(
    customer_id: int,
    payload: CustomerUpdateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict:
    data = payload.model_dump(exclude_unset=True)
    scopes = ["customers.write"]
    if "employee_id" in data:
        scopes.append("customers.assign")
    user = require_auth(authorization, scopes=scopes)
    with get_db_session() as session, service_errors():
        service = CustomerService(db=session)
        customer = service.update(customer_id, data, actor_user_id=current_actor_id(user))
        return {"item": _dump(customer), "notifications": drain_notifications(service.notifier)}


@router.delete("/{customer_id}")
def delete_customer(customer_id: int, authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    require_auth(authorization, scopes=["customers.write"])
    with get_db_session() as session, service_errors():
        service = CustomerService(db=session)
        service.delete(customer_id)
        return {"deleted": True, "notifications": drain_notifications(service.notifier)}


@router.post("/{customer_id}/restore")
def restore_customer(customer_id: int, authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    require_auth(authorization, scopes=["customers.write"])
    with get_db_session() as session, service_errors():
        service = CustomerService(db=session)
        customer = service.restore(customer_id)
        return {"item": _dump(customer), "notifications": drain_notifications(service.notifier)}


@router.get("/{customer_id}/move-stage")
def move_stage_form(customer_id: int, authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    """Current stage, the suggested next stage and every selectable stage."""
    require_auth(authorization, scopes=["customers.read"])
    with get_db_session() as session, service_errors():
        customer = CustomerService(db=session).get(customer_id)
        stages = PipelineStageService(db=session)
        suggested = stages.next_stage(customer.pipeline_stage_id)
        return {
            "customer_id": customer.id,
            "current_stage_id": customer.pipeline_stage_id,
            "suggested_stage_id": suggested.id if suggested is not None else customer.pipeline_stage_id,
            "stages": [PipelineStageResponse.model_validate(stage).model_dump() for stage in stages.list()],
        }


@router.post("/{customer_id}/move-stage")
def move_stage(
    customer_id: int,
    payload: StageChangeRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict:
    user = require_auth(authorization, scopes=["customers.write"])
    with get_db_session() as session, service_errors():
        service = StageTransitionService(db=session)
        entry = service.change_stage(
            customer_id,
            payload.pipeline_stage_id,
            notes=payload.notes,
            actor_user_id=current_actor_id(user),
        )
        return {
            "customer_id": customer_id,
            "pipeline_stage_id": entry.pipeline_stage_id,
            "entry_id": entry.id,
            "notifications": drain_notifications(service.notifier),
        }


@router.post("/{customer_id}/assign-employee")
def assign_employee(
    customer_id: int,
    payload: EmployeeChangeRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict:
    user = require_auth(authorization, scopes=["customers.assign"])
    with get_db_session() as session, service_errors():
        service = StageTransitionService(db=session)
        logged = service.change_employee(
            customer_id,
            payload.employee_id,
            actor_user_id=current_actor_id(user),
        )
        return {
            "customer_id": customer_id,
            "employee_id": payload.employee_id,
            "logged": logged,
            "notifications": drain_notifications(service.notifier),
        }


@router.get("/{customer_id}/history")
def customer_history(customer_id: int, authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    require_auth(authorization, scopes=["history.read"])
    with get_db_session() as session, service_errors():
        history = AuditLogService(db=session).history_for(customer_id)
        return {"items": [HistoryEntryResponse.model_validate(entry).model_dump() for entry in history]}


@router.put("/{customer_id}/custom-fields/{custom_field_id}")
def set_custom_field(
    customer_id: int,
    custom_field_id: int,
    payload: CustomFieldValueRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict:
    require_auth(authorization, scopes=["customers.write"])
    with get_db_session() as session, service_errors():
        item = CustomerService(db=session).set_custom_field(customer_id, custom_field_id, payload.value)
        return {"custom_field_id": item.custom_field_id, "value": item.value}
