"""Task endpoints for API v1."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Header, Query, status

from crm.api.v1._authz import require_auth
from crm.api.v1._errors import drain_notifications, service_errors
from crm.database.db import get_db_session
from crm.schemas.tasks import CalendarEventResponse, TaskCreateRequest, TaskResponse
from crm.services.task_service import TaskService

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("")
def list_tasks(
    mine: bool = Query(default=False),
    customer_id: int | None = Query(default=None, ge=1),
    completed: bool = Query(default=False),
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict:
    """All tasks, the caller's own with `mine`, or one customer's open/completed tasks."""
    user = require_auth(authorization, scopes=["tasks.read"])
    with get_db_session() as session:
        service = TaskService(db=session)
        if customer_id is not None:
            tasks = service.for_customer(customer_id, completed=completed)
        else:
            tasks = service.list(user_id=user.user_id if mine else None)
        return {"items": [TaskResponse.model_validate(task).model_dump() for task in tasks]}


@router.get("/calendar")
def task_calendar(
    start: date = Query(),
    end: date = Query(),
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict:
    """Calendar events for tasks due in `[start, end]`; employees see their own tasks only."""
    user = require_auth(authorization, scopes=["tasks.read"])
    with get_db_session() as session, service_errors():
        events = TaskService(db=session).calendar(
            start,
            end,
            viewer_id=user.user_id,
            viewer_is_admin=user.is_admin,
        )
        return {"items": [CalendarEventResponse.model_validate(event).model_dump() for event in events]}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_task(payload: TaskCreateRequest, authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    require_auth(authorization, scopes=["tasks.write"])
    with get_db_session() as session, service_errors():
        service = TaskService(db=session)
        task = service.create(
            payload.customer_id,
            payload.description,
            user_id=payload.user_id,
            due_date=payload.due_date,
        )
        return {"item": TaskResponse.model_validate(task).model_dump(), "notifications": drain_notifications(service.notifier)}


@router.post("/{task_id}/complete")
def complete_task(task_id: int, authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    require_auth(authorization, scopes=["tasks.write"])
    with get_db_session() as session, service_errors():
        service = TaskService(db=session)
        task = service.complete(task_id)
        return {"item": TaskResponse.model_validate(task).model_dump(), "notifications": drain_notifications(service.notifier)}


@router.delete("/{task_id}")
def delete_task(task_id: int, authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    require_auth(authorization, scopes=["tasks.write"])
    with get_db_session() as session, service_errors():
        TaskService(db=session).delete(task_id)
        return {"deleted": True}
