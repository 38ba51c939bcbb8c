from __future__ import annotations

import base64
from datetime import date

import pytest
from fastapi import HTTPException

from crm.api.v1 import documents, health, lead_sources, quotes, tasks
from crm.core.dependencies import CurrentUser
from crm.schemas.catalog import NameRequest
from crm.schemas.documents import DocumentUploadRequest
from crm.schemas.quotes import ProductCreateRequest, QuoteCreateRequest
from crm.schemas.tasks import TaskCreateRequest
from crm.services.customer_service import CustomerService
from crm.services.document_service import DocumentService
from crm.services.storage import LocalFileStorage


@pytest.fixture
def as_admin(monkeypatch, make_user, patch_db_session):
    admin = make_user("Admin")
    user = CurrentUser(user_id=admin.id, role="admin", claims={})
    for module in (documents, lead_sources, quotes, tasks):
        patch_db_session(module)
        monkeypatch.setattr(module, "require_auth", lambda authorization, scopes: user)
    return user


def test_health_endpoint_works():
    assert health.health()["status"] == "ok"


def test_lead_source_delete_in_use_returns_not_deleted(session, stages, as_admin):
    source = lead_sources.create_lead_source(NameRequest(name="Website"), authorization="x")["item"]
    CustomerService(db=session).create({"first_name": "Ada", "lead_source_id": source["id"]})

    response = lead_sources.delete_lead_source(source["id"], authorization="x")

    assert response["deleted"] is False
    assert response["notifications"][0]["title"] == "Lead Source is in use by customers."


def test_task_create_and_complete(session, stages, as_admin):
    customer = CustomerService(db=session).create({"first_name": "Ada"})
    created = tasks.create_task(TaskCreateRequest(customer_id=customer.id, description="Call"), authorization="x")

    completed = tasks.complete_task(created["item"]["id"], authorization="x")

    assert completed["item"]["is_completed"] is True
    assert completed["notifications"][0]["title"] == "Task marked as completed"


def test_task_calendar_shows_employees_only_their_tasks(session, stages, as_admin, make_user, monkeypatch):
    employee = make_user("Eve")
    customer = CustomerService(db=session).create({"first_name": "Ada"})
    mine = tasks.create_task(
        TaskCreateRequest(customer_id=customer.id, description="Call", user_id=employee.id, due_date=date(2026, 3, 1)),
        authorization="x",
    )["item"]
    tasks.create_task(
        TaskCreateRequest(customer_id=customer.id, description="Visit", due_date=date(2026, 3, 2)),
        authorization="x",
    )

    as_admin_view = tasks.task_calendar(start=date(2026, 3, 1), end=date(2026, 3, 2), authorization="x")
    monkeypatch.setattr(
        tasks, "require_auth", lambda authorization, scopes: CurrentUser(user_id=employee.id, role="employee", claims={})
    )
    as_employee_view = tasks.task_calendar(start=date(2026, 3, 1), end=date(2026, 3, 2), authorization="x")

    assert len(as_admin_view["items"]) == 2
    assert [item["id"] for item in as_employee_view["items"]] == [mine["id"]]
    assert as_employee_view["items"][0]["start"] == date(2026, 3, 1)


def test_quote_totals_are_returned_as_decimals(session, stages, as_admin):
    customer = CustomerService(db=session).create({"first_name": "Ada"})
    product = quotes.create_product(ProductCreateRequest(name="Product 1", price="10.00"), authorization="x")["item"]

    created = quotes.create_quote(
        QuoteCreateRequest(customer_id=customer.id, taxes="10", lines=[{"product_id": product["id"], "quantity": 3}]),
        authorization="x",
    )

    assert str(created["item"]["subtotal"]) == "30.00"
    assert str(created["item"]["total"]) == "33.00"


def test_document_upload_rejects_invalid_base64(session, stages, as_admin):
    with pytest.raises(HTTPException) as exc:
        documents.attach_document(
            1,
            DocumentUploadRequest(filename="a.txt", content_base64="***"),
            authorization="x",
        )
    assert exc.value.status_code == 422


def test_document_upload_and_delete(monkeypatch, session, stages, as_admin, tmp_path):
    storage = LocalFileStorage(tmp_path)
    monkeypatch.setattr(
        documents,
        "DocumentService",
        lambda db: DocumentService(db=db, storage=storage),
    )
    customer = CustomerService(db=session).create({"first_name": "Ada"})
    content = base64.b64encode(b"hello").decode("ascii")

    created = documents.attach_document(
        customer.id,
        DocumentUploadRequest(filename="notes.txt", content_base64=content),
        authorization="x",
    )
    path = created["item"]["file_path"]
    assert storage.exists(path)

    documents.delete_document(created["item"]["id"], authorization="x")
    assert not storage.exists(path)
