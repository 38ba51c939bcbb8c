from __future__ import annotations

import pytest
from fastapi import HTTPException

from crm.api.v1 import board, customers, pipeline_stages
from crm.auth.jwt import create_token_pair
from crm.core.config import get_config
from crm.core.dependencies import CurrentUser
from crm.schemas.board import BoardMoveRequest
from crm.schemas.customers import CustomerCreateRequest, EmployeeChangeRequest, StageChangeRequest
from crm.services.customer_service import CustomerService


@pytest.fixture
def as_admin(monkeypatch, make_user, patch_db_session):
    admin = make_user("Admin")
    user = CurrentUser(user_id=admin.id, role="admin", claims={})
    for module in (customers, board, pipeline_stages):
        patch_db_session(module)
        monkeypatch.setattr(module, "require_auth", lambda authorization, scopes: user)
    return user


def test_customer_endpoints_require_auth():
    with pytest.raises(HTTPException) as exc:
        customers.customer_tabs(authorization=None)
    assert exc.value.status_code == 401


def test_employee_token_cannot_assign_employees(patch_db_session):
    patch_db_session(customers)
    token = create_token_pair(user_id=5, role="employee", secret=get_config().JWT_SECRET).access_token

    with pytest.raises(HTTPException) as exc:
        customers.assign_employee(1, EmployeeChangeRequest(employee_id=2), authorization=f"Bearer {token}")
    assert exc.value.status_code == 403


def test_create_then_move_stage_returns_notifications(session, stages, as_admin):
    created = customers.create_customer(CustomerCreateRequest(first_name="Ada", last_name="Lovelace"), authorization="x")
    customer_id = created["item"]["id"]
    assert created["item"]["pipeline_stage_id"] == stages[0].id
    assert created["notifications"][0]["title"] == "Customer created"

    form = customers.move_stage_form(customer_id, authorization="x")
    assert form["suggested_stage_id"] == stages[1].id

    moved = customers.move_stage(
        customer_id,
        StageChangeRequest(pipeline_stage_id=stages[2].id, notes="Sent proposal"),
        authorization="x",
    )
    assert moved["pipeline_stage_id"] == stages[2].id
    assert moved["notifications"] == [
        {"level": "success", "title": "Ada Lovelace Pipeline Stage Updated", "body": None}
    ]

    history = customers.customer_history(customer_id, authorization="x")["items"]
    assert [item["stage_name"] for item in history] == ["Lead", "Proposal Made"]
    assert history[-1]["notes"] == "Sent proposal"
    assert history[-1]["actor_name"] == "Admin"


def test_move_stage_unknown_stage_maps_to_404(session, stages, as_admin):
    customer = CustomerService(db=session).create({"first_name": "Ada"})
    with pytest.raises(HTTPException) as exc:
        customers.move_stage(customer.id, StageChangeRequest(pipeline_stage_id=999), authorization="x")
    assert exc.value.status_code == 404


def test_list_with_unknown_tab_maps_to_422(session, stages, as_admin):
    with pytest.raises(HTTPException) as exc:
        customers.list_customers(tab="nope", search=None, authorization="x")
    assert exc.value.status_code == 422


def test_board_move_and_read(session, stages, as_admin):
    customer = CustomerService(db=session).create({"first_name": "Ada"})

    result = board.move_card(
        BoardMoveRequest(customer_id=customer.id, pipeline_stage_id=stages[1].id),
        authorization="x",
    )
    columns = board.get_board(authorization="x")["columns"]

    assert result["pipeline_stage_id"] == stages[1].id
    assert [record["id"] for record in columns[1]["records"]] == [customer.id]
    assert columns[1]["records_id"] == f"customer-board-{stages[1].id}"


def test_delete_stage_in_use_is_recovered_with_danger_notification(session, stages, as_admin):
    CustomerService(db=session).create({"first_name": "Ada"})

    response = pipeline_stages.delete_stage(stages[0].id, authorization="x")

    assert response["deleted"] is False
    assert response["notifications"][0]["level"] == "danger"
    assert len(pipeline_stages.list_stages(authorization="x")["items"]) == 3


def test_move_stage_by_unknown_actor_is_not_found(session, stages, as_admin, monkeypatch):
    created = customers.create_customer(CustomerCreateRequest(first_name="Ada"), authorization="x")
    ghost = CurrentUser(user_id=999, role="admin", claims={})
    monkeypatch.setattr(customers, "require_auth", lambda authorization, scopes: ghost)

    with pytest.raises(HTTPException) as exc:
        customers.move_stage(created["item"]["id"], StageChangeRequest(pipeline_stage_id=stages[1].id), authorization="x")

    assert exc.value.status_code == 404
    assert [item["stage_name"] for item in customers.customer_history(created["item"]["id"], authorization="x")["items"]] == ["Lead"]
