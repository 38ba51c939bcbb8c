from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from crm.schemas.customers import (
    CustomerCreateRequest,
    CustomerUpdateRequest,
    EmployeeChangeRequest,
    StageChangeRequest,
)
from crm.schemas.quotes import QuoteCreateRequest


def test_customer_update_refuses_pipeline_stage_field():
    with pytest.raises(ValidationError):
        CustomerUpdateRequest(pipeline_stage_id=2)


def test_customer_update_tracks_only_sent_fields():
    payload = CustomerUpdateRequest(employee_id=None, first_name="Ada")
    assert payload.model_dump(exclude_unset=True) == {"employee_id": None, "first_name": "Ada"}


def test_customer_create_coerces_custom_field_keys():
    payload = CustomerCreateRequest.model_validate({"first_name": "Ada", "custom_fields": {"3": "ACME"}})
    assert payload.custom_fields == {3: "ACME"}
    assert payload.tag_ids == []


def test_stage_change_requires_positive_stage_id():
    with pytest.raises(ValidationError):
        StageChangeRequest(pipeline_stage_id=0)


def test_quote_defaults_to_twenty_percent_tax():
    payload = QuoteCreateRequest(customer_id=1, lines=[{"product_id": 1}])
    assert payload.taxes == Decimal("20")
    assert payload.lines[0].quantity == 1


def test_employee_change_carries_no_notes():
    assert EmployeeChangeRequest(employee_id=None).employee_id is None
    with pytest.raises(ValidationError):
        EmployeeChangeRequest.model_validate({"employee_id": 2, "notes": "Territory"})
