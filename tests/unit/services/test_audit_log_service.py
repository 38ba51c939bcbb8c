from __future__ import annotations

import pytest

from crm.core.exceptions import NotFoundError
from crm.services.audit_log_service import SYSTEM_ACTOR_NAME, AuditLogService
from crm.services.customer_service import CustomerService
from crm.services.pipeline_stage_service import PipelineStageService
from crm.services.stage_transition_service import StageTransitionService


def test_history_is_oldest_first_with_display_names(session, stages, make_user):
    actor = make_user("Manager")
    employee = make_user("Eve")
    customer = CustomerService(db=session).create({"first_name": "Ada"})
    transitions = StageTransitionService(db=session)
    transitions.change_stage(customer.id, stages[1].id, notes="Intro call", actor_user_id=actor.id)
    transitions.change_employee(customer.id, employee.id, actor_user_id=actor.id)

    history = list(AuditLogService(db=session).history_for(customer.id))

    assert [entry.stage_name for entry in history] == ["Lead", "Contact Made", None]
    assert [entry.actor_name for entry in history] == [SYSTEM_ACTOR_NAME, "Manager", "Manager"]
    assert history[1].notes == "Intro call"
    assert history[2].employee_name == "Eve"
    assert [entry.id for entry in history] == sorted(entry.id for entry in history)


def test_history_reflects_entries_appended_between_iterations(session, stages):
    customer = CustomerService(db=session).create({"first_name": "Ada"})
    history = AuditLogService(db=session).history_for(customer.id)
    assert len(list(history)) == 1

    StageTransitionService(db=session).change_stage(customer.id, stages[2].id)

    assert len(list(history)) == 2


def test_history_omits_stage_name_after_stage_deletion(session, stages):
    customer = CustomerService(db=session).create({"first_name": "Ada", "pipeline_stage_id": stages[1].id})
    StageTransitionService(db=session).change_stage(customer.id, stages[2].id)
    PipelineStageService(db=session).delete(stages[1].id)
    session.expire_all()

    history = list(AuditLogService(db=session).history_for(customer.id))
    assert [entry.stage_name for entry in history] == [None, "Proposal Made"]


def test_history_for_archived_customer_is_readable(session, stages):
    customers = CustomerService(db=session)
    customer = customers.create({"first_name": "Ada"})
    customers.delete(customer.id)

    assert AuditLogService(db=session).count_for(customer.id) == 1
    assert len(list(AuditLogService(db=session).history_for(customer.id))) == 1


def test_history_for_unknown_customer_raises(session, stages):
    with pytest.raises(NotFoundError):
        AuditLogService(db=session).history_for(404)


def test_latest_for_returns_newest_entry(session, stages):
    customer = CustomerService(db=session).create({"first_name": "Ada"})
    service = AuditLogService(db=session)
    assert service.latest_for(customer.id).pipeline_stage_id == stages[0].id

    StageTransitionService(db=session).change_stage(customer.id, stages[1].id)
    assert service.latest_for(customer.id).pipeline_stage_id == stages[1].id
    assert service.latest_for(12345) is None
