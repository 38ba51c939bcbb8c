from __future__ import annotations

from datetime import date

import pytest

from crm.core.exceptions import NotFoundError, ValidationError
from crm.services.customer_service import CustomerService
from crm.services.task_service import TaskService


def test_tasks_order_by_due_date_with_undated_last(session, stages, make_user):
    employee = make_user("Eve")
    customer = CustomerService(db=session).create({"first_name": "Ada"})
    service = TaskService(db=session)
    undated = service.create(customer.id, "Send brochure", user_id=employee.id)
    late = service.create(customer.id, "Follow up", user_id=employee.id, due_date=date(2026, 3, 2))
    early = service.create(customer.id, "Call", user_id=employee.id, due_date=date(2026, 3, 1))

    assert [task.id for task in service.list(user_id=employee.id)] == [early.id, late.id, undated.id]
    assert service.notifier.items[-1].title == "Task created successfully"


def test_complete_moves_task_between_customer_lists(session, stages):
    customer = CustomerService(db=session).create({"first_name": "Ada"})
    service = TaskService(db=session)
    task = service.create(customer.id, "Call back")

    service.complete(task.id)

    assert service.for_customer(customer.id, completed=False) == []
    assert [item.id for item in service.for_customer(customer.id, completed=True)] == [task.id]


def test_create_rejects_archived_customer_and_blank_description(session, stages):
    customers = CustomerService(db=session)
    customer = customers.create({"first_name": "Ada"})
    service = TaskService(db=session)

    with pytest.raises(ValidationError):
        service.create(customer.id, "   ")
    customers.delete(customer.id)
    with pytest.raises(ValidationError):
        service.create(customer.id, "Call")
    with pytest.raises(NotFoundError):
        service.create(999, "Call")


def test_delete_task(session, stages):
    customer = CustomerService(db=session).create({"first_name": "Ada"})
    service = TaskService(db=session)
    task = service.create(customer.id, "Call")
    service.delete(task.id)
    with pytest.raises(NotFoundError):
        service.get(task.id)


@pytest.fixture
def calendar_tasks(session, stages, make_user):
    eve = make_user("Eve")
    bob = make_user("Bob")
    customer = CustomerService(db=session).create({"first_name": "Ada"})
    service = TaskService(db=session)
    return {
        "eve": eve,
        "bob": bob,
        "before": service.create(customer.id, "Too early", user_id=eve.id, due_date=date(2026, 2, 28)),
        "first_day": service.create(customer.id, "<p>Call <b>Ada</b></p>", user_id=eve.id, due_date=date(2026, 3, 1)),
        "last_day": service.create(customer.id, "Send quote", user_id=eve.id, due_date=date(2026, 3, 31)),
        "after": service.create(customer.id, "Too late", user_id=eve.id, due_date=date(2026, 4, 1)),
        "bobs": service.create(customer.id, "Bob's visit", user_id=bob.id, due_date=date(2026, 3, 15)),
        "unassigned": service.create(customer.id, "Anyone", due_date=date(2026, 3, 10)),
        "undated": service.create(customer.id, "Someday", user_id=eve.id),
    }


def test_calendar_includes_both_range_ends(session, calendar_tasks):
    events = TaskService(db=session).calendar(
        date(2026, 3, 1), date(2026, 3, 31), viewer_id=calendar_tasks["eve"].id
    )

    assert [event.id for event in events] == [calendar_tasks["first_day"].id, calendar_tasks["last_day"].id]
    assert events[0].title == "Call Ada"
    assert (events[0].start, events[0].end) == (date(2026, 3, 1), date(2026, 3, 1))


def test_calendar_single_day_range(session, calendar_tasks):
    events = TaskService(db=session).calendar(date(2026, 3, 31), date(2026, 3, 31), viewer_is_admin=True)
    assert [event.id for event in events] == [calendar_tasks["last_day"].id]


def test_calendar_limits_non_admins_to_their_own_tasks(session, calendar_tasks):
    service = TaskService(db=session)

    bobs = service.calendar(date(2026, 3, 1), date(2026, 3, 31), viewer_id=calendar_tasks["bob"].id)
    everyone = service.calendar(date(2026, 3, 1), date(2026, 3, 31), viewer_is_admin=True)

    assert [event.id for event in bobs] == [calendar_tasks["bobs"].id]
    assert [event.id for event in everyone] == [
        calendar_tasks["first_day"].id,
        calendar_tasks["unassigned"].id,
        calendar_tasks["bobs"].id,
        calendar_tasks["last_day"].id,
    ]
    assert service.calendar(date(2026, 3, 1), date(2026, 3, 31), viewer_id=None) == []


def test_calendar_rejects_inverted_range(session, calendar_tasks):
    with pytest.raises(ValidationError):
        TaskService(db=session).calendar(date(2026, 3, 31), date(2026, 3, 1), viewer_is_admin=True)
