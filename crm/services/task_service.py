"""Customer follow-up tasks."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

from sqlalchemy import select

from crm.core.exceptions import ValidationError
from crm.models import Customer, Task, User
from crm.services.base_service import BaseService
from crm.utils.validators import sanitize_text, strip_tags

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalendarEvent:
    """One task on the calendar; a task spans its due date only."""

    id: int
    title: str
    start: date
    end: date
    customer_id: int


class TaskService(BaseService):
    @staticmethod
    def _ordering():
        # Due date ascending with undated tasks last, newest first within a day.
        return (Task.due_date.is_(None), Task.due_date.asc(), Task.id.desc())

    def list(self, user_id: int | None = None) -> list[Task]:
        stmt = select(Task)
        if user_id is not None:
            stmt = stmt.where(Task.user_id == user_id)
        return list(self.db.scalars(stmt.order_by(*self._ordering())))

    def for_customer(self, customer_id: int, completed: bool) -> list[Task]:
        stmt = select(Task).where(Task.customer_id == customer_id, Task.is_completed.is_(completed))
        return list(self.db.scalars(stmt.order_by(*self._ordering())))

    def calendar(
        self,
        start: date,
        end: date,
        viewer_id: int | None = None,
        viewer_is_admin: bool = False,
    ) -> list[CalendarEvent]:
        """Tasks due within `[start, end]`, both ends included.

        Non-admin viewers only see tasks assigned to them.
        """
        if end < start:
            raise ValidationError("Calendar range end must not be before its start.")
        stmt = select(Task).where(Task.due_date >= start, Task.due_date <= end)
        if not viewer_is_admin:
            if viewer_id is None:
                return []
            stmt = stmt.where(Task.user_id == viewer_id)
        tasks = self.db.scalars(stmt.order_by(Task.due_date.asc(), Task.id.asc()))
        return [
            CalendarEvent(
                id=task.id,
                title=strip_tags(task.description),
                start=task.due_date,
                end=task.due_date,
                customer_id=task.customer_id,
            )
            for task in tasks
        ]

    def get(self, task_id: int) -> Task:
        return self._get_or_raise(Task, task_id, "Task")

    def create(
        self,
        customer_id: int,
        description: str,
        user_id: int | None = None,
        due_date: date | None = None,
    ) -> Task:
        customer = self._get_or_raise(Customer, customer_id, "Customer")
        if customer.is_deleted:
            raise ValidationError("Tasks cannot be added to archived customers.")
        if user_id is not None:
            self._get_or_raise(User, user_id, "Employee")
        cleaned = sanitize_text(description, max_len=65535)
        if not cleaned:
            raise ValidationError("Task description is required.")

        task = Task(customer_id=customer.id, user_id=user_id, description=cleaned, due_date=due_date)
        self.db.add(task)
        self.commit()
        self.db.refresh(task)
        logger.info("task.created", extra={"event": "task.created", "task_id": task.id, "customer_id": customer.id})
        self.notifier.success("Task created successfully")
        return task

    def complete(self, task_id: int) -> Task:
        task = self.get(task_id)
        task.is_completed = True
        self.commit()
        self.db.refresh(task)
        self.notifier.success("Task marked as completed")
        return task

    def delete(self, task_id: int) -> None:
        task = self.get(task_id)
        self.db.delete(task)
        self.commit()
