"""Stage and employee transitions for customers, with their audit entries."""

from __future__ import annotations

import logging

from sqlalchemy import select

from crm.core.exceptions import NotFoundError
from crm.core.logging import LogContext, build_log_event
from crm.models import Customer, CustomerPipelineStage, PipelineStage, User
from crm.services.base_service import BaseService

logger = logging.getLogger(__name__)

EMPLOYEE_REMOVED_NOTE = "Employee removed"


def _context(customer_id: int, actor_user_id: int | None) -> LogContext:
    return LogContext(
        user_id=str(actor_user_id) if actor_user_id is not None else None,
        customer_id=str(customer_id),
    )


class StageTransitionService(BaseService):
    """Applies stage/employee changes and appends exactly one audit entry per change.

    The customer update and its audit entry are committed together; any
    failure rolls both back.
    """

    def _get_active_customer(self, customer_id: int) -> Customer:
        customer = self.db.get(Customer, customer_id)
        if customer is None or customer.is_deleted:
            raise NotFoundError(f"Customer not found: {customer_id}")
        return customer

    def _require_actor(self, actor_user_id: int | None) -> None:
        if actor_user_id is not None:
            self._get_or_raise(User, actor_user_id, "User")

    def on_customer_created(self, customer: Customer, actor_user_id: int | None = None) -> CustomerPipelineStage:
        """Append the creation entry for a freshly flushed customer.

        Does not commit: the caller owns the transaction that inserted the
        customer, so the row and its first entry land together.
        """
        entry = CustomerPipelineStage(
            customer_id=customer.id,
            pipeline_stage_id=customer.pipeline_stage_id,
            employee_id=customer.employee_id,
            user_id=actor_user_id,
        )
        self.db.add(entry)
        self.db.flush()
        return entry

    def change_stage(
        self,
        customer_id: int,
        new_stage_id: int,
        notes: str | None = None,
        actor_user_id: int | None = None,
    ) -> CustomerPipelineStage:
        """Move a customer to `new_stage_id`.

        Re-selecting the current stage is accepted and logged again: entries
        record events, not diffs.
        """
        customer = self._get_active_customer(customer_id)
        stage = self.db.get(PipelineStage, new_stage_id)
        if stage is None:
            raise NotFoundError(f"Pipeline stage not found: {new_stage_id}")
        self._require_actor(actor_user_id)

        previous_stage_id = customer.pipeline_stage_id
        customer.pipeline_stage_id = stage.id
        entry = CustomerPipelineStage(
            customer_id=customer.id,
            pipeline_stage_id=stage.id,
            employee_id=None,
            user_id=actor_user_id,
            notes=notes,
        )
        self.db.add(entry)
        self.commit()
        self.db.refresh(entry)

        logger.info(
            "stage.changed",
            extra=build_log_event(
                "stage.changed",
                _context(customer.id, actor_user_id),
                from_stage_id=previous_stage_id,
                to_stage_id=stage.id,
                entry_id=entry.id,
            ),
        )
        self.notifier.success(f"{customer.full_name} Pipeline Stage Updated")
        return entry

    def last_logged_employee_id(self, customer_id: int) -> int | None:
        """Employee of the newest entry that recorded one, or None."""
        stmt = (
            select(CustomerPipelineStage.employee_id)
            .where(
                CustomerPipelineStage.customer_id == customer_id,
                CustomerPipelineStage.employee_id.is_not(None),
            )
            .order_by(CustomerPipelineStage.created_at.desc(), CustomerPipelineStage.id.desc())
            .limit(1)
        )
        return self.db.scalar(stmt)

    def change_employee(
        self,
        customer_id: int,
        new_employee_id: int | None,
        actor_user_id: int | None = None,
    ) -> bool:
        """Assign (or with None, remove) the customer's employee.

        Whether an entry is appended is decided against the last entry that
        recorded an employee, not against `Customer.employee_id`. Removing an
        employee therefore logs again on every call, and re-assigning the
        previously logged employee after a removal is not logged. Returns True
        when an entry was appended.
        """
        customer = self._get_active_customer(customer_id)
        if new_employee_id is not None and self.db.get(User, new_employee_id) is None:
            raise NotFoundError(f"Employee not found: {new_employee_id}")
        self._require_actor(actor_user_id)

        previous_employee_id = self.last_logged_employee_id(customer.id)
        customer.employee_id = new_employee_id

        logged = previous_employee_id != new_employee_id
        if logged:
            entry_notes = EMPLOYEE_REMOVED_NOTE if new_employee_id is None else ""
            self.db.add(
                CustomerPipelineStage(
                    customer_id=customer.id,
                    pipeline_stage_id=None,
                    employee_id=new_employee_id,
                    user_id=actor_user_id,
                    notes=entry_notes,
                )
            )
        self.commit()

        logger.info(
            "employee.changed",
            extra=build_log_event(
                "employee.changed",
                _context(customer.id, actor_user_id),
                from_employee_id=previous_employee_id,
                to_employee_id=new_employee_id,
                logged=logged,
            ),
        )
        self.notifier.success(f"{customer.full_name} Employee Updated")
        return logged
