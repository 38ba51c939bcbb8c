"""Read side of the customer pipeline audit log."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.orm import Session, joinedload

from crm.models import Customer, CustomerPipelineStage
from crm.services.base_service import BaseService

SYSTEM_ACTOR_NAME = "System"


@dataclass(frozen=True)
class HistoryEntry:
    id: int
    customer_id: int
    created_at: datetime
    actor_name: str
    stage_name: str | None
    employee_name: str | None
    notes: str | None
    pipeline_stage_id: int | None
    employee_id: int | None
    user_id: int | None


def _to_history_entry(row: CustomerPipelineStage) -> HistoryEntry:
    return HistoryEntry(
        id=row.id,
        customer_id=row.customer_id,
        created_at=row.created_at,
        actor_name=row.user.name if row.user is not None else SYSTEM_ACTOR_NAME,
        stage_name=row.pipeline_stage.name if row.pipeline_stage is not None else None,
        employee_name=row.employee.name if row.employee is not None else None,
        notes=row.notes,
        pipeline_stage_id=row.pipeline_stage_id,
        employee_id=row.employee_id,
        user_id=row.user_id,
    )


class CustomerHistory:
    """Oldest-first history of one customer.

    Iterating runs a fresh query every time, so the same object can be
    iterated again and reflects entries appended in between.
    """

    def __init__(self, db: Session, customer_id: int) -> None:
        self._db = db
        self.customer_id = customer_id

    def _statement(self):
        return (
            select(CustomerPipelineStage)
            .options(
                joinedload(CustomerPipelineStage.pipeline_stage),
                joinedload(CustomerPipelineStage.employee),
                joinedload(CustomerPipelineStage.user),
            )
            .where(CustomerPipelineStage.customer_id == self.customer_id)
            .order_by(CustomerPipelineStage.created_at.asc(), CustomerPipelineStage.id.asc())
        )

    def __iter__(self) -> Iterator[HistoryEntry]:
        for row in self._db.scalars(self._statement()):
            yield _to_history_entry(row)


class AuditLogService(BaseService):
    def history_for(self, customer_id: int) -> CustomerHistory:
        # Archived customers keep a readable history.
        self._get_or_raise(Customer, customer_id, "Customer")
        return CustomerHistory(self.db, customer_id)

    def latest_for(self, customer_id: int) -> CustomerPipelineStage | None:
        stmt = (
            select(CustomerPipelineStage)
            .where(CustomerPipelineStage.customer_id == customer_id)
            .order_by(CustomerPipelineStage.created_at.desc(), CustomerPipelineStage.id.desc())
            .limit(1)
        )
        return self.db.scalars(stmt).first()

    def count_for(self, customer_id: int) -> int:
        stmt = select(func.count(CustomerPipelineStage.id)).where(CustomerPipelineStage.customer_id == customer_id)
        return int(self.db.scalar(stmt) or 0)
