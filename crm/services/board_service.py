"""Board view adapter: customers grouped into pipeline stage columns."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import select

from crm.core.config import get_config
from crm.models import Customer, CustomerPipelineStage
from crm.services.base_service import BaseService
from crm.services.pipeline_stage_service import PipelineStageService
from crm.services.stage_transition_service import StageTransitionService


@dataclass(frozen=True)
class BoardRecord:
    id: int
    title: str


@dataclass(frozen=True)
class BoardColumn:
    id: int
    title: str
    group: str
    records_id: str
    records: list[BoardRecord] = field(default_factory=list)


def _customer_title(customer: Any) -> str:
    first = getattr(customer, "first_name", None) or ""
    last = getattr(customer, "last_name", None) or ""
    return f"{first} {last}".strip()


def board_for(stages: Iterable[Any], customers: Iterable[Any], group: str = "customer-board") -> list[BoardColumn]:
    """Group `customers` under `stages`, keeping both input orders.

    Only group membership is represented; nothing positions a customer
    within its column.
    """
    customers = list(customers)
    columns: list[BoardColumn] = []
    for stage in stages:
        columns.append(
            BoardColumn(
                id=stage.id,
                title=stage.name,
                group=group,
                records_id=f"{group}-{stage.id}",
                records=[
                    BoardRecord(id=customer.id, title=_customer_title(customer))
                    for customer in customers
                    if customer.pipeline_stage_id == stage.id
                ],
            )
        )
    return columns


class BoardService(BaseService):
    def board(self) -> list[BoardColumn]:
        stages = PipelineStageService(db=self.db, notifier=self.notifier).list()
        stmt = select(Customer).where(Customer.deleted_at.is_(None)).order_by(Customer.id.asc())
        customers = self.db.scalars(stmt)
        return board_for(stages, customers, group=get_config().BOARD_GROUP)

    def move(self, customer_id: int, target_stage_id: int, actor_user_id: int | None = None) -> CustomerPipelineStage:
        """Handle a drop of `customer_id` into the column of `target_stage_id`."""
        transitions = StageTransitionService(db=self.db, notifier=self.notifier)
        return transitions.change_stage(customer_id, target_stage_id, notes=None, actor_user_id=actor_user_id)
