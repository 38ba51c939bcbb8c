"""Customer CRUD, archive tabs and custom field values."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy import func, or_, select
from sqlalchemy.sql import Select

from crm.core.exceptions import NotFoundError, ValidationError
from crm.models import (
    CustomField,
    CustomFieldCustomer,
    Customer,
    CustomerTab,
    LeadSource,
    PipelineStage,
    Tag,
    User,
)
from crm.models.base import utcnow
from crm.services.base_service import BaseService
from crm.services.pipeline_stage_service import PipelineStageService
from crm.services.stage_transition_service import StageTransitionService
from crm.utils.validators import optional_text, slugify

logger = logging.getLogger(__name__)

CONTACT_FIELDS = ("first_name", "last_name", "email", "phone_number", "description")


@dataclass(frozen=True)
class CustomerTabCount:
    key: str
    label: str
    count: int
    pipeline_stage_id: int | None = None


class CustomerService(BaseService):
    """Customer lifecycle.

    Stage moves are not accepted here; they go through
    `StageTransitionService.change_stage` so every move is logged. Employee
    changes on update are routed through `change_employee` for the same reason.
    """

    @property
    def transitions(self) -> StageTransitionService:
        return StageTransitionService(db=self.db, notifier=self.notifier)

    def get(self, customer_id: int, include_deleted: bool = False) -> Customer:
        customer = self.db.get(Customer, customer_id)
        if customer is None or (customer.is_deleted and not include_deleted):
            raise NotFoundError(f"Customer not found: {customer_id}")
        return customer

    def _require(self, model: type, record_id: int | None, label: str) -> None:
        if record_id is not None:
            self._get_or_raise(model, record_id, label)

    def _load_tags(self, tag_ids: list[int]) -> list[Tag]:
        if not tag_ids:
            return []
        tags = list(self.db.scalars(select(Tag).where(Tag.id.in_(tag_ids)).order_by(Tag.id)))
        missing = set(tag_ids) - {tag.id for tag in tags}
        if missing:
            raise NotFoundError(f"Tag not found: {sorted(missing)[0]}")
        return tags

    def _apply_custom_fields(self, customer: Customer, values: dict[int, str]) -> None:
        existing = {item.custom_field_id: item for item in customer.custom_fields}
        for field_id, value in values.items():
            self._get_or_raise(CustomField, field_id, "Custom field")
            cleaned = optional_text(value, max_len=255)
            if cleaned is None:
                raise ValidationError(f"Custom field {field_id} requires a value.")
            if field_id in existing:
                existing[field_id].value = cleaned
            else:
                customer.custom_fields.append(CustomFieldCustomer(custom_field_id=field_id, value=cleaned))

    def create(self, data: dict[str, Any], actor_user_id: int | None = None) -> Customer:
        """Insert a customer and its creation audit entry in one transaction.

        Without an explicit stage the registry default is used.
        """
        payload = dict(data)
        stage_id = payload.get("pipeline_stage_id")
        if stage_id is None:
            stage_id = PipelineStageService(db=self.db, notifier=self.notifier).default_stage().id
        else:
            self._require(PipelineStage, stage_id, "Pipeline stage")
        self._require(LeadSource, payload.get("lead_source_id"), "Lead source")
        self._require(User, payload.get("employee_id"), "Employee")
        self._require(User, actor_user_id, "User")

        customer = Customer(
            **{name: optional_text(payload.get(name)) for name in CONTACT_FIELDS},
            lead_source_id=payload.get("lead_source_id"),
            pipeline_stage_id=stage_id,
            employee_id=payload.get("employee_id"),
        )
        customer.tags = self._load_tags(payload.get("tag_ids") or [])
        self._apply_custom_fields(customer, payload.get("custom_fields") or {})

        try:
            self.db.add(customer)
            self.db.flush()
            self.transitions.on_customer_created(customer, actor_user_id=actor_user_id)
        except Exception:
            self.rollback()
            raise
        self.commit()
        self.db.refresh(customer)

        logger.info(
            "customer.created",
            extra={"event": "customer.created", "customer_id": customer.id, "pipeline_stage_id": stage_id},
        )
        self.notifier.success("Customer created")
        return customer

    def update(self, customer_id: int, data: dict[str, Any], actor_user_id: int | None = None) -> Customer:
        payload = dict(data)
        if "pipeline_stage_id" in payload:
            raise ValidationError("Pipeline stage changes must go through the stage transition action.")

        customer = self.get(customer_id)
        if "lead_source_id" in payload:
            self._require(LeadSource, payload["lead_source_id"], "Lead source")
        if "employee_id" in payload:
            self._require(User, payload["employee_id"], "Employee")
        tags = self._load_tags(payload["tag_ids"] or []) if "tag_ids" in payload else None

        for name in CONTACT_FIELDS:
            if name in payload:
                setattr(customer, name, optional_text(payload[name]))
        if "lead_source_id" in payload:
            customer.lead_source_id = payload["lead_source_id"]
        if tags is not None:
            customer.tags = tags
        if payload.get("custom_fields"):
            self._apply_custom_fields(customer, payload["custom_fields"])

        if "employee_id" in payload:
            # Commits the contact changes together with any reassignment entry.
            self.transitions.change_employee(customer.id, payload["employee_id"], actor_user_id=actor_user_id)
        else:
            self.commit()
            self.notifier.success("Customer updated")
        self.db.refresh(customer)
        return customer

    def delete(self, customer_id: int) -> Customer:
        customer = self.get(customer_id)
        customer.deleted_at = utcnow()
        self.commit()
        logger.info("customer.archived", extra={"event": "customer.archived", "customer_id": customer_id})
        self.notifier.success("Customer archived")
        return customer

    def restore(self, customer_id: int) -> Customer:
        customer = self.get(customer_id, include_deleted=True)
        if not customer.is_deleted:
            return customer
        customer.deleted_at = None
        self.commit()
        logger.info("customer.restored", extra={"event": "customer.restored", "customer_id": customer_id})
        self.notifier.success("Customer restored")
        return customer

    def set_custom_field(self, customer_id: int, custom_field_id: int, value: str) -> CustomFieldCustomer:
        customer = self.get(customer_id)
        self._apply_custom_fields(customer, {custom_field_id: value})
        self.commit()
        return next(item for item in customer.custom_fields if item.custom_field_id == custom_field_id)

    def _stage_tabs(self) -> dict[str, PipelineStage]:
        tabs: dict[str, PipelineStage] = {}
        for stage in PipelineStageService(db=self.db, notifier=self.notifier).list():
            key = slugify(stage.name) or f"stage-{stage.id}"
            if key in tabs or key in {tab.value for tab in CustomerTab}:
                key = f"{key}-{stage.id}"
            tabs[key] = stage
        return tabs

    def _tab_statement(self, tab: str, viewer_id: int | None) -> Select:
        stmt = select(Customer)
        if tab == CustomerTab.ARCHIVED.value:
            return stmt.where(Customer.deleted_at.is_not(None))

        stmt = stmt.where(Customer.deleted_at.is_(None))
        if tab == CustomerTab.ALL.value:
            return stmt
        if tab == CustomerTab.MY.value:
            return stmt.where(Customer.employee_id == viewer_id)

        stage = self._stage_tabs().get(tab)
        if stage is None:
            raise ValidationError(f"Unknown customer tab: {tab}")
        return stmt.where(Customer.pipeline_stage_id == stage.id)

    def list(self, tab: str = CustomerTab.ALL.value, viewer_id: int | None = None, search: str | None = None) -> list[Customer]:
        stmt = self._tab_statement(tab, viewer_id)
        term = optional_text(search, max_len=255)
        if term:
            pattern = f"%{term}%"
            stmt = stmt.where(
                or_(
                    Customer.first_name.ilike(pattern),
                    Customer.last_name.ilike(pattern),
                    Customer.email.ilike(pattern),
                    Customer.phone_number.ilike(pattern),
                )
            )
        return list(self.db.scalars(stmt.order_by(Customer.id.asc())))

    def _count(self, stmt: Select) -> int:
        return int(self.db.scalar(select(func.count()).select_from(stmt.subquery())) or 0)

    def tab_counts(self, viewer_id: int | None = None, viewer_is_admin: bool = False) -> list[CustomerTabCount]:
        """Tabs in display order: all, my (non-admins only), one per stage, archived."""
        counts = [CustomerTabCount("all", "All Customers", self._count(self._tab_statement("all", viewer_id)))]
        if not viewer_is_admin:
            counts.append(CustomerTabCount("my", "My Customers", self._count(self._tab_statement("my", viewer_id))))
        for key, stage in self._stage_tabs().items():
            stmt = select(Customer).where(Customer.deleted_at.is_(None), Customer.pipeline_stage_id == stage.id)
            counts.append(CustomerTabCount(key, stage.name, self._count(stmt), pipeline_stage_id=stage.id))
        counts.append(CustomerTabCount("archived", "Archived", self._count(self._tab_statement("archived", viewer_id))))
        return counts
