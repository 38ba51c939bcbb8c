"""Lead source lookup management."""

from __future__ import annotations

import logging

from sqlalchemy import func, select

from crm.core.exceptions import InUseError, ValidationError
from crm.models import Customer, LeadSource
from crm.services.base_service import BaseService
from crm.utils.validators import sanitize_text

logger = logging.getLogger(__name__)


class LeadSourceService(BaseService):
    def list(self) -> list[LeadSource]:
        return list(self.db.scalars(select(LeadSource).order_by(LeadSource.id)))

    def get(self, lead_source_id: int) -> LeadSource:
        return self._get_or_raise(LeadSource, lead_source_id, "Lead source")

    def create(self, name: str) -> LeadSource:
        cleaned = sanitize_text(name, max_len=255)
        if not cleaned:
            raise ValidationError("Lead source name is required.")
        lead_source = LeadSource(name=cleaned)
        self.db.add(lead_source)
        self.commit()
        self.db.refresh(lead_source)
        return lead_source

    def rename(self, lead_source_id: int, name: str) -> LeadSource:
        lead_source = self.get(lead_source_id)
        cleaned = sanitize_text(name, max_len=255)
        if not cleaned:
            raise ValidationError("Lead source name is required.")
        lead_source.name = cleaned
        self.commit()
        self.db.refresh(lead_source)
        return lead_source

    def delete(self, lead_source_id: int) -> None:
        lead_source = self.get(lead_source_id)
        in_use = self.db.scalar(select(func.count(Customer.id)).where(Customer.lead_source_id == lead_source.id))
        if in_use:
            raise InUseError("Lead Source is in use by customers.")
        self.db.delete(lead_source)
        self.commit()
        logger.info("lead_source.deleted", extra={"event": "lead_source.deleted", "lead_source_id": lead_source_id})
