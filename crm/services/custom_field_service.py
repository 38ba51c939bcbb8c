"""Custom field definitions shared by all customers."""

from __future__ import annotations

from sqlalchemy import func, select

from crm.core.exceptions import InUseError, ValidationError
from crm.models import CustomField, CustomFieldCustomer
from crm.services.base_service import BaseService
from crm.utils.validators import sanitize_text


class CustomFieldService(BaseService):
    def list(self) -> list[CustomField]:
        return list(self.db.scalars(select(CustomField).order_by(CustomField.id)))

    def get(self, custom_field_id: int) -> CustomField:
        return self._get_or_raise(CustomField, custom_field_id, "Custom field")

    def create(self, name: str) -> CustomField:
        cleaned = sanitize_text(name, max_len=255)
        if not cleaned:
            raise ValidationError("Custom field name is required.")
        custom_field = CustomField(name=cleaned)
        self.db.add(custom_field)
        self.commit()
        self.db.refresh(custom_field)
        return custom_field

    def rename(self, custom_field_id: int, name: str) -> CustomField:
        custom_field = self.get(custom_field_id)
        cleaned = sanitize_text(name, max_len=255)
        if not cleaned:
            raise ValidationError("Custom field name is required.")
        custom_field.name = cleaned
        self.commit()
        self.db.refresh(custom_field)
        return custom_field

    def delete(self, custom_field_id: int) -> None:
        custom_field = self.get(custom_field_id)
        stmt = select(func.count(CustomFieldCustomer.id)).where(
            CustomFieldCustomer.custom_field_id == custom_field.id
        )
        if self.db.scalar(stmt):
            raise InUseError("Custom Field is in use by customers.")
        self.db.delete(custom_field)
        self.commit()
