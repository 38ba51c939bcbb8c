"""Customer tag management."""

from __future__ import annotations

from sqlalchemy import select

from crm.core.exceptions import ValidationError
from crm.models import Tag
from crm.services.base_service import BaseService
from crm.utils.validators import optional_text, sanitize_text


class TagService(BaseService):
    def list(self) -> list[Tag]:
        return list(self.db.scalars(select(Tag).order_by(Tag.id)))

    def get(self, tag_id: int) -> Tag:
        return self._get_or_raise(Tag, tag_id, "Tag")

    def create(self, name: str, color: str | None = None) -> Tag:
        cleaned = sanitize_text(name, max_len=255)
        if not cleaned:
            raise ValidationError("Tag name is required.")
        tag = Tag(name=cleaned, color=optional_text(color, max_len=32))
        self.db.add(tag)
        self.commit()
        self.db.refresh(tag)
        return tag

    def update(self, tag_id: int, name: str | None = None, color: str | None = None) -> Tag:
        tag = self.get(tag_id)
        if name is not None:
            cleaned = sanitize_text(name, max_len=255)
            if not cleaned:
                raise ValidationError("Tag name is required.")
            tag.name = cleaned
        if color is not None:
            tag.color = optional_text(color, max_len=32)
        self.commit()
        self.db.refresh(tag)
        return tag

    def delete(self, tag_id: int) -> None:
        tag = self.get(tag_id)
        # Detaches the tag from customers through the association table.
        tag.customers.clear()
        self.db.delete(tag)
        self.commit()
