"""Custom field definitions and per-customer values."""

from __future__ import annotations

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from crm.models.base import Base, TimestampMixin


class CustomField(Base, TimestampMixin):
    __tablename__ = "custom_fields"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)


class CustomFieldCustomer(Base, TimestampMixin):
    __tablename__ = "custom_field_customer"
    __table_args__ = (
        UniqueConstraint("customer_id", "custom_field_id", name="uq_custom_field_customer"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    customer_id: Mapped[int] = mapped_column(ForeignKey("customers.id"), nullable=False)
    custom_field_id: Mapped[int] = mapped_column(ForeignKey("custom_fields.id"), nullable=False)
    value: Mapped[str] = mapped_column(String(255), nullable=False)

    customer = relationship("Customer", back_populates="custom_fields")
    custom_field = relationship("CustomField")
