"""Customer model module."""

from __future__ import annotations

from sqlalchemy import Column, ForeignKey, Index, Integer, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from crm.models.base import Base, SoftDeleteMixin, TimestampMixin

customer_tag = Table(
    "customer_tag",
    Base.metadata,
    Column("customer_id", ForeignKey("customers.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
)


class Customer(Base, TimestampMixin, SoftDeleteMixin):
    __tablename__ = "customers"
    __table_args__ = (
        Index("idx_customers_pipeline_stage", "pipeline_stage_id"),
        Index("idx_customers_employee", "employee_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    first_name: Mapped[str | None] = mapped_column(String(255))
    last_name: Mapped[str | None] = mapped_column(String(255))
    email: Mapped[str | None] = mapped_column(String(320))
    phone_number: Mapped[str | None] = mapped_column(String(255))
    description: Mapped[str | None] = mapped_column(Text)
    lead_source_id: Mapped[int | None] = mapped_column(ForeignKey("lead_sources.id"))
    pipeline_stage_id: Mapped[int | None] = mapped_column(ForeignKey("pipeline_stages.id"))
    employee_id: Mapped[int | None] = mapped_column(ForeignKey("users.id"))

    lead_source = relationship("LeadSource", back_populates="customers")
    pipeline_stage = relationship("PipelineStage", back_populates="customers")
    employee = relationship("User", foreign_keys=[employee_id])
    tags = relationship("Tag", secondary=customer_tag, back_populates="customers", order_by="Tag.id")
    pipeline_stage_logs = relationship(
        "CustomerPipelineStage",
        back_populates="customer",
        order_by="[CustomerPipelineStage.created_at, CustomerPipelineStage.id]",
    )
    documents = relationship("Document", back_populates="customer", order_by="Document.id")
    custom_fields = relationship(
        "CustomFieldCustomer",
        back_populates="customer",
        cascade="all, delete-orphan",
        order_by="CustomFieldCustomer.id",
    )
    tasks = relationship("Task", back_populates="customer", order_by="Task.id")
    quotes = relationship("Quote", back_populates="customer", order_by="Quote.id")

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()
