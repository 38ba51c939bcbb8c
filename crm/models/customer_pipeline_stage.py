"""Customer pipeline stage audit log model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from crm.models.base import Base, utcnow


class CustomerPipelineStage(Base):
    """Immutable record of one stage and/or employee transition.

    Rows are only ever inserted. A non-null `pipeline_stage_id` marks a stage
    change, a non-null `employee_id` marks a reassignment, and the creation
    entry may carry both. A null `user_id` means the entry was system generated.
    """

    __tablename__ = "customer_pipeline_stages"
    __table_args__ = (Index("idx_customer_pipeline_stages_customer_created", "customer_id", "created_at"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    customer_id: Mapped[int] = mapped_column(ForeignKey("customers.id"), nullable=False)
    pipeline_stage_id: Mapped[int | None] = mapped_column(ForeignKey("pipeline_stages.id", ondelete="SET NULL"))
    employee_id: Mapped[int | None] = mapped_column(ForeignKey("users.id"))
    user_id: Mapped[int | None] = mapped_column(ForeignKey("users.id"))
    notes: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    customer = relationship("Customer", back_populates="pipeline_stage_logs")
    pipeline_stage = relationship("PipelineStage")
    employee = relationship("User", foreign_keys=[employee_id])
    user = relationship("User", foreign_keys=[user_id])
