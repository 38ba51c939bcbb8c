"""Pipeline stage model module."""

from __future__ import annotations

from sqlalchemy import Boolean, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from crm.models.base import Base, TimestampMixin


class PipelineStage(Base, TimestampMixin):
    """A named step of the sales funnel.

    `position` orders the registry; it is rewritten in bulk on reorder, so it is
    indexed but not unique at the database level. `is_default` must only be
    written through `PipelineStageService.set_default`.
    """

    __tablename__ = "pipeline_stages"
    __table_args__ = (Index("idx_pipeline_stages_position", "position"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    is_default: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    customers = relationship("Customer", back_populates="pipeline_stage")

    def __repr__(self) -> str:
        return f"<PipelineStage(id={self.id}, name={self.name!r}, position={self.position}, is_default={self.is_default})>"
