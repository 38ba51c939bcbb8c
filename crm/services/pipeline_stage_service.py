"""Pipeline stage registry: ordering, default stage and guarded deletion."""

from __future__ import annotations

import logging

from sqlalchemy import func, select, update

from crm.core.exceptions import InUseError, NotFoundError, ValidationError
from crm.models import Customer, PipelineStage
from crm.services.base_service import BaseService
from crm.utils.validators import sanitize_text

logger = logging.getLogger(__name__)


class PipelineStageService(BaseService):
    """Registry of ordered pipeline stages.

    Exactly one stage carries `is_default` once the registry holds any stage.
    That flag is only written here, inside a single transaction, so readers
    never observe zero or two defaults.
    """

    def list(self) -> list[PipelineStage]:
        stmt = select(PipelineStage).order_by(PipelineStage.position.asc(), PipelineStage.id.asc())
        return list(self.db.scalars(stmt))

    def get(self, stage_id: int) -> PipelineStage:
        return self._get_or_raise(PipelineStage, stage_id, "Pipeline stage")

    def default_stage(self) -> PipelineStage:
        stmt = select(PipelineStage).where(PipelineStage.is_default.is_(True)).order_by(PipelineStage.id).limit(1)
        stage = self.db.scalars(stmt).first()
        if stage is None:
            raise NotFoundError("No default pipeline stage is configured.")
        return stage

    def create(self, name: str) -> PipelineStage:
        cleaned = sanitize_text(name, max_len=255)
        if not cleaned:
            raise ValidationError("Pipeline stage name is required.")

        max_position = self.db.scalar(select(func.max(PipelineStage.position)))
        has_stages = self.db.scalar(select(func.count(PipelineStage.id))) > 0
        stage = PipelineStage(
            name=cleaned,
            position=(max_position or 0) + 1,
            is_default=not has_stages,
        )
        self.db.add(stage)
        self.commit()
        self.db.refresh(stage)
        logger.info(
            "pipeline_stage.created",
            extra={"event": "pipeline_stage.created", "stage_id": stage.id, "position": stage.position},
        )
        return stage

    def rename(self, stage_id: int, name: str) -> PipelineStage:
        stage = self.get(stage_id)
        cleaned = sanitize_text(name, max_len=255)
        if not cleaned:
            raise ValidationError("Pipeline stage name is required.")
        stage.name = cleaned
        self.commit()
        self.db.refresh(stage)
        return stage

    def set_default(self, stage_id: int) -> PipelineStage:
        """Make `stage_id` the only default stage; calling it again is a no-op."""
        stage = self.get(stage_id)
        self.db.execute(
            update(PipelineStage)
            .where(PipelineStage.is_default.is_(True), PipelineStage.id != stage.id)
            .values(is_default=False)
        )
        stage.is_default = True
        self.commit()
        self.db.refresh(stage)
        logger.info(
            "pipeline_stage.default_changed",
            extra={"event": "pipeline_stage.default_changed", "stage_id": stage.id},
        )
        return stage

    def usage_count(self, stage_id: int) -> int:
        """Customers referencing the stage, archived ones included."""
        stmt = select(func.count(Customer.id)).where(Customer.pipeline_stage_id == stage_id)
        return int(self.db.scalar(stmt) or 0)

    def delete(self, stage_id: int) -> None:
        stage = self.get(stage_id)
        if self.usage_count(stage.id) > 0:
            raise InUseError("Pipeline Stage is in use by customers.")

        self.db.delete(stage)
        self.commit()
        logger.info(
            "pipeline_stage.deleted",
            extra={"event": "pipeline_stage.deleted", "stage_id": stage_id},
        )

    def reorder(self, stage_ids: list[int]) -> list[PipelineStage]:
        """Rewrite positions 1..N following `stage_ids`; default flags stay as they are."""
        stages = {stage.id: stage for stage in self.list()}
        if len(stage_ids) != len(set(stage_ids)):
            raise ValidationError("Stage order contains duplicate ids.")
        if set(stage_ids) != set(stages):
            raise ValidationError("Stage order must list every pipeline stage exactly once.")

        for position, stage_id in enumerate(stage_ids, start=1):
            stages[stage_id].position = position
        self.commit()
        logger.info("pipeline_stage.reordered", extra={"event": "pipeline_stage.reordered", "order": stage_ids})
        return self.list()

    def next_stage(self, stage_id: int | None) -> PipelineStage | None:
        """First stage after `stage_id` by position, used to pre-select a move target."""
        if stage_id is None:
            return None
        current = self.get(stage_id)
        stmt = (
            select(PipelineStage)
            .where(PipelineStage.position > current.position)
            .order_by(PipelineStage.position.asc(), PipelineStage.id.asc())
            .limit(1)
        )
        return self.db.scalars(stmt).first()
