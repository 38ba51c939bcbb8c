from __future__ import annotations

from crm.models import Base, CustomerPipelineStage
import crm.models  # noqa: F401


def test_model_metadata_contains_crm_tables():
    expected = {
        "users",
        "pipeline_stages",
        "customers",
        "customer_pipeline_stages",
        "lead_sources",
        "tags",
        "customer_tag",
        "custom_fields",
        "custom_field_customer",
        "documents",
        "tasks",
        "products",
        "quotes",
        "product_quote",
    }
    assert expected == set(Base.metadata.tables.keys())


def test_audit_stage_reference_is_nulled_on_stage_delete():
    column = CustomerPipelineStage.__table__.c.pipeline_stage_id
    (foreign_key,) = column.foreign_keys
    assert foreign_key.ondelete == "SET NULL"
    assert column.nullable is True
