"""SQLAlchemy model package for the CRM schema."""

from crm.models.base import Base
from crm.models.custom_field import CustomField, CustomFieldCustomer
from crm.models.customer import Customer, customer_tag
from crm.models.customer_pipeline_stage import CustomerPipelineStage
from crm.models.document import Document
from crm.models.enums import CustomerTab, NotificationLevel, UserRole
from crm.models.lead_source import LeadSource
from crm.models.pipeline_stage import PipelineStage
from crm.models.product import Product
from crm.models.quote import ProductQuote, Quote
from crm.models.tag import Tag
from crm.models.task import Task
from crm.models.user import User

__all__ = [
    "Base",
    "CustomField",
    "CustomFieldCustomer",
    "Customer",
    "CustomerPipelineStage",
    "CustomerTab",
    "Document",
    "LeadSource",
    "NotificationLevel",
    "PipelineStage",
    "Product",
    "ProductQuote",
    "Quote",
    "Tag",
    "Task",
    "User",
    "UserRole",
    "customer_tag",
]
