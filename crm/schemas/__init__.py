"""Pydantic schema package for API contracts."""

from crm.schemas.auth import LoginRequest, RefreshRequest, TokenResponse
from crm.schemas.board import BoardColumnResponse, BoardMoveRequest, BoardRecordResponse
from crm.schemas.catalog import (
    CustomFieldResponse,
    LeadSourceResponse,
    NameRequest,
    TagRequest,
    TagResponse,
    TagUpdateRequest,
)
from crm.schemas.customers import (
    CustomerCreateRequest,
    CustomerResponse,
    CustomerTabResponse,
    CustomerUpdateRequest,
    CustomFieldValueRequest,
    EmployeeChangeRequest,
    StageChangeRequest,
)
from crm.schemas.documents import DocumentResponse, DocumentUploadRequest
from crm.schemas.history import HistoryEntryResponse
from crm.schemas.pipeline_stages import (
    PipelineStageCreateRequest,
    PipelineStageRenameRequest,
    PipelineStageReorderRequest,
    PipelineStageResponse,
)
from crm.schemas.quotes import (
    ProductCreateRequest,
    ProductResponse,
    QuoteCreateRequest,
    QuoteLineRequest,
    QuoteLineResponse,
    QuoteResponse,
)
from crm.schemas.tasks import CalendarEventResponse, TaskCreateRequest, TaskResponse
from crm.schemas.users import UserCreateRequest, UserResponse

__all__ = [
    "BoardColumnResponse",
    "BoardMoveRequest",
    "BoardRecordResponse",
    "CalendarEventResponse",
    "CustomFieldResponse",
    "CustomFieldValueRequest",
    "CustomerCreateRequest",
    "CustomerResponse",
    "CustomerTabResponse",
    "CustomerUpdateRequest",
    "DocumentResponse",
    "DocumentUploadRequest",
    "EmployeeChangeRequest",
    "HistoryEntryResponse",
    "LeadSourceResponse",
    "LoginRequest",
    "NameRequest",
    "PipelineStageCreateRequest",
    "PipelineStageRenameRequest",
    "PipelineStageReorderRequest",
    "PipelineStageResponse",
    "ProductCreateRequest",
    "ProductResponse",
    "QuoteCreateRequest",
    "QuoteLineRequest",
    "QuoteLineResponse",
    "QuoteResponse",
    "RefreshRequest",
    "StageChangeRequest",
    "TagRequest",
    "TagResponse",
    "TagUpdateRequest",
    "TaskCreateRequest",
    "TaskResponse",
    "TokenResponse",
    "UserCreateRequest",
    "UserResponse",
]
