"""Customer document endpoints for API v1.

Uploads travel as base64 JSON so the API needs no multipart parser.
"""

from __future__ import annotations

import base64
import binascii

from fastapi import APIRouter, Header, HTTPException, status

from crm.api.v1._authz import require_auth
from crm.api.v1._errors import drain_notifications, service_errors
from crm.database.db import get_db_session
from crm.schemas.documents import DocumentResponse, DocumentUploadRequest
from crm.services.document_service import DocumentService

router = APIRouter(tags=["documents"])


@router.get("/customers/{customer_id}/documents")
def list_documents(customer_id: int, authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    require_auth(authorization, scopes=["customers.read"])
    with get_db_session() as session:
        documents = DocumentService(db=session).for_customer(customer_id)
        return {"items": [DocumentResponse.model_validate(document).model_dump() for document in documents]}


@router.post("/customers/{customer_id}/documents", status_code=status.HTTP_201_CREATED)
def attach_document(
    customer_id: int,
    payload: DocumentUploadRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict:
    require_auth(authorization, scopes=["documents.write"])
    try:
        content = base64.b64decode(payload.content_base64, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise HTTPException(status_code=422, detail="Invalid base64 content.") from exc

    with get_db_session() as session, service_errors():
        service = DocumentService(db=session)
        document = service.attach(customer_id, payload.filename, content, comments=payload.comments)
        return {
            "item": DocumentResponse.model_validate(document).model_dump(),
            "notifications": drain_notifications(service.notifier),
        }


@router.delete("/documents/{document_id}")
def delete_document(document_id: int, authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    require_auth(authorization, scopes=["documents.write"])
    with get_db_session() as session, service_errors():
        service = DocumentService(db=session)
        service.delete(document_id)
        return {"deleted": True, "notifications": drain_notifications(service.notifier)}
