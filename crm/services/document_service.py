"""Customer document attachments backed by file storage."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from crm.core.config import get_config
from crm.core.exceptions import DatabaseError
from crm.models import Customer, Document
from crm.services.base_service import BaseService
from crm.services.notifications import NotificationSink
from crm.services.storage import LocalFileStorage
from crm.utils.validators import optional_text


class DocumentService(BaseService):
    def __init__(
        self,
        db: Session | None = None,
        notifier: NotificationSink | None = None,
        storage: LocalFileStorage | None = None,
    ) -> None:
        super().__init__(db=db, notifier=notifier)
        self.storage = storage or LocalFileStorage(get_config().STORAGE_ROOT)

    def for_customer(self, customer_id: int) -> list[Document]:
        stmt = select(Document).where(Document.customer_id == customer_id).order_by(Document.id)
        return list(self.db.scalars(stmt))

    def get(self, document_id: int) -> Document:
        return self._get_or_raise(Document, document_id, "Document")

    def attach(self, customer_id: int, filename: str, content: bytes, comments: str | None = None) -> Document:
        self._get_or_raise(Customer, customer_id, "Customer")
        file_path = self.storage.save(filename, content)
        document = Document(customer_id=customer_id, file_path=file_path, comments=optional_text(comments))
        self.db.add(document)
        try:
            self.commit()
        except DatabaseError:
            self.storage.delete(file_path)
            raise
        self.db.refresh(document)
        self.notifier.success("Document uploaded")
        return document

    def delete(self, document_id: int) -> None:
        """Remove the backing file, then the record."""
        document = self.get(document_id)
        self.storage.delete(document.file_path)
        self.db.delete(document)
        self.commit()
        self.notifier.success("Document deleted")
