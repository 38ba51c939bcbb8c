"""Shared service base with robust session lifecycle behavior."""

from __future__ import annotations

from typing import Any, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from crm.core.exceptions import DatabaseError, NotFoundError
from crm.database import db as database
from crm.services.notifications import NotificationSink

ModelT = TypeVar("ModelT")


class BaseService:
    """Base class for services that operate on a SQLAlchemy session.

    Services sharing one request pass the same `db` and `notifier` so their
    writes land in one transaction and their messages reach one sink.
    """

    def __init__(self, db: Session | None = None, notifier: NotificationSink | None = None) -> None:
        self.db = db or database.SessionLocal()
        self.notifier = notifier or NotificationSink()

    def commit(self) -> None:
        """Commit current transaction and rollback on failure."""
        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise DatabaseError(f"Commit failed: {exc.__class__.__name__}") from exc

    def rollback(self) -> None:
        self.db.rollback()

    def close(self) -> None:
        self.db.close()

    def _get_or_raise(self, model: type[ModelT], record_id: Any, label: str) -> ModelT:
        record = self.db.get(model, record_id) if record_id is not None else None
        if record is None:
            raise NotFoundError(f"{label} not found: {record_id}")
        return record

    def __enter__(self) -> "BaseService":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type:
            self.rollback()
        self.close()
