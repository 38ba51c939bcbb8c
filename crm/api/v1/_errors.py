"""Service exception to HTTP translation shared by route modules."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import HTTPException, status

from crm.core.exceptions import DatabaseError, NotFoundError, ServiceError, ValidationError
from crm.services.notifications import NotificationSink

logger = logging.getLogger(__name__)


@contextmanager
def service_errors() -> Iterator[None]:
    """Translate domain errors raised inside the block into HTTP errors.

    `InUseError` is not handled here; delete endpoints recover from it.
    """
    try:
        yield
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except (DatabaseError, ServiceError) as exc:
        logger.exception("api.service_error", extra={"event": "api.service_error", "error": exc.__class__.__name__})
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc


def drain_notifications(notifier: NotificationSink) -> list[dict]:
    return [item.to_dict() for item in notifier.drain()]
