"""In-request notification sink.

Mutating services push user-facing messages here; the API layer returns them
to the UI alongside the operation result.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass

from crm.models.enums import NotificationLevel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notification:
    level: NotificationLevel
    title: str
    body: str | None = None

    def to_dict(self) -> dict:
        payload = asdict(self)
        payload["level"] = self.level.value
        return payload


class NotificationSink:
    def __init__(self) -> None:
        self._items: list[Notification] = []

    def send(self, notification: Notification) -> Notification:
        self._items.append(notification)
        logger.info(
            "notification.sent",
            extra={
                "event": "notification.sent",
                "level": notification.level.value,
                "title": notification.title,
            },
        )
        return notification

    def success(self, title: str, body: str | None = None) -> Notification:
        return self.send(Notification(NotificationLevel.SUCCESS, title, body))

    def warning(self, title: str, body: str | None = None) -> Notification:
        return self.send(Notification(NotificationLevel.WARNING, title, body))

    def danger(self, title: str, body: str | None = None) -> Notification:
        return self.send(Notification(NotificationLevel.DANGER, title, body))

    @property
    def items(self) -> list[Notification]:
        return list(self._items)

    def drain(self) -> list[Notification]:
        """Return pending notifications and clear the sink."""
        items, self._items = self._items, []
        return items
