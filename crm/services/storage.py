"""File storage seam for customer documents."""

from __future__ import annotations

import logging
import uuid
from pathlib import Path

from crm.core.exceptions import ServiceError, ValidationError

logger = logging.getLogger(__name__)


class LocalFileStorage:
    """Stores files under `root`; paths handed out are relative to it."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root).resolve()

    def _resolve(self, relative_path: str) -> Path:
        candidate = (self.root / relative_path).resolve()
        if self.root != candidate and self.root not in candidate.parents:
            raise ValidationError(f"Path escapes storage root: {relative_path}")
        return candidate

    def save(self, filename: str, content: bytes, directory: str = "documents") -> str:
        safe_name = Path(filename).name or "upload"
        relative_path = f"{directory}/{uuid.uuid4().hex}_{safe_name}"
        target = self._resolve(relative_path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)
        except OSError as exc:
            raise ServiceError(f"Could not store {safe_name}.") from exc
        logger.info("storage.saved", extra={"event": "storage.saved", "path": relative_path, "size": len(content)})
        return relative_path

    def exists(self, relative_path: str) -> bool:
        return self._resolve(relative_path).is_file()

    def delete(self, relative_path: str) -> bool:
        target = self._resolve(relative_path)
        if not target.is_file():
            logger.warning("storage.missing", extra={"event": "storage.missing", "path": relative_path})
            return False
        target.unlink()
        logger.info("storage.deleted", extra={"event": "storage.deleted", "path": relative_path})
        return True
