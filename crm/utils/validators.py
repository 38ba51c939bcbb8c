"""Deterministic validators and sanitizers used across services."""

from __future__ import annotations

import re
import unicodedata

_SLUG_STRIP = re.compile(r"[^\w\s-]")
_SLUG_COLLAPSE = re.compile(r"[-\s_]+")
_TAG = re.compile(r"<[^>]*>")


def sanitize_text(value: str | None, max_len: int = 20000) -> str:
    """Sanitize free-form content before persistence/display."""
    if value is None:
        return ""
    cleaned = str(value).replace("\x00", "").strip()
    cleaned = cleaned[:max_len]
    return cleaned


def optional_text(value: str | None, max_len: int = 20000) -> str | None:
    """Like `sanitize_text` but keeps `None` and maps blank input to `None`."""
    cleaned = sanitize_text(value, max_len=max_len)
    return cleaned or None


def slugify(value: str) -> str:
    """ASCII, lowercase, hyphen-separated slug ("Contact Made" -> "contact-made")."""
    normalized = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    normalized = _SLUG_STRIP.sub("", normalized).strip().lower()
    return _SLUG_COLLAPSE.sub("-", normalized).strip("-")


def strip_tags(value: str | None) -> str:
    """Drop HTML tags from rich-text content, for plain-text labels."""
    return sanitize_text(_TAG.sub("", value or ""))
