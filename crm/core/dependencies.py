"""Dependency providers for API handlers and scripts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from crm.auth.jwt import decode_jwt
from crm.core.config import Config, get_config
from crm.core.exceptions import AuthenticationError
from crm.models.enums import UserRole


@dataclass(frozen=True)
class CurrentUser:
    user_id: int
    role: str
    claims: dict[str, Any]

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value


def get_settings() -> Config:
    """Return validated application configuration."""
    return get_config()


def get_current_user(token: str, settings: Config | None = None) -> CurrentUser:
    """Resolve the current user from an access token."""
    cfg = settings or get_settings()
    claims = decode_jwt(token=token, secret=cfg.JWT_SECRET)
    if claims.get("token_use") != "access":
        raise AuthenticationError("Token is not an access token.")

    try:
        return CurrentUser(user_id=int(claims["sub"]), role=str(claims["role"]).lower(), claims=claims)
    except (KeyError, TypeError, ValueError) as exc:
        raise AuthenticationError("Invalid auth claims.") from exc


def current_actor_id(user: CurrentUser | None) -> int | None:
    """Id recorded as `user_id` on audit entries; None for system actions."""
    return user.user_id if user is not None else None


def is_admin(user: CurrentUser | None) -> bool:
    return user is not None and user.is_admin
