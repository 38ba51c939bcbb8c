"""Bearer-token authentication and scope checks for the v1 routers."""

from __future__ import annotations

import logging

from fastapi import HTTPException

from crm.auth.rbac import require_scopes
from crm.core.config import get_config
from crm.core.dependencies import CurrentUser, get_current_user
from crm.core.exceptions import AuthenticationError, AuthorizationError

logger = logging.getLogger(__name__)


def bearer_token(authorization: object) -> str:
    """Token from an `Authorization: Bearer <token>` header value."""
    scheme, _, token = (authorization if isinstance(authorization, str) else "").strip().partition(" ")
    if not scheme:
        raise AuthenticationError("Authorization header is required.")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthenticationError("Authorization header must use Bearer token.")
    return token.strip()


def require_auth(authorization: str | None, scopes: list[str]) -> CurrentUser:
    """Resolve the caller and check `scopes`: 401 without a valid token, 403 without the scope."""
    try:
        user = get_current_user(token=bearer_token(authorization), settings=get_config())
    except AuthenticationError as exc:
        raise HTTPException(status_code=401, detail=str(exc), headers={"WWW-Authenticate": "Bearer"}) from exc

    try:
        require_scopes(user.role, scopes)
    except AuthorizationError as exc:
        logger.info(
            "api.auth.forbidden",
            extra={"event": "api.auth.forbidden", "user_id": str(user.user_id), "role": user.role, "scopes": scopes},
        )
        raise HTTPException(status_code=403, detail=str(exc)) from exc
    return user
