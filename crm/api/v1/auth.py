"""Auth endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from crm.auth.jwt import create_token_pair, decode_jwt
from crm.core.config import get_config
from crm.core.exceptions import AuthenticationError, NotFoundError
from crm.database.db import get_db_session
from crm.schemas.auth import LoginRequest, RefreshRequest, TokenResponse
from crm.services.user_service import UserService

router = APIRouter(prefix="/auth", tags=["auth"])


def _token_response(user_id: int, role: str) -> TokenResponse:
    cfg = get_config()
    tokens = create_token_pair(
        user_id=user_id,
        role=role,
        secret=cfg.JWT_SECRET,
        access_ttl_minutes=cfg.JWT_ACCESS_TTL_MINUTES,
        refresh_ttl_days=cfg.JWT_REFRESH_TTL_DAYS,
    )
    return TokenResponse(
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        token_type=tokens.token_type,
    )


@router.post("/login", response_model=TokenResponse)
def login(payload: LoginRequest) -> TokenResponse:
    with get_db_session() as session:
        try:
            user = UserService(db=session).authenticate(payload.email, payload.password)
        except AuthenticationError as exc:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc
        return _token_response(user.id, user.role.value)


@router.post("/refresh", response_model=TokenResponse)
def refresh(payload: RefreshRequest) -> TokenResponse:
    cfg = get_config()
    try:
        claims = decode_jwt(payload.refresh_token, secret=cfg.JWT_SECRET)
    except AuthenticationError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc

    if claims.get("token_use") != "refresh":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token is not a refresh token.")

    with get_db_session() as session:
        try:
            user = UserService(db=session).get(int(claims["sub"]))
        except NotFoundError as exc:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unknown user.") from exc
        if not user.is_active:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User is inactive.")
        return _token_response(user.id, user.role.value)
