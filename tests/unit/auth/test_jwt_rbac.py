from __future__ import annotations

from datetime import timedelta

import pytest

from crm.auth.jwt import create_token_pair, decode_jwt, encode_jwt
from crm.auth.rbac import has_scopes, require_scopes
from crm.core.config import get_config
from crm.core.dependencies import current_actor_id, get_current_user, is_admin
from crm.core.exceptions import AuthenticationError, AuthorizationError


def test_jwt_roundtrip_contains_required_claims():
    tokens = create_token_pair(user_id=10, role="employee", secret="test-secret")
    claims = decode_jwt(tokens.access_token, secret="test-secret")
    assert claims["sub"] == "10"
    assert claims["role"] == "employee"
    assert claims["token_use"] == "access"
    assert "exp" in claims
    assert "iat" in claims
    assert "jti" in claims


def test_jwt_rejects_tampered_and_expired_tokens():
    token = create_token_pair(user_id=1, role="admin", secret="test-secret").access_token
    with pytest.raises(AuthenticationError):
        decode_jwt(token, secret="other-secret")

    expired = encode_jwt({"sub": "1"}, secret="test-secret", ttl=timedelta(seconds=-10))
    with pytest.raises(AuthenticationError, match="expired"):
        decode_jwt(expired, secret="test-secret")


def test_rbac_employee_cannot_manage_registries():
    require_scopes("employee", ["customers.write", "board.move"])
    assert has_scopes("admin", ["stages.manage", "customers.assign"])
    for scope in ["stages.manage", "lead_sources.manage", "customers.assign", "tags.manage"]:
        with pytest.raises(AuthorizationError):
            require_scopes("employee", [scope])


def test_current_user_requires_access_token():
    cfg = get_config()
    tokens = create_token_pair(user_id=7, role="admin", secret=cfg.JWT_SECRET)

    user = get_current_user(tokens.access_token, settings=cfg)
    assert (user.user_id, user.is_admin) == (7, True)
    assert current_actor_id(user) == 7
    assert is_admin(user) is True
    assert current_actor_id(None) is None
    with pytest.raises(AuthenticationError):
        get_current_user(tokens.refresh_token, settings=cfg)
