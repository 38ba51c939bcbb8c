from __future__ import annotations

import pytest
from fastapi import HTTPException

from crm.api.v1._authz import bearer_token, require_auth
from crm.auth.jwt import create_token_pair
from crm.core.config import get_config
from crm.core.exceptions import AuthenticationError


@pytest.mark.parametrize("header", [None, "", "   "])
def test_bearer_token_requires_header(header):
    with pytest.raises(AuthenticationError, match="required"):
        bearer_token(header)


@pytest.mark.parametrize("header", ["Basic abc", "Bearer", "Bearer    ", "token-only"])
def test_bearer_token_requires_bearer_scheme(header):
    with pytest.raises(AuthenticationError, match="Bearer"):
        bearer_token(header)


def test_bearer_token_is_case_insensitive_on_scheme():
    assert bearer_token("  bearer abc.def.ghi ") == "abc.def.ghi"


def test_require_auth_returns_401_with_challenge_for_refresh_token():
    pair = create_token_pair(user_id=5, role="employee", secret=get_config().JWT_SECRET)

    with pytest.raises(HTTPException) as exc:
        require_auth(f"Bearer {pair.refresh_token}", scopes=["customers.read"])

    assert exc.value.status_code == 401
    assert exc.value.headers == {"WWW-Authenticate": "Bearer"}


def test_require_auth_returns_403_for_missing_scope():
    token = create_token_pair(user_id=5, role="employee", secret=get_config().JWT_SECRET).access_token

    assert require_auth(f"Bearer {token}", scopes=["customers.read"]).user_id == 5
    with pytest.raises(HTTPException) as exc:
        require_auth(f"Bearer {token}", scopes=["stages.manage"])
    assert exc.value.status_code == 403
