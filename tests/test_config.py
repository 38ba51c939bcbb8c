from __future__ import annotations

import pytest

from crm.core.config import _build_config
from crm.core.exceptions import ConfigurationError


def test_development_defaults_are_valid(monkeypatch):
    for key in ("ENV", "DATABASE_URL", "JWT_SECRET", "LOG_LEVEL", "BOARD_GROUP"):
        monkeypatch.delenv(key, raising=False)

    config = _build_config("development")

    assert config.DATABASE_URL.startswith("sqlite")
    assert config.BOARD_GROUP == "customer-board"
    assert config.is_production is False


def test_production_rejects_placeholder_secret(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql+psycopg2://crm:secret@db:5432/crm")
    monkeypatch.setenv("JWT_SECRET", "change_me_jwt_secret")

    with pytest.raises(ConfigurationError, match="JWT_SECRET"):
        _build_config("production")


@pytest.mark.parametrize(("key", "value"), [
    ("DATABASE_URL", "mysql://root@localhost/crm"),
    ("LOG_LEVEL", "chatty"),
    ("JWT_ACCESS_TTL_MINUTES", "0"),
    ("BOARD_GROUP", "  "),
])
def test_invalid_values_fail_fast(monkeypatch, key, value):
    monkeypatch.setenv(key, value)
    with pytest.raises(ConfigurationError):
        _build_config("development")
