from __future__ import annotations

from contextlib import contextmanager

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from crm.core.security import hash_password
from crm.database.db import enable_sqlite_foreign_keys
from crm.models import Base, PipelineStage, User, UserRole


def build_session():
    engine = create_engine("sqlite:///:memory:")
    enable_sqlite_foreign_keys(engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    return TestingSessionLocal()


@pytest.fixture
def session():
    db = build_session()
    yield db
    db.close()


@pytest.fixture
def make_user(session):
    counter = {"n": 0}

    def _make_user(name: str | None = None, role: UserRole = UserRole.EMPLOYEE) -> User:
        counter["n"] += 1
        user = User(
            name=name or f"User {counter['n']}",
            email=f"user{counter['n']}@example.com",
            hashed_password=hash_password("password123", iterations=1_000),
            role=role,
        )
        session.add(user)
        session.commit()
        return user

    return _make_user


@pytest.fixture
def stages(session):
    """Lead (default), Contact Made, Proposal Made at positions 1..3."""
    rows = [
        PipelineStage(name="Lead", position=1, is_default=True),
        PipelineStage(name="Contact Made", position=2, is_default=False),
        PipelineStage(name="Proposal Made", position=3, is_default=False),
    ]
    session.add_all(rows)
    session.commit()
    return rows


@pytest.fixture
def patch_db_session(monkeypatch, session):
    """Point an API route module's `get_db_session` at the test session."""

    @contextmanager
    def _get_db_session():
        yield session

    def _patch(module) -> None:
        monkeypatch.setattr(module, "get_db_session", _get_db_session)

    return _patch
