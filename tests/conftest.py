"""
Shared pytest fixtures.

Every test gets a fresh in-memory SQLite database (foreign keys enabled,
plan catalog seeded). Supabase is never contacted: API tests replace the
client with a MagicMock whose auth.get_user resolves fixed bearer tokens.
"""

from typing import Callable
from unittest.mock import MagicMock

import pytest
from sqlalchemy import func, select
from sqlalchemy.orm import Session, sessionmaker

from pos_backend.core.policy import ExecutionContext
from pos_backend.core.store import TenancyStore
from pos_backend.database.registry import TABLE_MODELS
from pos_backend.database.session import create_db_engine, init_db
from pos_backend.modules.plans.service import seed_plan_catalog
from pos_backend.modules.provisioning.service import ProvisioningService

ALICE = "a11ce000-0000-4000-8000-000000000001"
BOB = "b0b00000-0000-4000-8000-000000000002"
CAROL = "ca201000-0000-4000-8000-000000000003"

TOKENS = {
    "alice-token": (ALICE, "alice@example.com"),
    "bob-token": (BOB, "bob@example.com"),
    "carol-token": (CAROL, "carol@example.com"),
}


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine) -> sessionmaker:
    factory = sessionmaker(bind=engine, expire_on_commit=False)
    seed_session = factory()
    try:
        seed_plan_catalog(seed_session)
    finally:
        seed_session.close()
    return factory


@pytest.fixture
def session(session_factory) -> Session:
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def store_for(session) -> Callable[[str], TenancyStore]:
    """Build a caller-scoped store on the shared test session."""

    def _make(user_id):
        return TenancyStore(session, ExecutionContext.for_user(user_id))

    return _make


@pytest.fixture
def system_store(session) -> TenancyStore:
    return TenancyStore(session, ExecutionContext.elevated())


@pytest.fixture
def provision(session):
    """Provision a user's first tenant and return (org_id, branch_id)."""

    def _provision(user_id, org_name=None):
        result = ProvisioningService(session).provision_first_org(user_id, org_name)
        return result.org_id, result.branch_id

    return _provision


@pytest.fixture
def add_member(system_store):
    """Bind a user to an org with the given role, bypassing policy."""

    def _add(user_id, org_id, role):
        with system_store.transaction():
            return system_store.insert("org_memberships", {"user_id": user_id, "org_id": org_id, "role": role})

    return _add


@pytest.fixture
def count_rows(session):
    def _count(table, **filters):
        model = TABLE_MODELS[table]
        query = select(func.count()).select_from(model)
        for key, value in filters.items():
            query = query.where(getattr(model, key) == value)
        return session.execute(query).scalar_one()

    return _count


def make_supabase_mock() -> MagicMock:
    supabase = MagicMock()

    def get_user(jwt=None):
        response = MagicMock()
        if jwt not in TOKENS:
            raise Exception("invalid JWT: unable to parse or verify signature")
        user_id, email = TOKENS[jwt]
        response.user.id = user_id
        response.user.email = email
        response.user.user_metadata = {}
        response.user.app_metadata = {}
        return response

    supabase.auth.get_user.side_effect = get_user
    return supabase


@pytest.fixture
def supabase_mock() -> MagicMock:
    return make_supabase_mock()


@pytest.fixture
def client(session_factory, supabase_mock, monkeypatch):
    from fastapi.testclient import TestClient

    from pos_backend.core.limiter import limiter
    from pos_backend.database.session import get_db
    from pos_backend.database.supabase_client import get_supabase
    from pos_backend.main import app
    from pos_backend.modules.auth.service import clear_auth_cache

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    monkeypatch.setattr(limiter, "enabled", False)
    clear_auth_cache()
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_supabase] = lambda: supabase_mock
    yield TestClient(app)
    app.dependency_overrides.clear()
    clear_auth_cache()


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
