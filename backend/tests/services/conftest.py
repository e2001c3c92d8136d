"""Service test fixtures — async DB, FastAPI test client and provisioned tenants.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so code that opens its own sessions hits the test DB
    - Tenants provisioned through the public onboarding endpoints

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (ADR: PostgreSQL-specific features not exercised here)
    - API-driven fixtures: acme/globex take the same path real teams take
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from app.db.base import Base
from app.infrastructure.database import get_db, DatabaseSessionManager
import app.infrastructure.database as db_module
from app.main import app
from tests.services.tenant_helpers import bearer, onboard_team


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    # Patch db_manager for code paths that open sessions directly
    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def acme(client) -> dict:
    """Team "Acme Staffing" with its Local Admin."""
    return await onboard_team(
        client, "auth-acme-admin", "admin@acme.io", "Acme Staffing",
        first_name="Ada", last_name="Admin", is_discoverable=True,
    )


@pytest.fixture
async def globex(client) -> dict:
    """A second, unrelated tenant."""
    return await onboard_team(
        client, "auth-globex-admin", "admin@globex.io", "Globex Talent",
    )


@pytest.fixture
async def master_admin(client) -> dict:
    headers = bearer("auth-root", "root@platform.io")
    res = await client.post(
        "/api/v1/onboarding/master-admin",
        json={"setup_token": "test-setup-token"},
        headers=headers,
    )
    assert res.status_code == 201, res.text
    return {"headers": headers, "user": res.json()}
