"""Root conftest — shared test configuration and store fixtures.

Invariants:
    - Environment defaults set before any fleet_api import reads settings
    - Every test gets a fresh SQLite file database under tmp_path

Design Decisions:
    - File database + NullPool over :memory: + StaticPool: concurrent bulk-detach
      writes each get their own connection instead of sharing one transaction
    - Bulk detach fan-out pinned to 1 in tests: SQLite allows a single writer
"""

import os

# Ensure tests never reach a real database or identity provider
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("AUTH_DOMAIN", "fleet-test.example.com")
os.environ.setdefault("ASSOCIATION_WRITE_CONCURRENCY", "1")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from fleet_api.core.domain_types import Principal
from fleet_api.db.base import Base
from fleet_api.infrastructure.database import DatabaseSessionManager
from fleet_api.infrastructure.document_store import SqlDocumentStore
import fleet_api.models  # noqa: F401


@pytest.fixture
async def test_engine(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'fleet.db'}",
        poolclass=NullPool,
        connect_args={"timeout": 15},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def db_manager(test_engine):
    return DatabaseSessionManager.from_engine(test_engine)


@pytest.fixture
def store(db_manager):
    return SqlDocumentStore(db_manager)


@pytest.fixture
def alice():
    return Principal(sub="auth0|alice", name="Alice")


@pytest.fixture
def bob():
    return Principal(sub="auth0|bob", name="Bob")
