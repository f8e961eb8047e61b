"""Shared fixtures for catalog tests.

Every test gets its own SQLite database file. The application engine is
never connected during tests.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")

from collections.abc import AsyncGenerator  # noqa: E402
from pathlib import Path  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool  # noqa: E402

from bookcatalog.catalog.service import CatalogService  # noqa: E402
from bookcatalog.infrastructure.database import create_tables  # noqa: E402


@pytest.fixture
def database_path(tmp_path: Path) -> Path:
    """Path of the per-test SQLite database."""
    return tmp_path / "catalog.db"


@pytest_asyncio.fixture
async def engine(database_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """Create an async engine with all catalog tables."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{database_path}",
        poolclass=NullPool,
    )
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Create a session on the per-test database."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest.fixture
def service(session: AsyncSession) -> CatalogService:
    """Create a catalog service bound to the test session."""
    return CatalogService(session, request_id="test-request")
