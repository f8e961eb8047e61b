"""Shared fixtures for API tests."""

from collections.abc import AsyncGenerator, Generator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

import bookcatalog.catalog.models  # noqa: F401
from bookcatalog.infrastructure.database import Base, get_session
from bookcatalog.main import app


@pytest.fixture
def client(database_path: Path) -> Generator[TestClient, None, None]:
    """Create test client backed by a per-test database."""
    sync_engine = create_engine(f"sqlite:///{database_path}")
    Base.metadata.create_all(sync_engine)
    sync_engine.dispose()

    engine = create_async_engine(f"sqlite+aiosqlite:///{database_path}", poolclass=NullPool)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_session() -> AsyncGenerator[AsyncSession, None]:
        async with factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def author(client: TestClient) -> dict:
    """Create an author through the API."""
    response = client.post("/authors", json={"name": "Ursula K. Le Guin"})
    assert response.status_code == 201
    return response.json()
