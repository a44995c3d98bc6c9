"""Test fixtures and configuration."""

from __future__ import annotations

from typing import AsyncGenerator, Iterator

import pytest
import pytest_asyncio
import structlog
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from enumfield.config import reset_settings


@pytest.fixture(autouse=True)
def _isolated_settings() -> Iterator[None]:
    """Re-read settings per test and drop any logging configuration a test installed."""
    reset_settings()
    structlog.reset_defaults()
    yield
    reset_settings()
    structlog.reset_defaults()


@pytest_asyncio.fixture
async def db_session(request: pytest.FixtureRequest) -> AsyncGenerator[AsyncSession, None]:
    """Provide an in-memory SQLite session with the calling module's ``Base`` tables."""
    metadata = request.module.Base.metadata
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session
    await engine.dispose()
