"""Shared test fixtures."""
import os

# Settings are read at import time; point them at a throwaway database first.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./lemerle-test.db"
os.environ["BUSINESS_TIMEZONE"] = "Africa/Tunis"
os.environ["DEFAULT_LOCALE"] = "fr"
os.environ["REPLICATE_API_TOKEN"] = ""
os.environ["ENV"] = "test"

import datetime as dt  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlmodel import SQLModel  # noqa: E402

import lemerle_api.models  # noqa: E402,F401 - register tables
from lemerle_api.core.config import settings  # noqa: E402
from lemerle_api.core.db import get_session  # noqa: E402
from lemerle_api.main import app  # noqa: E402
from lemerle_api.services import slot_service  # noqa: E402

# Sunday 2025-06-01, 10:00 local: the day before the Monday most tests book on
FIXED_NOW = dt.datetime(2025, 6, 1, 10, 0, tzinfo=settings.tz)


@pytest.fixture
def fixed_now() -> dt.datetime:
    return FIXED_NOW


@pytest.fixture
def frozen_clock(monkeypatch):
    """Freeze the slot validator's clock at FIXED_NOW."""
    monkeypatch.setattr(slot_service, "_now", lambda: FIXED_NOW)
    return FIXED_NOW


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_maker):
    async with session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_maker):
    """HTTP client bound to the app, with each request getting its own session on the test database."""

    async def _get_session():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = _get_session
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()
