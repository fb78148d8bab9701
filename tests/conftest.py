"""Test fixtures for the short-link service."""

import os

# Settings are read once at import time
os.environ["ENVIRONMENT"] = "testing"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["DB_CREATE_TABLES"] = "false"
os.environ["LOG_TO_FILE"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["BASE_URL"] = "http://sho.rt"

from datetime import datetime, timedelta
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from shortlink.api.dependencies import get_code_assigner, get_resolver
from shortlink.core.config import ShortenerConfig
from shortlink.db.session import get_db
from shortlink.main import app as main_app
# Import models to ensure they're registered with SQLModel metadata
from shortlink.models.mapping import Mapping  # noqa: F401
from shortlink.repositories.mapping_repository import MappingRepository
from shortlink.services.assigner import CodeAssigner
from shortlink.services.resolver import Resolver

# Test database URL - using SQLite in-memory
TEST_SQLALCHEMY_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

BASE_URL = "http://sho.rt"


class FakeClock:
    """Manually advanced naive UTC clock."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest_asyncio.fixture
async def test_engine():
    """Create test database engine with in-memory SQLite."""
    engine = create_async_engine(
        TEST_SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(bind=test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def test_db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 1, 1, 12, 0, 0))


@pytest.fixture
def shortener_config() -> ShortenerConfig:
    return ShortenerConfig(base_url=BASE_URL)


@pytest.fixture
def mapping_repository() -> MappingRepository:
    """Return mapping repository instance."""
    return MappingRepository()


@pytest.fixture
def assigner(mapping_repository, shortener_config, clock) -> CodeAssigner:
    return CodeAssigner(store=mapping_repository, config=shortener_config, clock=clock)


@pytest.fixture
def resolver(mapping_repository, clock) -> Resolver:
    return Resolver(store=mapping_repository, clock=clock)


@pytest_asyncio.fixture
async def client(session_factory, assigner, resolver) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the app with test storage and a fake clock."""
    async def _override_get_db():
        async with session_factory() as session:
            yield session

    main_app.dependency_overrides[get_db] = _override_get_db
    main_app.dependency_overrides[get_code_assigner] = lambda: assigner
    main_app.dependency_overrides[get_resolver] = lambda: resolver

    transport = ASGITransport(app=main_app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as test_client:
        yield test_client

    main_app.dependency_overrides.clear()
