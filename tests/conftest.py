"""Pytest configuration and fixtures."""

import sys
from collections.abc import AsyncGenerator, Callable
from pathlib import Path

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domain.services.tag_service import TagService
from domain.services.url_record_service import UrlRecordService
from domain.services.visibility_service import VisibilityService
from infrastructure.cache.memory_cache import InMemoryCacheManager
from infrastructure.context.work_context import ContextVarWorkContext
from infrastructure.database.models import Base
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork

# Test database URL (SQLite in memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory database with all tables for each test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
def uow_factory(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[[], SQLAlchemyUnitOfWork]:
    """Create a UoW factory bound to the test database."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    return factory


@pytest.fixture
def cache() -> InMemoryCacheManager:
    """Create an empty cache manager."""
    return InMemoryCacheManager(default_ttl_seconds=3600)


@pytest.fixture
def work_context() -> ContextVarWorkContext:
    """Work context with a single guest role."""
    return ContextVarWorkContext(guest_role_ids=[4])


@pytest.fixture
def tag_service(
    uow_factory: Callable[[], SQLAlchemyUnitOfWork],
    cache: InMemoryCacheManager,
    work_context: ContextVarWorkContext,
) -> TagService:
    """Create a TagService wired to the test database."""
    return TagService(
        uow_factory,
        cache=cache,
        work_context=work_context,
        url_record_service=UrlRecordService(uow_factory),
        visibility_service=VisibilityService(),
    )
