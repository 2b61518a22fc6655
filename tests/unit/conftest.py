"""Shared fixtures for unit tests."""

from typing import Any
from unittest.mock import AsyncMock

import pytest

from domain.services.tag_service import TagService
from domain.services.url_record_service import UrlRecordService
from domain.services.visibility_service import VisibilityService
from infrastructure.cache.memory_cache import InMemoryCacheManager


class FakeUnitOfWork:
    """Fake Unit of Work with all 6 repository mocks for unit testing."""

    def __init__(self) -> None:
        self.items = AsyncMock()
        self.tags = AsyncMock()
        self.item_tags = AsyncMock()
        self.url_records = AsyncMock()
        self.store_mappings = AsyncMock()
        self.acl_records = AsyncMock()
        self.committed = False
        self.rolled_back = False

        # Sensible defaults: no slugs, no visibility rows
        self.url_records.get_by_slug.return_value = None
        self.url_records.get_for_entity.return_value = []
        self.store_mappings.exists_for_entity.return_value = False
        self.acl_records.exists_for_entity.return_value = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


class FakeWorkContext:
    """Work context returning fixed role ids."""

    def __init__(self, role_ids: list[int] | None = None) -> None:
        self.role_ids = role_ids or [3]

    async def get_current_role_ids(self) -> list[int]:
        return list(self.role_ids)


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def cache() -> InMemoryCacheManager:
    """Create an empty cache manager."""
    return InMemoryCacheManager()


@pytest.fixture
def work_context() -> FakeWorkContext:
    """Work context acting as a registered customer."""
    return FakeWorkContext([3])


@pytest.fixture
def service(
    uow: FakeUnitOfWork, cache: InMemoryCacheManager, work_context: FakeWorkContext
) -> TagService:
    return TagService(
        lambda: uow,
        cache=cache,
        work_context=work_context,
        url_record_service=UrlRecordService(lambda: uow),
        visibility_service=VisibilityService(),
    )
