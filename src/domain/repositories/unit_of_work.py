"""Unit of Work protocol."""

from typing import Protocol

from domain.repositories.item_repository import IItemRepository
from domain.repositories.item_tag_repository import IItemTagRepository
from domain.repositories.tag_repository import ITagRepository
from domain.repositories.url_record_repository import IUrlRecordRepository
from domain.repositories.visibility_repository import (
    IAclRepository,
    IStoreMappingRepository,
)


class IUnitOfWork(Protocol):
    """Unit of Work interface for managing transactions."""

    items: IItemRepository
    tags: ITagRepository
    item_tags: IItemTagRepository
    url_records: IUrlRecordRepository
    store_mappings: IStoreMappingRepository
    acl_records: IAclRepository

    async def commit(self) -> None:
        """Commit the current transaction."""
        ...

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        ...

    async def __aenter__(self) -> "IUnitOfWork":
        """Enter the context manager."""
        ...

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # type: ignore
        """Exit the context manager."""
        ...
