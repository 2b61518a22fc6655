"""Catalog item repository protocol."""

from typing import Protocol

from domain.entities.item import CatalogItem


class IItemRepository(Protocol):
    """Repository interface for CatalogItem entities."""

    async def get(self, id: int) -> CatalogItem | None:
        """Get an item by ID."""
        ...

    async def create(self, item: CatalogItem) -> CatalogItem:
        """Create a new item."""
        ...

    async def update(self, item: CatalogItem) -> CatalogItem:
        """Update an existing item."""
        ...
