"""Url record repository protocol."""

from typing import Protocol

from domain.entities.url_record import UrlRecord


class IUrlRecordRepository(Protocol):
    """Repository interface for UrlRecord entities."""

    async def get_by_slug(self, slug: str) -> UrlRecord | None:
        """Get a url record by slug (active or not)."""
        ...

    async def get_for_entity(
        self, entity_name: str, entity_id: int, language_id: int
    ) -> list[UrlRecord]:
        """Get all url records of an entity in a language, newest first."""
        ...

    async def create(self, record: UrlRecord) -> UrlRecord:
        """Create a new url record."""
        ...

    async def update(self, record: UrlRecord) -> UrlRecord:
        """Update an existing url record."""
        ...
