"""Tag repository protocol."""

from typing import Protocol

from domain.entities.tag import Tag


class ITagRepository(Protocol):
    """Repository interface for Tag entities."""

    async def get(self, id: int) -> Tag | None:
        """Get a tag by ID."""
        ...

    async def get_by_ids(self, ids: list[int]) -> list[Tag]:
        """Get the tags with the given IDs, ordered by ID."""
        ...

    async def get_all(self) -> list[Tag]:
        """Get all tags ordered by ID."""
        ...

    async def get_by_name(self, name: str) -> Tag | None:
        """Get a tag by exact name."""
        ...

    async def get_for_item(self, item_id: int) -> list[Tag]:
        """Get all tags mapped to an item, ordered by tag ID."""
        ...

    async def get_or_create(self, name: str) -> Tag:
        """Return the tag with this exact name, inserting it if missing."""
        ...

    async def update(self, tag: Tag) -> Tag:
        """Update an existing tag."""
        ...

    async def delete(self, id: int) -> bool:
        """Delete a tag and return success status."""
        ...
