"""Item-tag mapping repository protocol."""

from typing import Protocol

from domain.entities.item import ItemTagMapping
from domain.entities.visibility import ItemVisibility


class IItemTagRepository(Protocol):
    """Repository interface for item-tag mappings."""

    async def get(self, item_id: int, tag_id: int) -> ItemTagMapping | None:
        """Get the mapping for an item/tag pair."""
        ...

    async def exists(self, item_id: int, tag_id: int) -> bool:
        """Check whether an item is mapped to a tag."""
        ...

    async def create(self, mapping: ItemTagMapping) -> ItemTagMapping:
        """Create a new mapping."""
        ...

    async def delete(self, mapping: ItemTagMapping) -> bool:
        """Delete a mapping and return success status."""
        ...

    async def count_items_per_tag(
        self, visibility: ItemVisibility | None
    ) -> dict[int, int]:
        """Count distinct mapped items for every tag.

        ``visibility=None`` counts every mapping. Otherwise only published,
        non-deleted items passing the visibility predicates are counted.
        Tags without matching items map to 0.
        """
        ...
