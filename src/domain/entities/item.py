"""Catalog item domain entities."""

from dataclasses import dataclass, field
from datetime import datetime

ITEM_ENTITY_NAME = "Product"


@dataclass
class CatalogItem:
    """Domain entity for a catalog item (product)."""

    name: str
    id: int | None = None
    published: bool = True
    deleted: bool = False
    limited_to_stores: bool = False
    subject_to_acl: bool = False
    created_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def entity_name(self) -> str:
        """Entity type name used by store mappings and ACL records."""
        return ITEM_ENTITY_NAME


@dataclass(frozen=True, slots=True)
class ItemTagMapping:
    """Association between one catalog item and one tag."""

    item_id: int
    tag_id: int
