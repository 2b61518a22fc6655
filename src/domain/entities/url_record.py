"""Url record domain entity."""

from dataclasses import dataclass


@dataclass
class UrlRecord:
    """A search-engine friendly slug bound to an entity."""

    entity_id: int
    entity_name: str
    slug: str
    language_id: int = 0
    is_active: bool = True
    id: int | None = None
