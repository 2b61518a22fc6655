"""Tag domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

TAG_ENTITY_NAME = "ProductTag"


@dataclass
class Tag:
    """Domain entity for a catalog Tag."""

    name: str
    id: Optional[int] = None
    created_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def entity_name(self) -> str:
        """Entity type name used by url records."""
        return TAG_ENTITY_NAME


@dataclass(frozen=True, slots=True)
class TagWithCount:
    """Read-only value object: a Tag bundled with its item count."""

    tag: Tag
    item_count: int
