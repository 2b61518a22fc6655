"""Visibility domain entities: store mappings, ACL records and scopes."""

from dataclasses import dataclass


@dataclass
class StoreMapping:
    """Limits an entity to a store."""

    entity_name: str
    entity_id: int
    store_id: int
    id: int | None = None


@dataclass
class AclRecord:
    """Grants a customer role access to an entity."""

    entity_name: str
    entity_id: int
    customer_role_id: int
    id: int | None = None


@dataclass(frozen=True, slots=True)
class ItemVisibility:
    """Filter applied to items when hidden entries are excluded.

    A ``None`` field means the corresponding predicate is not applied.
    Published and not-deleted checks always apply.
    """

    store_id: int | None = None
    role_ids: tuple[int, ...] | None = None
