"""Store mapping and ACL repository protocols."""

from typing import Protocol

from domain.entities.visibility import AclRecord, StoreMapping


class IStoreMappingRepository(Protocol):
    """Repository interface for StoreMapping entities."""

    async def exists_for_entity(self, entity_name: str) -> bool:
        """Check whether any store mapping exists for an entity type."""
        ...

    async def create(self, mapping: StoreMapping) -> StoreMapping:
        """Create a new store mapping."""
        ...


class IAclRepository(Protocol):
    """Repository interface for AclRecord entities."""

    async def exists_for_entity(self, entity_name: str) -> bool:
        """Check whether any ACL record exists for an entity type."""
        ...

    async def create(self, record: AclRecord) -> AclRecord:
        """Create a new ACL record."""
        ...
