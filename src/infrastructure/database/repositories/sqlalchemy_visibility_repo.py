"""SQLAlchemy implementations of store mapping and ACL repositories."""

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.visibility import AclRecord, StoreMapping
from infrastructure.database.models import AclRecordModel, StoreMappingModel


class SQLAlchemyStoreMappingRepository:
    """SQLAlchemy implementation of IStoreMappingRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def exists_for_entity(self, entity_name: str) -> bool:
        """Check whether any store mapping exists for an entity type."""
        stmt = select(exists().where(StoreMappingModel.entity_name == entity_name))
        result = await self._session.execute(stmt)
        return bool(result.scalar())

    async def create(self, mapping: StoreMapping) -> StoreMapping:
        """Create a new store mapping."""
        model = StoreMappingModel(
            entity_name=mapping.entity_name,
            entity_id=mapping.entity_id,
            store_id=mapping.store_id,
        )
        self._session.add(model)
        await self._session.flush()
        return StoreMapping(
            id=model.id,
            entity_name=model.entity_name,
            entity_id=model.entity_id,
            store_id=model.store_id,
        )


class SQLAlchemyAclRepository:
    """SQLAlchemy implementation of IAclRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def exists_for_entity(self, entity_name: str) -> bool:
        """Check whether any ACL record exists for an entity type."""
        stmt = select(exists().where(AclRecordModel.entity_name == entity_name))
        result = await self._session.execute(stmt)
        return bool(result.scalar())

    async def create(self, record: AclRecord) -> AclRecord:
        """Create a new ACL record."""
        model = AclRecordModel(
            entity_name=record.entity_name,
            entity_id=record.entity_id,
            customer_role_id=record.customer_role_id,
        )
        self._session.add(model)
        await self._session.flush()
        return AclRecord(
            id=model.id,
            entity_name=model.entity_name,
            entity_id=model.entity_id,
            customer_role_id=model.customer_role_id,
        )
