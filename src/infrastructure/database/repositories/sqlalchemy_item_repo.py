"""SQLAlchemy implementation of CatalogItem repository."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.item import CatalogItem
from infrastructure.database.models import CatalogItemModel


class SQLAlchemyItemRepository:
    """SQLAlchemy implementation of IItemRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: int) -> CatalogItem | None:
        """Get an item by ID."""
        stmt = select(CatalogItemModel).where(CatalogItemModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def create(self, item: CatalogItem) -> CatalogItem:
        """Create a new item."""
        model = self._to_model(item)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, item: CatalogItem) -> CatalogItem:
        """Update an existing item."""
        stmt = select(CatalogItemModel).where(CatalogItemModel.id == item.id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise ValueError(f"Item {item.id} not found")

        model.name = item.name
        model.published = item.published
        model.deleted = item.deleted
        model.limited_to_stores = item.limited_to_stores
        model.subject_to_acl = item.subject_to_acl

        await self._session.flush()
        return self._to_entity(model)

    def _to_entity(self, model: CatalogItemModel) -> CatalogItem:
        """Convert ORM model to domain entity."""
        return CatalogItem(
            id=model.id,
            name=model.name,
            published=model.published,
            deleted=model.deleted,
            limited_to_stores=model.limited_to_stores,
            subject_to_acl=model.subject_to_acl,
            created_at=model.created_at,
        )

    def _to_model(self, entity: CatalogItem) -> CatalogItemModel:
        """Convert domain entity to ORM model."""
        return CatalogItemModel(
            id=entity.id,
            name=entity.name,
            published=entity.published,
            deleted=entity.deleted,
            limited_to_stores=entity.limited_to_stores,
            subject_to_acl=entity.subject_to_acl,
            created_at=entity.created_at,
        )
