"""SQLAlchemy implementation of item-tag mapping repository."""

from sqlalchemy import Select, distinct, exists, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.item import ITEM_ENTITY_NAME, ItemTagMapping
from domain.entities.visibility import ItemVisibility
from infrastructure.database.models import (
    AclRecordModel,
    CatalogItemModel,
    ItemTagModel,
    StoreMappingModel,
    TagModel,
)


class SQLAlchemyItemTagRepository:
    """SQLAlchemy implementation of IItemTagRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, item_id: int, tag_id: int) -> ItemTagMapping | None:
        """Get the mapping for an item/tag pair."""
        stmt = select(ItemTagModel).where(
            ItemTagModel.item_id == item_id,
            ItemTagModel.tag_id == tag_id,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def exists(self, item_id: int, tag_id: int) -> bool:
        """Check whether an item is mapped to a tag."""
        stmt = select(
            exists().where(
                ItemTagModel.item_id == item_id,
                ItemTagModel.tag_id == tag_id,
            )
        )
        result = await self._session.execute(stmt)
        return bool(result.scalar())

    async def create(self, mapping: ItemTagMapping) -> ItemTagMapping:
        """Create a new mapping."""
        model = ItemTagModel(item_id=mapping.item_id, tag_id=mapping.tag_id)
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, mapping: ItemTagMapping) -> bool:
        """Delete a mapping."""
        stmt = select(ItemTagModel).where(
            ItemTagModel.item_id == mapping.item_id,
            ItemTagModel.tag_id == mapping.tag_id,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    async def count_items_per_tag(
        self, visibility: ItemVisibility | None
    ) -> dict[int, int]:
        """Count distinct mapped items for every tag in a single query."""
        mappings = select(ItemTagModel.tag_id, ItemTagModel.item_id)
        if visibility is not None:
            mappings = mappings.where(
                ItemTagModel.item_id.in_(self._visible_item_ids(visibility))
            )
        counted = mappings.subquery()

        stmt = (
            select(
                TagModel.id,
                func.count(distinct(counted.c.item_id)).label("item_count"),
            )
            .outerjoin(counted, counted.c.tag_id == TagModel.id)
            .group_by(TagModel.id)
        )
        result = await self._session.execute(stmt)
        return {row.id: row.item_count for row in result}

    @staticmethod
    def _visible_item_ids(visibility: ItemVisibility) -> Select:
        """Select IDs of published, non-deleted items passing the visibility scope."""
        stmt = select(CatalogItemModel.id).where(
            CatalogItemModel.published.is_(True),
            CatalogItemModel.deleted.is_(False),
        )

        if visibility.store_id is not None:
            in_store = exists().where(
                StoreMappingModel.entity_name == ITEM_ENTITY_NAME,
                StoreMappingModel.entity_id == CatalogItemModel.id,
                StoreMappingModel.store_id == visibility.store_id,
            )
            stmt = stmt.where(or_(CatalogItemModel.limited_to_stores.is_(False), in_store))

        if visibility.role_ids is not None:
            granted = exists().where(
                AclRecordModel.entity_name == ITEM_ENTITY_NAME,
                AclRecordModel.entity_id == CatalogItemModel.id,
                AclRecordModel.customer_role_id.in_(visibility.role_ids),
            )
            stmt = stmt.where(or_(CatalogItemModel.subject_to_acl.is_(False), granted))

        return stmt

    def _to_entity(self, model: ItemTagModel) -> ItemTagMapping:
        """Convert ORM model to domain entity."""
        return ItemTagMapping(item_id=model.item_id, tag_id=model.tag_id)
