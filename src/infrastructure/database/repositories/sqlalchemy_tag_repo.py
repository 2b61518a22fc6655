"""SQLAlchemy implementation of Tag repository."""

from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.tag import Tag
from infrastructure.database.models import ItemTagModel, TagModel


class SQLAlchemyTagRepository:
    """SQLAlchemy implementation of ITagRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: int) -> Tag | None:
        """Get a tag by ID."""
        stmt = select(TagModel).where(TagModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_by_ids(self, ids: list[int]) -> list[Tag]:
        """Get the tags with the given IDs, ordered by ID."""
        if not ids:
            return []
        stmt = select(TagModel).where(TagModel.id.in_(ids)).order_by(TagModel.id)
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def get_all(self) -> list[Tag]:
        """Get all tags ordered by ID."""
        stmt = select(TagModel).order_by(TagModel.id)
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def get_by_name(self, name: str) -> Tag | None:
        """Get a tag by exact name."""
        stmt = select(TagModel).where(TagModel.name == name)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_for_item(self, item_id: int) -> list[Tag]:
        """Get all tags mapped to an item, ordered by tag ID."""
        stmt = (
            select(TagModel)
            .join(ItemTagModel, TagModel.id == ItemTagModel.tag_id)
            .where(ItemTagModel.item_id == item_id)
            .order_by(TagModel.id)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def get_or_create(self, name: str) -> Tag:
        """Return the tag with this exact name, inserting it if missing.

        Relies on the unique index on ``tags.name``: a concurrent insert of
        the same name is skipped by ``ON CONFLICT DO NOTHING`` and the
        existing row is returned instead.
        """
        existing = await self.get_by_name(name)
        if existing:
            return existing

        dialect = self._session.get_bind().dialect.name
        if dialect == "sqlite":
            insert = sqlite_insert
        elif dialect == "postgresql":
            insert = pg_insert
        else:
            raise NotImplementedError(f"get_or_create does not support the {dialect!r} dialect")
        stmt = (
            insert(TagModel)
            .values(name=name, created_at=datetime.utcnow())
            .on_conflict_do_nothing(index_elements=[TagModel.name])
        )
        await self._session.execute(stmt)

        created = await self.get_by_name(name)
        if created is None:
            raise RuntimeError(f"Tag '{name}' vanished after insert")
        return created

    async def update(self, tag: Tag) -> Tag:
        """Update an existing tag."""
        stmt = select(TagModel).where(TagModel.id == tag.id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise ValueError(f"Tag {tag.id} not found")

        model.name = tag.name

        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, id: int) -> bool:
        """Delete a tag together with its item mappings."""
        stmt = select(TagModel).where(TagModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return False

        await self._session.execute(delete(ItemTagModel).where(ItemTagModel.tag_id == id))
        await self._session.delete(model)
        await self._session.flush()
        return True

    def _to_entity(self, model: TagModel) -> Tag:
        """Convert ORM model to domain entity."""
        return Tag(
            id=model.id,
            name=model.name,
            created_at=model.created_at,
        )
