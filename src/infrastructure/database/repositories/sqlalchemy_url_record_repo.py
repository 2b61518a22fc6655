"""SQLAlchemy implementation of UrlRecord repository."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.url_record import UrlRecord
from infrastructure.database.models import UrlRecordModel


class SQLAlchemyUrlRecordRepository:
    """SQLAlchemy implementation of IUrlRecordRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_slug(self, slug: str) -> UrlRecord | None:
        """Get a url record by slug, preferring active and older records."""
        stmt = (
            select(UrlRecordModel)
            .where(UrlRecordModel.slug == slug)
            .order_by(UrlRecordModel.is_active.desc(), UrlRecordModel.id)
            .limit(1)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_for_entity(
        self, entity_name: str, entity_id: int, language_id: int
    ) -> list[UrlRecord]:
        """Get all url records of an entity in a language, newest first."""
        stmt = (
            select(UrlRecordModel)
            .where(
                UrlRecordModel.entity_name == entity_name,
                UrlRecordModel.entity_id == entity_id,
                UrlRecordModel.language_id == language_id,
            )
            .order_by(UrlRecordModel.id.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, record: UrlRecord) -> UrlRecord:
        """Create a new url record."""
        model = UrlRecordModel(
            entity_id=record.entity_id,
            entity_name=record.entity_name,
            slug=record.slug,
            language_id=record.language_id,
            is_active=record.is_active,
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, record: UrlRecord) -> UrlRecord:
        """Update an existing url record."""
        stmt = select(UrlRecordModel).where(UrlRecordModel.id == record.id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise ValueError(f"Url record {record.id} not found")

        model.slug = record.slug
        model.is_active = record.is_active

        await self._session.flush()
        return self._to_entity(model)

    def _to_entity(self, model: UrlRecordModel) -> UrlRecord:
        """Convert ORM model to domain entity."""
        return UrlRecord(
            id=model.id,
            entity_id=model.entity_id,
            entity_name=model.entity_name,
            slug=model.slug,
            language_id=model.language_id,
            is_active=model.is_active,
        )
