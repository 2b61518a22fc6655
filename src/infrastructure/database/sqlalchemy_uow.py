"""SQLAlchemy Unit of Work implementation."""

from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from infrastructure.database.repositories.sqlalchemy_item_repo import SQLAlchemyItemRepository
from infrastructure.database.repositories.sqlalchemy_item_tag_repo import SQLAlchemyItemTagRepository
from infrastructure.database.repositories.sqlalchemy_tag_repo import SQLAlchemyTagRepository
from infrastructure.database.repositories.sqlalchemy_url_record_repo import SQLAlchemyUrlRecordRepository
from infrastructure.database.repositories.sqlalchemy_visibility_repo import (
    SQLAlchemyAclRepository,
    SQLAlchemyStoreMappingRepository,
)


class SQLAlchemyUnitOfWork:
    """Unit of Work implementation using SQLAlchemy."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._session: Optional[AsyncSession] = None

    def _require_session(self) -> AsyncSession:
        if not self._session:
            raise RuntimeError("UnitOfWork not initialized. Use as context manager.")
        return self._session

    @property
    def items(self) -> SQLAlchemyItemRepository:
        """Get catalog item repository."""
        return SQLAlchemyItemRepository(self._require_session())

    @property
    def tags(self) -> SQLAlchemyTagRepository:
        """Get tag repository."""
        return SQLAlchemyTagRepository(self._require_session())

    @property
    def item_tags(self) -> SQLAlchemyItemTagRepository:
        """Get item-tag mapping repository."""
        return SQLAlchemyItemTagRepository(self._require_session())

    @property
    def url_records(self) -> SQLAlchemyUrlRecordRepository:
        """Get url record repository."""
        return SQLAlchemyUrlRecordRepository(self._require_session())

    @property
    def store_mappings(self) -> SQLAlchemyStoreMappingRepository:
        """Get store mapping repository."""
        return SQLAlchemyStoreMappingRepository(self._require_session())

    @property
    def acl_records(self) -> SQLAlchemyAclRepository:
        """Get ACL record repository."""
        return SQLAlchemyAclRepository(self._require_session())

    async def commit(self) -> None:
        """Commit the current transaction."""
        if self._session:
            await self._session.commit()

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        if self._session:
            await self._session.rollback()

    async def __aenter__(self) -> "SQLAlchemyUnitOfWork":
        """Enter the context manager and create session."""
        self._session = self._session_factory()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[Exception],
        exc_tb: Any,
    ) -> None:
        """Exit the context manager and cleanup."""
        if self._session:
            if exc_type:
                await self.rollback()
            await self._session.close()
            self._session = None
