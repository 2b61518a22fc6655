"""Composition root: factories wiring services to infrastructure."""

from functools import lru_cache
from typing import Callable

from core.config import settings
from core.logging import setup_logging
from domain.services.tag_service import TagService
from domain.services.url_record_service import UrlRecordService
from domain.services.visibility_service import VisibilityService
from infrastructure.cache.memory_cache import InMemoryCacheManager
from infrastructure.context.work_context import ContextVarWorkContext
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork

# Initialize structured logging
setup_logging()


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_cache_manager() -> InMemoryCacheManager:
    """Get the application-wide cache manager."""
    return InMemoryCacheManager(default_ttl_seconds=settings.cache_default_ttl_seconds)


@lru_cache
def get_work_context() -> ContextVarWorkContext:
    """Get the work context."""
    return ContextVarWorkContext(guest_role_ids=settings.guest_role_ids)


@lru_cache
def get_url_record_service() -> UrlRecordService:
    """Get Url record service instance."""
    return UrlRecordService(get_uow_factory())


@lru_cache
def get_visibility_service() -> VisibilityService:
    """Get Visibility service instance."""
    return VisibilityService(
        ignore_store_limitations=settings.ignore_store_limitations,
        ignore_acl=settings.ignore_acl,
    )


@lru_cache
def get_tag_service() -> TagService:
    """Get Tag service instance."""
    return TagService(
        get_uow_factory(),
        cache=get_cache_manager(),
        work_context=get_work_context(),
        url_record_service=get_url_record_service(),
        visibility_service=get_visibility_service(),
    )
