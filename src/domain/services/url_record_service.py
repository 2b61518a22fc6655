"""Url record service: slug generation and persistence."""

import re
import unicodedata
from collections.abc import Callable
from typing import Protocol

import structlog

from domain.entities.url_record import UrlRecord
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()

MAX_SLUG_LENGTH = 400

# Slugs that collide with storefront routes
RESERVED_SLUGS = frozenset(
    {
        "admin",
        "cart",
        "checkout",
        "login",
        "logout",
        "register",
        "search",
        "wishlist",
    }
)


class SluggedEntity(Protocol):
    """An entity that can own url records."""

    @property
    def id(self) -> int | None: ...

    @property
    def entity_name(self) -> str: ...


class UrlRecordService:
    """Service layer for url records (search-engine friendly slugs)."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    @staticmethod
    def generate_slug(name: str) -> str:
        """Generate a URL-friendly slug from a display name."""
        slug = unicodedata.normalize("NFKD", name)
        slug = slug.encode("ascii", "ignore").decode("ascii")
        slug = slug.lower().strip()
        slug = re.sub(r"[^a-z0-9\s_-]", "", slug)
        slug = re.sub(r"[\s_]+", "-", slug)
        slug = re.sub(r"-+", "-", slug)
        slug = slug.strip("-")
        return slug[:MAX_SLUG_LENGTH]

    async def validate_slug(
        self,
        uow: IUnitOfWork,
        entity: SluggedEntity,
        slug: str,
        name: str,
        ensure_not_empty: bool,
    ) -> str:
        """Return a unique slug for an entity within an existing UoW.

        Uses ``slug`` when given, otherwise derives it from ``name``. An
        empty result falls back to the entity id when ``ensure_not_empty``
        is set. Reserved slugs and slugs owned by another entity get a
        numeric suffix (``-2``, ``-3``, ...).
        """
        candidate = self.generate_slug(slug or name)
        if not candidate and ensure_not_empty:
            candidate = str(entity.id)
        if not candidate:
            return ""

        base = candidate
        suffix_number = 2
        while True:
            existing = await uow.url_records.get_by_slug(candidate)
            taken = existing is not None and not (
                existing.entity_id == entity.id
                and existing.entity_name == entity.entity_name
            )
            if not taken and candidate not in RESERVED_SLUGS:
                return candidate

            suffix = f"-{suffix_number}"
            candidate = f"{base[: MAX_SLUG_LENGTH - len(suffix)]}{suffix}"
            suffix_number += 1

    async def save_slug(
        self,
        uow: IUnitOfWork,
        entity: SluggedEntity,
        slug: str,
        language_id: int = 0,
    ) -> None:
        """Make ``slug`` the active slug of an entity within an existing UoW.

        Keeps at most one active record per entity and language. A previous
        record with the same slug is reactivated instead of duplicated.
        """
        if entity.id is None:
            raise ValueError("Cannot save a slug for an unsaved entity")

        records = await uow.url_records.get_for_entity(
            entity.entity_name, entity.id, language_id
        )
        active = next((r for r in records if r.is_active), None)

        if active is None:
            if slug:
                await uow.url_records.create(
                    UrlRecord(
                        entity_id=entity.id,
                        entity_name=entity.entity_name,
                        slug=slug,
                        language_id=language_id,
                    )
                )
                logger.debug("slug_saved", entity_name=entity.entity_name, slug=slug)
            return

        if active.slug == slug:
            return

        active.is_active = False
        await uow.url_records.update(active)
        if not slug:
            return

        previous = next(
            (r for r in records if not r.is_active and r.slug == slug and r is not active),
            None,
        )
        if previous is not None:
            previous.is_active = True
            await uow.url_records.update(previous)
        else:
            await uow.url_records.create(
                UrlRecord(
                    entity_id=entity.id,
                    entity_name=entity.entity_name,
                    slug=slug,
                    language_id=language_id,
                )
            )
        logger.debug(
            "slug_saved",
            entity_name=entity.entity_name,
            entity_id=entity.id,
            slug=slug,
        )

    async def get_active_slug(
        self, entity_name: str, entity_id: int, language_id: int = 0
    ) -> str:
        """Get the active slug of an entity, or an empty string."""
        async with self._uow_factory() as uow:
            records = await uow.url_records.get_for_entity(
                entity_name, entity_id, language_id
            )
            active = next((r for r in records if r.is_active), None)
            return active.slug if active else ""
