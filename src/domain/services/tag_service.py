"""Tag service layer with business logic."""

from collections.abc import Callable, Sequence
from dataclasses import replace
from typing import Optional

import structlog

from core.exceptions import (
    InvalidArgumentError,
    TagMappingNotFoundError,
    TagNotFoundError,
)
from domain.caching import TAG_REGION, ICacheManager
from domain.context import IWorkContext
from domain.entities.item import ITEM_ENTITY_NAME, CatalogItem, ItemTagMapping
from domain.entities.tag import Tag, TagWithCount
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.url_record_service import UrlRecordService
from domain.services.visibility_service import VisibilityService

logger = structlog.get_logger()


class TagService:
    """Service layer for catalog Tag business logic."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        cache: ICacheManager,
        work_context: IWorkContext,
        url_record_service: UrlRecordService,
        visibility_service: VisibilityService,
    ) -> None:
        self._uow_factory = uow_factory
        self._cache = cache
        self._work_context = work_context
        self._url_records = url_record_service
        self._visibility = visibility_service

    # --- Queries ---

    async def get_by_id(self, tag_id: int) -> Tag:
        """Get a specific tag."""
        async with self._uow_factory() as uow:
            tag = await uow.tags.get(tag_id)
            if not tag:
                raise TagNotFoundError(str(tag_id))
            return tag

    async def get_by_ids(self, tag_ids: Sequence[int]) -> list[Tag]:
        """Get tags by IDs. Unknown IDs are skipped."""
        if not tag_ids:
            return []
        async with self._uow_factory() as uow:
            return await uow.tags.get_by_ids(list(tag_ids))  # type: ignore[no-any-return]

    async def list_tags(self, name_filter: Optional[str] = None) -> list[Tag]:
        """Get all tags, optionally keeping those whose name contains ``name_filter``.

        The full list is cached; the case-sensitive filter runs on every call.
        """
        all_tags = await self._cache.get(TAG_REGION.key("all"), self._load_all_tags)
        if name_filter:
            return [replace(tag) for tag in all_tags if name_filter in tag.name]
        return [replace(tag) for tag in all_tags]

    async def list_tags_for_item(self, item_id: int) -> list[Tag]:
        """Get the tags mapped to an item, ordered by tag ID."""

        async def load() -> list[Tag]:
            async with self._uow_factory() as uow:
                return await uow.tags.get_for_item(item_id)  # type: ignore[no-any-return]

        tags = await self._cache.get(TAG_REGION.key("byitem", item_id), load)
        return [replace(tag) for tag in tags]

    async def get_tag_counts(self, store_id: int, show_hidden: bool = False) -> dict[int, int]:
        """Get the number of items per tag ID, scoped to a store and the current actor.

        Every tag is present; tags without visible items map to 0.
        """
        role_ids = sorted(set(await self._work_context.get_current_role_ids()))
        key = TAG_REGION.key("count", store_id, role_ids, show_hidden)

        async def load() -> dict[int, int]:
            async with self._uow_factory() as uow:
                visibility = None
                if not show_hidden:
                    visibility = await self._visibility.resolve(
                        uow, ITEM_ENTITY_NAME, store_id, role_ids
                    )
                return await uow.item_tags.count_items_per_tag(visibility)  # type: ignore[no-any-return]

        counts = await self._cache.get(key, load)
        return dict(counts)

    async def get_item_count(
        self, tag_id: int, store_id: int, show_hidden: bool = False
    ) -> int:
        """Get the number of items for one tag. Unknown tags count 0."""
        counts = await self.get_tag_counts(store_id, show_hidden)
        return counts.get(tag_id, 0)

    async def get_all_with_counts(
        self, store_id: int, show_hidden: bool = False
    ) -> list[TagWithCount]:
        """Get all tags paired with their item counts."""
        tags = await self.list_tags()
        counts = await self.get_tag_counts(store_id, show_hidden)
        return [
            TagWithCount(tag=tag, item_count=counts.get(tag.id, 0))  # type: ignore[arg-type]
            for tag in tags
        ]

    # --- Commands ---

    async def update(self, tag: Tag) -> Tag:
        """Update a tag's name and regenerate its slug."""
        if tag is None:
            raise InvalidArgumentError("tag")
        if not tag.name or not tag.name.strip():
            raise InvalidArgumentError("tag.name", "Tag name must not be empty")

        async with self._uow_factory() as uow:
            existing = await uow.tags.get(tag.id)  # type: ignore[arg-type]
            if not existing:
                raise TagNotFoundError(str(tag.id))

            existing.name = tag.name
            updated = await uow.tags.update(existing)
            await self._refresh_slug(uow, updated)
            await uow.commit()

        await self._cache.invalidate(TAG_REGION)
        return updated  # type: ignore[no-any-return]

    async def delete(self, tag: Tag) -> None:
        """Delete a tag (detaches it from all items via cascade)."""
        if tag is None:
            raise InvalidArgumentError("tag")

        async with self._uow_factory() as uow:
            deleted = await uow.tags.delete(tag.id)  # type: ignore[arg-type]
            if not deleted:
                raise TagNotFoundError(str(tag.id))
            await uow.commit()

        logger.info("tag_deleted", tag_id=tag.id, name=tag.name)
        await self._cache.invalidate(TAG_REGION)

    async def delete_many(self, tags: Sequence[Tag]) -> None:
        """Delete tags one by one; a failure leaves earlier deletions in place."""
        if tags is None:
            raise InvalidArgumentError("tags")

        for tag in tags:
            await self.delete(tag)

    async def insert_mapping(self, mapping: ItemTagMapping) -> None:
        """Map an item to a tag."""
        if mapping is None:
            raise InvalidArgumentError("mapping")

        async with self._uow_factory() as uow:
            await uow.item_tags.create(mapping)
            await uow.commit()

        await self._cache.invalidate(TAG_REGION)

    async def reconcile_tags(
        self, item: CatalogItem, desired_names: Sequence[str]
    ) -> None:
        """Make the item's tags exactly match ``desired_names``.

        Names compare case-insensitively. Tags no longer desired are
        detached (the tags themselves are kept), unseen names become new
        tags, and every desired tag gets its slug regenerated. Runs in one
        unit of work, then invalidates the tag cache region.
        """
        if item is None:
            raise InvalidArgumentError("item")
        if item.id is None:
            raise InvalidArgumentError("item.id", "Item must be saved before tagging")
        if desired_names is None:
            raise InvalidArgumentError("desired_names")
        if any(not name or not name.strip() for name in desired_names):
            raise InvalidArgumentError("desired_names", "Tag names must not be empty")

        desired = _unique_names(desired_names)
        desired_keys = {name.casefold() for name in desired}

        async with self._uow_factory() as uow:
            current = await uow.tags.get_for_item(item.id)

            retained: dict[str, Tag] = {}
            for tag in current:
                key = tag.name.casefold()
                # Extra case variants of a retained name are detached
                if key in desired_keys and key not in retained:
                    retained[key] = tag
                    continue
                await self._delete_mapping(uow, item.id, tag.id)  # type: ignore[arg-type]
                logger.debug("tag_mapping_removed", item_id=item.id, tag_id=tag.id)

            for name in desired:
                tag = retained.get(name.casefold())
                if tag is None:
                    tag = await uow.tags.get_or_create(name)

                if not await uow.item_tags.exists(item.id, tag.id):
                    await uow.item_tags.create(
                        ItemTagMapping(item_id=item.id, tag_id=tag.id)  # type: ignore[arg-type]
                    )

                await self._refresh_slug(uow, tag)

            await uow.commit()

        logger.info(
            "tags_reconciled",
            item_id=item.id,
            desired_count=len(desired),
            current_count=len(current),
        )
        await self._cache.invalidate(TAG_REGION)

    # --- Helpers ---

    async def _load_all_tags(self) -> list[Tag]:
        async with self._uow_factory() as uow:
            return await uow.tags.get_all()  # type: ignore[no-any-return]

    async def _delete_mapping(self, uow: IUnitOfWork, item_id: int, tag_id: int) -> None:
        """Delete an item-tag mapping that must exist."""
        mapping = await uow.item_tags.get(item_id, tag_id)
        if mapping is None:
            raise TagMappingNotFoundError(str(item_id), str(tag_id))
        if not await uow.item_tags.delete(mapping):
            raise TagMappingNotFoundError(str(item_id), str(tag_id))

    async def _refresh_slug(self, uow: IUnitOfWork, tag: Tag) -> None:
        slug = await self._url_records.validate_slug(uow, tag, "", tag.name, True)
        await self._url_records.save_slug(uow, tag, slug, 0)


def _unique_names(names: Sequence[str]) -> list[str]:
    """De-duplicate names case-insensitively, keeping the first spelling and order."""
    seen: set[str] = set()
    unique: list[str] = []
    for name in names:
        key = name.casefold()
        if key in seen:
            continue
        seen.add(key)
        unique.append(name)
    return unique
