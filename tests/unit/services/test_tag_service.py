"""Unit tests for TagService."""

import pytest

from core.exceptions import (
    InvalidArgumentError,
    TagMappingNotFoundError,
    TagNotFoundError,
)
from domain.entities.item import CatalogItem, ItemTagMapping
from domain.entities.tag import Tag
from domain.entities.url_record import UrlRecord
from domain.entities.visibility import ItemVisibility
from domain.services.tag_service import TagService
from domain.services.url_record_service import UrlRecordService
from domain.services.visibility_service import VisibilityService
from infrastructure.cache.memory_cache import InMemoryCacheManager
from tests.unit.conftest import FakeUnitOfWork, FakeWorkContext


@pytest.fixture
def item() -> CatalogItem:
    return CatalogItem(id=1, name="Scarf")


def _mapped(*tag_ids: int):
    """side_effect for item_tags.exists: True for the given tag ids."""

    async def exists(item_id: int, tag_id: int) -> bool:
        return tag_id in tag_ids

    return exists


# --- reconcile_tags ---


class TestReconcileTags:
    @pytest.mark.asyncio
    async def test_replaces_removed_and_adds_new(
        self, service: TagService, uow: FakeUnitOfWork, item: CatalogItem
    ):
        red = Tag(id=1, name="red")
        blue = Tag(id=2, name="blue")
        green = Tag(id=3, name="green")
        uow.tags.get_for_item.return_value = [red, blue]
        uow.item_tags.get.return_value = ItemTagMapping(item_id=1, tag_id=1)
        uow.item_tags.exists.side_effect = _mapped(2)
        uow.tags.get_or_create.return_value = green

        await service.reconcile_tags(item, ["blue", "green"])

        uow.item_tags.get.assert_called_once_with(1, 1)
        uow.item_tags.delete.assert_called_once_with(ItemTagMapping(item_id=1, tag_id=1))
        uow.tags.get_or_create.assert_called_once_with("green")
        uow.item_tags.create.assert_called_once_with(ItemTagMapping(item_id=1, tag_id=3))
        assert uow.committed

    @pytest.mark.asyncio
    async def test_saves_slug_for_every_desired_tag(
        self, service: TagService, uow: FakeUnitOfWork, item: CatalogItem
    ):
        blue = Tag(id=2, name="blue")
        green = Tag(id=3, name="Light Green")
        uow.tags.get_for_item.return_value = [blue]
        uow.item_tags.exists.side_effect = _mapped(2)
        uow.tags.get_or_create.return_value = green

        await service.reconcile_tags(item, ["blue", "Light Green"])

        slugs = [call.args[0].slug for call in uow.url_records.create.call_args_list]
        assert slugs == ["blue", "light-green"]

    @pytest.mark.asyncio
    async def test_matches_existing_tags_case_insensitively(
        self, service: TagService, uow: FakeUnitOfWork, item: CatalogItem
    ):
        uow.tags.get_for_item.return_value = [Tag(id=7, name="Sale")]
        uow.item_tags.exists.side_effect = _mapped(7)

        await service.reconcile_tags(item, ["SALE"])

        uow.item_tags.delete.assert_not_called()
        uow.tags.get_or_create.assert_not_called()
        uow.item_tags.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_collapses_case_variant_duplicates(
        self, service: TagService, uow: FakeUnitOfWork, item: CatalogItem
    ):
        uow.tags.get_for_item.return_value = []
        uow.tags.get_or_create.return_value = Tag(id=5, name="Sale")
        uow.item_tags.exists.side_effect = _mapped()

        await service.reconcile_tags(item, ["Sale", "sale", "SALE"])

        uow.tags.get_or_create.assert_called_once_with("Sale")
        uow.item_tags.create.assert_called_once_with(ItemTagMapping(item_id=1, tag_id=5))

    @pytest.mark.asyncio
    async def test_empty_desired_removes_everything(
        self, service: TagService, uow: FakeUnitOfWork, item: CatalogItem
    ):
        uow.tags.get_for_item.return_value = [Tag(id=1, name="a"), Tag(id=2, name="b")]
        uow.item_tags.get.side_effect = lambda item_id, tag_id: ItemTagMapping(item_id, tag_id)

        await service.reconcile_tags(item, [])

        assert uow.item_tags.delete.call_count == 2
        uow.tags.delete.assert_not_called()

    @pytest.mark.asyncio
    async def test_raises_when_mapping_vanished(
        self, service: TagService, uow: FakeUnitOfWork, item: CatalogItem
    ):
        uow.tags.get_for_item.return_value = [Tag(id=1, name="red")]
        uow.item_tags.get.return_value = None

        with pytest.raises(TagMappingNotFoundError):
            await service.reconcile_tags(item, ["blue"])

        assert not uow.committed

    @pytest.mark.asyncio
    async def test_raises_when_mapping_delete_finds_nothing(
        self, service: TagService, uow: FakeUnitOfWork, item: CatalogItem
    ):
        uow.tags.get_for_item.return_value = [Tag(id=1, name="red")]
        uow.item_tags.get.return_value = ItemTagMapping(item_id=1, tag_id=1)
        uow.item_tags.delete.return_value = False

        with pytest.raises(TagMappingNotFoundError):
            await service.reconcile_tags(item, ["blue"])

        assert not uow.committed

    @pytest.mark.asyncio
    async def test_detaches_extra_case_variants(
        self, service: TagService, uow: FakeUnitOfWork, item: CatalogItem
    ):
        uow.tags.get_for_item.return_value = [Tag(id=1, name="Red"), Tag(id=2, name="red")]
        uow.item_tags.get.side_effect = lambda item_id, tag_id: ItemTagMapping(item_id, tag_id)
        uow.item_tags.exists.return_value = True

        await service.reconcile_tags(item, ["red"])

        uow.item_tags.delete.assert_called_once_with(ItemTagMapping(item_id=1, tag_id=2))
        uow.tags.get_or_create.assert_not_called()

    @pytest.mark.asyncio
    async def test_raises_for_missing_item(self, service: TagService, uow: FakeUnitOfWork):
        with pytest.raises(InvalidArgumentError):
            await service.reconcile_tags(None, ["red"])  # type: ignore[arg-type]

        uow.tags.get_for_item.assert_not_called()

    @pytest.mark.asyncio
    async def test_raises_for_unsaved_item(self, service: TagService):
        with pytest.raises(InvalidArgumentError):
            await service.reconcile_tags(CatalogItem(name="Draft"), ["red"])

    @pytest.mark.asyncio
    async def test_raises_for_blank_name(
        self, service: TagService, uow: FakeUnitOfWork, item: CatalogItem
    ):
        with pytest.raises(InvalidArgumentError):
            await service.reconcile_tags(item, ["red", "  "])

        uow.tags.get_for_item.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalidates_tag_cache(
        self, service: TagService, uow: FakeUnitOfWork, item: CatalogItem
    ):
        uow.tags.get_all.return_value = [Tag(id=1, name="red")]
        await service.list_tags()
        uow.tags.get_for_item.return_value = []
        uow.tags.get_or_create.return_value = Tag(id=2, name="blue")
        uow.item_tags.exists.side_effect = _mapped()

        await service.reconcile_tags(item, ["blue"])
        await service.list_tags()

        assert uow.tags.get_all.call_count == 2


# --- get_tag_counts / get_item_count ---


class TestTagCounts:
    @pytest.mark.asyncio
    async def test_show_hidden_counts_all_mappings(
        self, service: TagService, uow: FakeUnitOfWork
    ):
        uow.item_tags.count_items_per_tag.return_value = {1: 4, 2: 0}

        result = await service.get_tag_counts(store_id=1, show_hidden=True)

        assert result == {1: 4, 2: 0}
        uow.item_tags.count_items_per_tag.assert_called_once_with(None)
        uow.store_mappings.exists_for_entity.assert_not_called()

    @pytest.mark.asyncio
    async def test_skips_predicates_without_mapping_rows(
        self, service: TagService, uow: FakeUnitOfWork
    ):
        uow.item_tags.count_items_per_tag.return_value = {}

        await service.get_tag_counts(store_id=1)

        uow.item_tags.count_items_per_tag.assert_called_once_with(
            ItemVisibility(store_id=None, role_ids=None)
        )

    @pytest.mark.asyncio
    async def test_applies_store_and_acl_scope(
        self, service: TagService, uow: FakeUnitOfWork, work_context: FakeWorkContext
    ):
        work_context.role_ids = [3, 1, 3]
        uow.store_mappings.exists_for_entity.return_value = True
        uow.acl_records.exists_for_entity.return_value = True
        uow.item_tags.count_items_per_tag.return_value = {}

        await service.get_tag_counts(store_id=5)

        uow.item_tags.count_items_per_tag.assert_called_once_with(
            ItemVisibility(store_id=5, role_ids=(1, 3))
        )

    @pytest.mark.asyncio
    async def test_memoizes_per_store_roles_and_visibility(
        self, service: TagService, uow: FakeUnitOfWork, work_context: FakeWorkContext
    ):
        uow.item_tags.count_items_per_tag.return_value = {1: 2}

        await service.get_tag_counts(store_id=1)
        await service.get_tag_counts(store_id=1)
        assert uow.item_tags.count_items_per_tag.call_count == 1

        await service.get_tag_counts(store_id=1, show_hidden=True)
        await service.get_tag_counts(store_id=2)
        work_context.role_ids = [9]
        await service.get_tag_counts(store_id=1)
        assert uow.item_tags.count_items_per_tag.call_count == 4

    @pytest.mark.asyncio
    async def test_returned_dict_does_not_leak_into_cache(
        self, service: TagService, uow: FakeUnitOfWork
    ):
        uow.item_tags.count_items_per_tag.return_value = {1: 2}

        first = await service.get_tag_counts(store_id=1)
        first[1] = 100

        assert await service.get_tag_counts(store_id=1) == {1: 2}

    @pytest.mark.asyncio
    async def test_item_count_for_known_tag(self, service: TagService, uow: FakeUnitOfWork):
        uow.item_tags.count_items_per_tag.return_value = {1: 2, 2: 0}

        assert await service.get_item_count(1, store_id=1) == 2
        assert await service.get_item_count(2, store_id=1) == 0

    @pytest.mark.asyncio
    async def test_item_count_for_unknown_tag_is_zero(
        self, service: TagService, uow: FakeUnitOfWork
    ):
        uow.item_tags.count_items_per_tag.return_value = {1: 2}

        assert await service.get_item_count(999, store_id=1) == 0

    @pytest.mark.asyncio
    async def test_all_with_counts(self, service: TagService, uow: FakeUnitOfWork):
        uow.tags.get_all.return_value = [Tag(id=1, name="red"), Tag(id=2, name="blue")]
        uow.item_tags.count_items_per_tag.return_value = {1: 3}

        result = await service.get_all_with_counts(store_id=1)

        assert [(r.tag.name, r.item_count) for r in result] == [("red", 3), ("blue", 0)]


# --- list_tags / list_tags_for_item ---


class TestListTags:
    @pytest.mark.asyncio
    async def test_filters_by_substring(self, service: TagService, uow: FakeUnitOfWork):
        uow.tags.get_all.return_value = [
            Tag(id=1, name="blue"),
            Tag(id=2, name="black"),
            Tag(id=3, name="red"),
        ]

        result = await service.list_tags("bl")

        assert [t.name for t in result] == ["blue", "black"]

    @pytest.mark.asyncio
    async def test_filter_is_case_sensitive(self, service: TagService, uow: FakeUnitOfWork):
        uow.tags.get_all.return_value = [Tag(id=1, name="blue")]

        assert await service.list_tags("Bl") == []

    @pytest.mark.asyncio
    async def test_caches_unfiltered_list_only(self, service: TagService, uow: FakeUnitOfWork):
        uow.tags.get_all.return_value = [Tag(id=1, name="blue"), Tag(id=2, name="red")]

        await service.list_tags("bl")
        everything = await service.list_tags()

        assert len(everything) == 2
        uow.tags.get_all.assert_called_once()

    @pytest.mark.asyncio
    async def test_tags_for_item_cached_per_item(
        self, service: TagService, uow: FakeUnitOfWork
    ):
        uow.tags.get_for_item.return_value = [Tag(id=1, name="blue")]

        await service.list_tags_for_item(1)
        await service.list_tags_for_item(1)
        await service.list_tags_for_item(2)

        assert uow.tags.get_for_item.call_count == 2

    @pytest.mark.asyncio
    async def test_returned_tags_do_not_leak_into_cache(
        self, service: TagService, uow: FakeUnitOfWork
    ):
        uow.tags.get_all.return_value = [Tag(id=1, name="blue")]
        uow.tags.get_for_item.return_value = [Tag(id=1, name="blue")]

        (listed,) = await service.list_tags()
        listed.name = "changed"
        (mapped,) = await service.list_tags_for_item(1)
        mapped.name = "changed"

        assert [t.name for t in await service.list_tags()] == ["blue"]
        assert [t.name for t in await service.list_tags_for_item(1)] == ["blue"]


# --- get_by_id / get_by_ids ---


class TestGet:
    @pytest.mark.asyncio
    async def test_get_by_id(self, service: TagService, uow: FakeUnitOfWork):
        uow.tags.get.return_value = Tag(id=1, name="blue")

        assert (await service.get_by_id(1)).name == "blue"

    @pytest.mark.asyncio
    async def test_get_by_id_not_found(self, service: TagService, uow: FakeUnitOfWork):
        uow.tags.get.return_value = None

        with pytest.raises(TagNotFoundError):
            await service.get_by_id(1)

    @pytest.mark.asyncio
    async def test_get_by_ids_empty(self, service: TagService, uow: FakeUnitOfWork):
        assert await service.get_by_ids([]) == []
        uow.tags.get_by_ids.assert_not_called()


# --- update ---


class TestUpdate:
    @pytest.mark.asyncio
    async def test_renames_and_moves_slug(self, service: TagService, uow: FakeUnitOfWork):
        tag = Tag(id=1, name="Navy Blue")
        uow.tags.get.return_value = Tag(id=1, name="blue")
        uow.tags.update.side_effect = lambda t: t
        active = UrlRecord(id=10, entity_id=1, entity_name="ProductTag", slug="blue")
        uow.url_records.get_for_entity.return_value = [active]

        result = await service.update(tag)

        assert result.name == "Navy Blue"
        assert not active.is_active
        uow.url_records.update.assert_called_once_with(active)
        assert uow.url_records.create.call_args.args[0].slug == "navy-blue"
        assert uow.committed

    @pytest.mark.asyncio
    async def test_raises_not_found(self, service: TagService, uow: FakeUnitOfWork):
        uow.tags.get.return_value = None

        with pytest.raises(TagNotFoundError):
            await service.update(Tag(id=1, name="x"))

    @pytest.mark.asyncio
    async def test_rejects_blank_name(self, service: TagService, uow: FakeUnitOfWork):
        with pytest.raises(InvalidArgumentError):
            await service.update(Tag(id=1, name=" "))

        uow.tags.get.assert_not_called()


# --- delete / delete_many / insert_mapping ---


class TestDelete:
    @pytest.mark.asyncio
    async def test_deletes_each_tag(self, service: TagService, uow: FakeUnitOfWork):
        uow.tags.delete.return_value = True

        await service.delete_many([Tag(id=1, name="a"), Tag(id=2, name="b")])

        assert [c.args[0] for c in uow.tags.delete.call_args_list] == [1, 2]

    @pytest.mark.asyncio
    async def test_partial_failure_keeps_earlier_deletions(self, uow: FakeUnitOfWork):
        uows = [FakeUnitOfWork(), FakeUnitOfWork()]
        uows[0].tags.delete.return_value = True
        uows[1].tags.delete.return_value = False
        factory = iter(uows)
        service = TagService(
            lambda: next(factory),
            cache=InMemoryCacheManager(),
            work_context=FakeWorkContext(),
            url_record_service=UrlRecordService(lambda: uow),
            visibility_service=VisibilityService(),
        )

        with pytest.raises(TagNotFoundError):
            await service.delete_many([Tag(id=1, name="a"), Tag(id=2, name="b")])

        assert uows[0].committed
        assert not uows[1].committed

    @pytest.mark.asyncio
    async def test_delete_many_requires_sequence(self, service: TagService):
        with pytest.raises(InvalidArgumentError):
            await service.delete_many(None)  # type: ignore[arg-type]

    @pytest.mark.asyncio
    async def test_insert_mapping_invalidates_item_tags(
        self, service: TagService, uow: FakeUnitOfWork
    ):
        uow.tags.get_for_item.return_value = []
        await service.list_tags_for_item(1)

        await service.insert_mapping(ItemTagMapping(item_id=1, tag_id=2))
        await service.list_tags_for_item(1)

        uow.item_tags.create.assert_called_once_with(ItemTagMapping(item_id=1, tag_id=2))
        assert uow.tags.get_for_item.call_count == 2
