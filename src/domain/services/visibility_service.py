"""Visibility service: store mapping and ACL scoping for catalog items."""

from collections.abc import Iterable

import structlog

from domain.entities.visibility import ItemVisibility
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class VisibilityService:
    """Decides which visibility predicates apply to hidden-entry filtering."""

    def __init__(
        self,
        ignore_store_limitations: bool = False,
        ignore_acl: bool = False,
    ) -> None:
        self._ignore_store_limitations = ignore_store_limitations
        self._ignore_acl = ignore_acl

    async def resolve(
        self,
        uow: IUnitOfWork,
        entity_name: str,
        store_id: int,
        role_ids: Iterable[int],
    ) -> ItemVisibility:
        """Build the visibility scope for an entity type within an existing UoW.

        A predicate is left out when its ignore setting is on or when no
        mapping rows exist for the entity type, which spares the join.
        """
        scoped_store: int | None = None
        if not self._ignore_store_limitations and await uow.store_mappings.exists_for_entity(
            entity_name
        ):
            scoped_store = store_id

        scoped_roles: tuple[int, ...] | None = None
        if not self._ignore_acl and await uow.acl_records.exists_for_entity(entity_name):
            scoped_roles = tuple(sorted(set(role_ids)))

        logger.debug(
            "visibility_resolved",
            entity_name=entity_name,
            store_id=scoped_store,
            role_ids=scoped_roles,
        )
        return ItemVisibility(store_id=scoped_store, role_ids=scoped_roles)
