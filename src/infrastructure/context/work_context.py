"""Work context backed by a context variable."""

from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar

import structlog

_current_role_ids: ContextVar[tuple[int, ...] | None] = ContextVar(
    "current_role_ids", default=None
)


@contextmanager
def actor_roles(role_ids: Iterable[int]) -> Iterator[None]:
    """Bind the current actor's role ids for the duration of the block."""
    roles = tuple(sorted(set(role_ids)))
    token = _current_role_ids.set(roles)
    with structlog.contextvars.bound_contextvars(role_ids=roles):
        try:
            yield
        finally:
            _current_role_ids.reset(token)


class ContextVarWorkContext:
    """IWorkContext reading the actor bound with :func:`actor_roles`.

    Falls back to ``guest_role_ids`` when no actor is bound.
    """

    def __init__(self, guest_role_ids: Iterable[int] = ()) -> None:
        self._guest_role_ids = tuple(guest_role_ids)

    async def get_current_role_ids(self) -> list[int]:
        """Get the role ids of the current actor."""
        roles = _current_role_ids.get()
        if roles is None:
            return list(self._guest_role_ids)
        return list(roles)
