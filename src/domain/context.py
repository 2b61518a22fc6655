"""Work context protocol: who is acting on the current request."""

from typing import Protocol


class IWorkContext(Protocol):
    """Provides the current actor's customer roles."""

    async def get_current_role_ids(self) -> list[int]:
        """Get the role ids of the current actor."""
        ...
