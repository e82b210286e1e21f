"""In-memory config store."""

import copy
from typing import Any, Optional

from tenant_admin.common.merge import deep_merge
from tenant_admin.store.base import ConfigStore


class InMemoryConfigStore(ConfigStore):
    """Keeps the document in process memory.

    Every read hands out a deep copy and every write stores one, so callers
    never share state with the store.
    """

    def __init__(self, initial: Optional[dict[str, Any]] = None):
        self._document: dict[str, Any] = copy.deepcopy(initial) if initial else {}
        self.writes = 0

    async def read(self) -> dict[str, Any]:
        return copy.deepcopy(self._document)

    async def write(self, document: dict[str, Any]) -> None:
        self._document = copy.deepcopy(document)
        self.writes += 1

    async def patch(self, partial: dict[str, Any]) -> None:
        self._document = copy.deepcopy(deep_merge(self._document, partial))
        self.writes += 1

    def snapshot(self) -> dict[str, Any]:
        """Current document, copied, for inspection without the event loop."""
        return copy.deepcopy(self._document)
