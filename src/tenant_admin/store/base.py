"""Config store interface."""

from abc import ABC, abstractmethod
from typing import Any


class ConfigStore(ABC):
    """
    Persistence for the whole gateway config document.

    Implementations may be a file, an in-memory map, or a remote API. ``read``
    returns a document the caller may freely mutate, and ``write`` must be
    atomic: a later ``read`` never sees a partially written document.
    """

    @abstractmethod
    async def read(self) -> dict[str, Any]:
        """
        Return the full config document.

        Raises:
            ConfigReadError: If the document cannot be loaded or parsed
        """

    @abstractmethod
    async def write(self, document: dict[str, Any]) -> None:
        """
        Replace the stored document.

        Raises:
            ConfigWriteError: If the document cannot be persisted
        """

    @abstractmethod
    async def patch(self, partial: dict[str, Any]) -> None:
        """
        Deep-merge ``partial`` into the stored document.

        Raises:
            ConfigWriteError: If the merged document cannot be persisted
        """
