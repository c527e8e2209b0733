"""Async store adapter abstraction.

Defines how a content-addressed store is plugged into the listing engine.
Key feature: entries are streamed through an AsyncIterator so a listing can
be consumed while the store is still resolving it.
"""

from abc import ABC, abstractmethod
from typing import AsyncIterator

from ...model import EntryRecord


class AsyncStoreAdapter(ABC):
    """Abstract base class for async store adapters.

    Adapters bridge between the listing engine and a specific store. The
    engine never resolves identifiers or fetches content itself; it only
    asks the adapter for the immediate children of a path.
    """

    @abstractmethod
    async def list_entries(
        self,
        path: str,
        resolve_children: bool = True
    ) -> AsyncIterator[EntryRecord]:
        """Stream the immediate children of a path.

        Args:
            path: Path specifier as requested by the caller
            resolve_children: If False, the store may skip resolving child
                metadata and report unknown kinds and zero sizes

        Yields:
            EntryRecord objects in discovery order

        Raises:
            PathResolutionError: If the path can't be listed
        """
        pass

    async def close(self):
        """Clean up adapter resources.

        Override if adapter needs cleanup (close connections, etc.)
        """
        pass

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
