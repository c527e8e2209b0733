"""In-memory store adapter.

Serves listings from a dictionary. Used for embedding cidls over data that
is already resolved, and as the store behind the test suite, where it can
also inject failures and delays.
"""

import asyncio
from typing import AsyncIterator, Dict, Iterable, List, Mapping, Optional, Tuple

from ...errors import PathResolutionError
from ...model import EntryKind, EntryRecord
from ..core import AsyncStoreAdapter


class MemoryStoreAdapter(AsyncStoreAdapter):
    """Store adapter backed by a path -> entries mapping.

    When asked not to resolve children it behaves like a lazy store and
    reports unknown kinds and zero sizes.
    """

    def __init__(
        self,
        listings: Mapping[str, Iterable[EntryRecord]],
        failures: Optional[Mapping[str, Tuple[int, BaseException]]] = None,
        delay: float = 0.0
    ):
        """Initialize memory store.

        Args:
            listings: Entries of each listable path, in discovery order
            failures: Path -> (entries yielded before failing, exception)
            delay: Seconds to sleep before each entry
        """
        super().__init__()
        self.listings: Dict[str, List[EntryRecord]] = {
            path: list(entries) for path, entries in listings.items()
        }
        self.failures = dict(failures or {})
        self.delay = delay
        self.calls: List[Tuple[str, bool]] = []

    async def list_entries(
        self,
        path: str,
        resolve_children: bool = True
    ) -> AsyncIterator[EntryRecord]:
        """Stream the stored entries of ``path``."""
        self.calls.append((path, resolve_children))

        failure = self.failures.get(path)
        if path not in self.listings and failure is None:
            raise PathResolutionError(path, "no such path")

        entries = self.listings.get(path, [])
        fail_at = failure[0] if failure else None

        for position, entry in enumerate(entries):
            if fail_at is not None and position >= fail_at:
                break
            # Simulate async I/O
            await asyncio.sleep(self.delay)
            yield entry if resolve_children else _unresolved(entry)

        if failure is not None:
            raise failure[1]


def _unresolved(entry: EntryRecord) -> EntryRecord:
    return EntryRecord(
        name=entry.name,
        identifier=entry.identifier,
        size=0,
        kind=EntryKind.UNKNOWN,
    )
