"""Test fixtures for cidls consumers.

Helpers for building in-memory stores with predictable identifiers and for
capturing what a listing run hands to its sink.
"""

import hashlib
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from ..aio.adapters.memory import MemoryStoreAdapter
from ..model import EntryKind, EntryRecord, OutputUnit


def make_entry(
    name: str,
    kind: Any = EntryKind.FILE,
    size: int = 0,
    target: Optional[str] = None,
    identifier: Optional[str] = None
) -> EntryRecord:
    """Build an entry with a deterministic identifier.

    The identifier is the SHA-256 of the name and kind unless given.

    Example:
        >>> make_entry('notes.txt', size=12)
        >>> make_entry('src', kind='dir')
    """
    kind = EntryKind.from_code(kind)
    if identifier is None:
        identifier = hashlib.sha256(f"{kind.name}:{name}".encode('utf-8', 'surrogatepass')).hexdigest()
    return EntryRecord(name=name, identifier=identifier, size=size, kind=kind, target=target)


def build_store(
    listings: Mapping[str, Iterable[EntryRecord]],
    failures: Optional[Mapping[str, Tuple[int, BaseException]]] = None,
    delay: float = 0.0
) -> MemoryStoreAdapter:
    """Create an in-memory store from ``{path: [entries]}``."""
    return MemoryStoreAdapter(listings, failures=failures, delay=delay)


class RecordingSink:
    """Sink that keeps every unit it receives, in order.

    Example:
        sink = RecordingSink()
        await driver.run_to(paths, sink)
        assert sink.entry_count == 3
    """

    def __init__(self):
        self.units: List[OutputUnit] = []

    def __call__(self, unit: OutputUnit):
        self.units.append(unit)

    @property
    def entry_count(self) -> int:
        return sum(unit.entry_count for unit in self.units)

    def entries_by_group(self) -> Dict[str, List[str]]:
        """Entry names received per group key, in arrival order."""
        grouped: Dict[str, List[str]] = {}
        for unit in self.units:
            for group_key, entry in unit.iter_entries():
                grouped.setdefault(group_key, []).append(entry.name)
        return grouped
