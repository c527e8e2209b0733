"""Aggregation policies for listing runs.

A policy decides what the sink receives and when. The driver calls it for
every entry, after every completed path and once at the end of the run;
each call returns the OutputUnits to emit at that point (possibly none).

Two policies exist:

- StreamingPolicy emits one single-entry unit per entry, immediately.
- BatchPolicy buffers, sorts each path's entries by name and emits one
  unit with every path's group after the last path completes.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from ...model import EntryRecord, GroupResult, OutputUnit


class AggregationPolicy(ABC):
    """Abstract base class for aggregation policies.

    A policy instance serves exactly one run and is owned by its driver;
    the traversal tasks never touch it.
    """

    def __init__(self, paths: Sequence[str]):
        """Initialize policy for a run.

        Args:
            paths: Requested paths in request order
        """
        self.paths = list(paths)

    @abstractmethod
    def on_entry(self, index: int, entry: EntryRecord) -> List[OutputUnit]:
        """Handle an entry discovered under ``paths[index]``.

        Returns:
            Units to emit now
        """
        pass

    @abstractmethod
    def on_group_complete(self, index: int) -> List[OutputUnit]:
        """Handle the successful end of ``paths[index]``'s traversal.

        Returns:
            Units to emit now
        """
        pass

    @abstractmethod
    def on_run_complete(self) -> List[OutputUnit]:
        """Handle the successful end of the whole run.

        Returns:
            Units to emit now
        """
        pass


class StreamingPolicy(AggregationPolicy):
    """Emits every entry as soon as it arrives.

    No buffering and no sorting; a change of group key between consecutive
    units is the only group boundary the renderer sees.
    """

    def on_entry(self, index: int, entry: EntryRecord) -> List[OutputUnit]:
        return [OutputUnit.single(self.paths[index], entry)]

    def on_group_complete(self, index: int) -> List[OutputUnit]:
        return []

    def on_run_complete(self) -> List[OutputUnit]:
        return []


class BatchPolicy(AggregationPolicy):
    """Collects every path's entries and emits them all at once.

    Entries of a path are sorted by name when that path completes. Nothing
    is emitted unless every path completes, so a failing run produces no
    output at all.
    """

    def __init__(self, paths: Sequence[str]):
        super().__init__(paths)
        self._buffer: List[EntryRecord] = []
        self._groups: List[Optional[GroupResult]] = [None] * len(self.paths)

    def on_entry(self, index: int, entry: EntryRecord) -> List[OutputUnit]:
        self._buffer.append(entry)
        return []

    def on_group_complete(self, index: int) -> List[OutputUnit]:
        entries = sorted(self._buffer, key=_name_sort_key)
        self._groups[index] = GroupResult(self.paths[index], entries)
        self._buffer = []
        return []

    def on_run_complete(self) -> List[OutputUnit]:
        missing = [self.paths[i] for i, group in enumerate(self._groups) if group is None]
        if missing:
            raise RuntimeError(f"Run completed before paths finished: {', '.join(missing)}")
        return [OutputUnit(self._groups)]


def _name_sort_key(entry: EntryRecord) -> bytes:
    # Byte-wise ordering of the UTF-8 encoding, as the store compares names.
    # Undecodable bytes (U+DC80..U+DCFF) sort as the raw bytes they stand for.
    name = entry.name if isinstance(entry.name, str) else ''
    try:
        return name.encode('utf-8', 'surrogateescape')
    except UnicodeEncodeError:
        return name.encode('utf-8', 'surrogatepass')


def create_policy(paths: Sequence[str], streaming: bool) -> AggregationPolicy:
    """Create the policy for a run.

    Args:
        paths: Requested paths in request order
        streaming: Emit entries as they arrive instead of collecting

    Returns:
        StreamingPolicy or BatchPolicy
    """
    if streaming:
        return StreamingPolicy(paths)
    return BatchPolicy(paths)
