"""Listing data model.

Defines the shape of one listed child (EntryRecord), one requested path's
listing (GroupResult) and the unit handed to a sink in one emission
(OutputUnit), plus their structured, machine-readable encoding.

All three are immutable: they are built per run, handed to the sink and
never touched again.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import Any, Callable, Dict, Iterable, Optional, Tuple


class EntryKind(IntEnum):
    """Kind of a listed entry.

    Values follow the UnixFS data-type numbering so the structured output
    can carry them as plain integers.
    """
    UNKNOWN = 0      # Raw or unresolved
    DIRECTORY = 1
    FILE = 2
    METADATA = 3
    SYMLINK = 4
    HAMT_SHARD = 5   # Sharded directory

    @classmethod
    def from_code(cls, code: Any) -> 'EntryKind':
        """Map an external type code to an EntryKind.

        Accepts enum members, integers and names such as ``"file"`` or
        ``"dir"``. Anything unrecognised is UNKNOWN.

        Args:
            code: Type code reported by a store

        Returns:
            Matching EntryKind
        """
        if isinstance(code, cls):
            return code
        if isinstance(code, bool):
            return cls.UNKNOWN
        if isinstance(code, int):
            try:
                return cls(code)
            except ValueError:
                return cls.UNKNOWN
        if isinstance(code, str):
            return _KIND_NAMES.get(code.strip().lower().replace('_', '-'), cls.UNKNOWN)
        return cls.UNKNOWN

    @property
    def is_directory_like(self) -> bool:
        """True for kinds rendered as directories."""
        return self in (EntryKind.DIRECTORY, EntryKind.HAMT_SHARD, EntryKind.METADATA)


_KIND_NAMES = {
    'file': EntryKind.FILE,
    'dir': EntryKind.DIRECTORY,
    'directory': EntryKind.DIRECTORY,
    'symlink': EntryKind.SYMLINK,
    'link': EntryKind.SYMLINK,
    'metadata': EntryKind.METADATA,
    'hamt-shard': EntryKind.HAMT_SHARD,
    'hamtshard': EntryKind.HAMT_SHARD,
    'raw': EntryKind.UNKNOWN,
}


@dataclass(frozen=True)
class EntryRecord:
    """One child of a listed path."""

    name: str
    identifier: str
    size: int = 0
    kind: EntryKind = EntryKind.UNKNOWN
    target: Optional[str] = None
    mode: Optional[int] = None
    mod_time: Optional[datetime] = None

    def __post_init__(self):
        kind = EntryKind.from_code(self.kind)
        object.__setattr__(self, 'kind', kind)
        # A target only means something for symlinks
        if kind != EntryKind.SYMLINK and self.target is not None:
            object.__setattr__(self, 'target', None)

    @property
    def is_directory(self) -> bool:
        return self.kind.is_directory_like

    def to_dict(self, encode: Optional[Callable[[str], str]] = None) -> Dict[str, Any]:
        """Encode as a structured link object.

        Args:
            encode: Identifier encoder (identity if None)

        Returns:
            Dictionary with Name, Hash, Size, Type, Target, Mode and ModTime
        """
        identifier = self.identifier or ''
        return {
            'Name': self.name or '',
            'Hash': encode(identifier) if encode and identifier else identifier,
            'Size': self.size or 0,
            'Type': int(self.kind),
            'Target': self.target or '',
            'Mode': self.mode or 0,
            'ModTime': self.mod_time.isoformat() if self.mod_time else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'EntryRecord':
        mod_time = data.get('ModTime')
        return cls(
            name=data.get('Name', ''),
            identifier=data.get('Hash', ''),
            size=data.get('Size') or 0,
            kind=EntryKind.from_code(data.get('Type', 0)),
            target=data.get('Target') or None,
            mode=data.get('Mode') or None,
            mod_time=datetime.fromisoformat(mod_time) if mod_time else None,
        )


@dataclass(frozen=True)
class GroupResult:
    """All or part of one requested path's listing.

    ``group_key`` is the path exactly as requested, not its identifier.
    """

    group_key: str
    entries: Tuple[EntryRecord, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'entries', tuple(self.entries))

    def to_dict(self, encode: Optional[Callable[[str], str]] = None) -> Dict[str, Any]:
        return {
            'Hash': self.group_key,
            'Links': [entry.to_dict(encode) for entry in self.entries],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GroupResult':
        return cls(
            group_key=data.get('Hash', ''),
            entries=[EntryRecord.from_dict(link) for link in data.get('Links') or []],
        )


@dataclass(frozen=True)
class OutputUnit:
    """A batch of groups emitted to the sink in one piece.

    Streaming runs emit one unit per entry; batch runs emit a single unit
    holding every requested path.
    """

    groups: Tuple[GroupResult, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, 'groups', tuple(self.groups))

    @classmethod
    def single(cls, group_key: str, entry: EntryRecord) -> 'OutputUnit':
        """Create a unit carrying exactly one entry."""
        return cls((GroupResult(group_key, (entry,)),))

    @property
    def entry_count(self) -> int:
        return sum(len(group.entries) for group in self.groups)

    def iter_entries(self) -> Iterable[Tuple[str, EntryRecord]]:
        """Yield (group_key, entry) pairs in emission order."""
        for group in self.groups:
            for entry in group.entries:
                yield group.group_key, entry

    def to_dict(self, encode: Optional[Callable[[str], str]] = None) -> Dict[str, Any]:
        """Encode the unit for machine consumption.

        The shape is stable whatever the resolution flags were: every link
        carries every field, unresolved ones as zero values.

        Args:
            encode: Identifier encoder applied to link hashes

        Returns:
            ``{"Objects": [{"Hash": ..., "Links": [...]}, ...]}``
        """
        return {'Objects': [group.to_dict(encode) for group in self.groups]}

    def to_json(self, encode: Optional[Callable[[str], str]] = None, **kwargs) -> str:
        return json.dumps(self.to_dict(encode), **kwargs)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'OutputUnit':
        return cls([GroupResult.from_dict(obj) for obj in data.get('Objects') or []])

    @classmethod
    def from_json(cls, text: str) -> 'OutputUnit':
        return cls.from_dict(json.loads(text))
