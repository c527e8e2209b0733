"""Local filesystem store adapter.

Presents a directory tree as a content-addressed store: every entry gets
an identifier derived from its content, so a local checkout can be listed
the same way as a remote store. Blocking filesystem work runs in worker
threads, in batches, so a large directory doesn't stall the event loop.
"""

import asyncio
import hashlib
import os
import stat as stat_module  # To avoid name collision with stat results
import warnings
from datetime import datetime, timezone
from pathlib import Path
from typing import AsyncIterator, List, Optional, Tuple, Union

from ...errors import PathResolutionError, UnreadableEntryWarning
from ...model import EntryKind, EntryRecord
from ..core import AsyncStoreAdapter


HASH_CHUNK_SIZE = 1 << 20
EMPTY_DIGEST = hashlib.sha256(b"").hexdigest()


class LocalStoreAdapter(AsyncStoreAdapter):
    """Lists directories under a root as if they were store objects.

    Identifiers are SHA-256 hex digests:

    - files: digest of the file content
    - directories: digest of the sorted child names (shallow)
    - symlinks: digest of the link target
    - anything else: digest of the empty string

    Resolving reads every regular file in full, so listing directories of
    large or endless files (such as /proc) is slow. Without resolution only
    stat data is used: the identifier is then a digest of device, inode,
    size and modification time. Children that can't be read are listed
    with the empty-content digest and an UnreadableEntryWarning.
    """

    def __init__(
        self,
        root: Union[str, Path] = '.',
        max_concurrent: int = 16,
        batch_size: int = 256
    ):
        """Initialize filesystem store.

        Args:
            root: Directory that requested paths are resolved against
            max_concurrent: Maximum concurrent hashing operations
            batch_size: Number of entries resolved in parallel per batch
        """
        super().__init__()
        self.root = Path(root).resolve()
        self.max_concurrent = max_concurrent
        self.semaphore = asyncio.Semaphore(max_concurrent)
        self.batch_size = batch_size

    def resolve_path(self, path: str) -> Path:
        """Map a requested path onto the filesystem.

        Leading slashes are relative to the store root. Paths that leave
        the root are rejected.

        Raises:
            PathResolutionError: If the path escapes the root
        """
        target = (self.root / path.lstrip('/')).resolve()
        if target != self.root and self.root not in target.parents:
            raise PathResolutionError(path, "path escapes the store root")
        return target

    async def list_entries(
        self,
        path: str,
        resolve_children: bool = True
    ) -> AsyncIterator[EntryRecord]:
        """Stream the children of a directory in scandir order."""
        directory = self.resolve_path(path)

        try:
            dir_entries = await asyncio.to_thread(_scan_directory_sync, directory)
        except FileNotFoundError:
            raise PathResolutionError(path, "no such file or directory") from None
        except NotADirectoryError:
            raise PathResolutionError(path, "not a directory") from None
        except PermissionError:
            raise PathResolutionError(path, "permission denied") from None

        for start in range(0, len(dir_entries), self.batch_size):
            batch = dir_entries[start:start + self.batch_size]
            records = await asyncio.gather(
                *(self._build_record(entry, resolve_children) for entry in batch)
            )
            for record in records:
                if record is not None:
                    yield record

    async def _build_record(
        self,
        entry: os.DirEntry,
        resolve_children: bool
    ) -> Optional[EntryRecord]:
        async with self.semaphore:
            try:
                st = await asyncio.to_thread(entry.stat, follow_symlinks=False)
            except FileNotFoundError:
                # Removed between scandir and stat
                return None
            except OSError as e:
                warnings.warn(f"Skipping {entry.path}: {e}", UnreadableEntryWarning)
                return None

            if not resolve_children:
                return EntryRecord(name=entry.name, identifier=_stat_digest(st))

            kind = _kind_of(st.st_mode)
            try:
                identifier, target = await asyncio.to_thread(_identify_sync, entry.path, kind)
            except FileNotFoundError:
                return None
            except OSError as e:
                warnings.warn(f"Cannot read {entry.path}: {e}", UnreadableEntryWarning)
                identifier, target = EMPTY_DIGEST, None

        return EntryRecord(
            name=entry.name,
            identifier=identifier,
            size=st.st_size if kind == EntryKind.FILE else 0,
            kind=kind,
            target=target,
            mode=stat_module.S_IMODE(st.st_mode),
            mod_time=datetime.fromtimestamp(st.st_mtime, tz=timezone.utc),
        )


def _scan_directory_sync(path: Path) -> List[os.DirEntry]:
    with os.scandir(path) as iterator:
        return list(iterator)


def _kind_of(mode: int) -> EntryKind:
    if stat_module.S_ISLNK(mode):
        return EntryKind.SYMLINK
    if stat_module.S_ISDIR(mode):
        return EntryKind.DIRECTORY
    if stat_module.S_ISREG(mode):
        return EntryKind.FILE
    return EntryKind.UNKNOWN


def _identify_sync(path: str, kind: EntryKind) -> Tuple[str, Optional[str]]:
    """Content identifier and symlink target of an entry."""
    if kind == EntryKind.SYMLINK:
        target = os.readlink(path)
        return hashlib.sha256(os.fsencode(target)).hexdigest(), target
    if kind == EntryKind.DIRECTORY:
        return _directory_digest(path), None
    if kind == EntryKind.FILE:
        return _file_digest(path), None
    return EMPTY_DIGEST, None


def _stat_digest(st: os.stat_result) -> str:
    # Stands in for the content digest when children aren't resolved
    key = f"{st.st_dev}:{st.st_ino}:{st.st_size}:{st.st_mtime_ns}"
    return hashlib.sha256(key.encode('ascii')).hexdigest()


def _file_digest(path: str) -> str:
    digest = hashlib.sha256()
    with open(path, 'rb') as f:
        for chunk in iter(lambda: f.read(HASH_CHUNK_SIZE), b''):
            digest.update(chunk)
    return digest.hexdigest()


def _directory_digest(path: str) -> str:
    digest = hashlib.sha256()
    for name in sorted(os.listdir(path)):
        digest.update(os.fsencode(name) + b'\0')
    return digest.hexdigest()
