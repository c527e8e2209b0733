"""Concurrent traversal of a single path.

The TraversalInvoker starts the store's listing of one path as its own task
and hands the caller a Traversal: a live feed of entries plus a terminal
result. The feed and the task run side by side, so the caller must drain
the feed completely before awaiting the result; the result must be checked
even when the feed produced nothing.

    async with invoker.start(path, scope) as traversal:
        async for entry in traversal.entries():
            ...
        await traversal.result()
"""

import asyncio
from typing import AsyncIterator, Callable, List, Optional

from ...errors import ListCancelledError, ListError, PathResolutionError
from ...model import EntryKind, EntryRecord
from .adapter import AsyncStoreAdapter


_FEED_CLOSED = object()


class CancelScope:
    """Cancellation signal shared by every traversal of one run.

    Cancelling the scope stops whichever traversal is in flight and makes
    every later traversal fail immediately.
    """

    def __init__(self):
        self._cancelled = False
        self._callbacks: List[Callable[[], None]] = []

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self):
        """Trigger the scope. Idempotent."""
        if self._cancelled:
            return
        self._cancelled = True
        for callback in list(self._callbacks):
            callback()

    def add_callback(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register a callback run on cancellation.

        Runs immediately if the scope is already cancelled.

        Returns:
            Function that unregisters the callback
        """
        if self._cancelled:
            callback()
            return lambda: None
        self._callbacks.append(callback)

        def remove():
            if callback in self._callbacks:
                self._callbacks.remove(callback)
        return remove


class Traversal:
    """A running listing of one path.

    Owns the producer task and the entry feed. The feed is closed exactly
    once, when the producer task finishes for any reason.
    """

    def __init__(
        self,
        path: str,
        source: AsyncIterator[EntryRecord],
        scope: CancelScope,
        feed_size: int = 0
    ):
        self.path = path
        self._feed: asyncio.Queue = asyncio.Queue(maxsize=feed_size)
        self._closed = False
        self._cancel_requested = False
        self._task = asyncio.get_running_loop().create_task(self._produce(source))
        self._task.add_done_callback(self._close_feed)
        self._unregister = scope.add_callback(self.cancel)

    async def _produce(self, source: AsyncIterator[EntryRecord]):
        async for entry in source:
            await self._feed.put(entry)

    def _close_feed(self, _task: Optional[asyncio.Task] = None):
        if self._closed:
            return
        self._closed = True
        try:
            self._feed.put_nowait(_FEED_CLOSED)
        except asyncio.QueueFull:
            # Consumer isn't waiting; it sees the closed flag once drained
            pass

    def cancel(self):
        """Stop the producer. The terminal result becomes a cancellation."""
        if not self._task.done():
            self._cancel_requested = True
            self._task.cancel()

    @property
    def done(self) -> bool:
        return self._task.done()

    async def entries(self) -> AsyncIterator[EntryRecord]:
        """Yield entries until the feed closes."""
        while True:
            if self._closed and self._feed.empty():
                return
            item = await self._feed.get()
            if item is _FEED_CLOSED:
                return
            yield item

    async def result(self):
        """Wait for the terminal result of the traversal.

        Raises:
            ListCancelledError: If the traversal was cancelled
            PathResolutionError: If the store failed to list the path
        """
        try:
            await self._task
        except asyncio.CancelledError:
            if not self._cancel_requested:
                raise
            raise ListCancelledError(self.path) from None
        except ListError:
            raise
        except Exception as e:
            raise PathResolutionError(self.path, str(e) or type(e).__name__) from e
        finally:
            self._unregister()

    async def aclose(self):
        """Cancel the producer if still running and wait for it to finish."""
        self._unregister()
        if self._task.done():
            # Retrieve the outcome so it is never reported as unhandled
            if not self._task.cancelled():
                self._task.exception()
            return
        self._cancel_requested = True
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        except Exception:
            # The traversal is being abandoned; its failure is moot
            pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()


class TraversalInvoker:
    """Starts store listings as concurrent tasks.

    The invoker applies the resolution flags: the store gets a single
    ``resolve_children`` switch (on when either flag is set), and entries
    are normalised so an unrequested kind or size never leaks through.
    """

    def __init__(
        self,
        adapter: AsyncStoreAdapter,
        resolve_type: bool = True,
        resolve_size: bool = True,
        feed_size: int = 0
    ):
        """Initialize invoker.

        Args:
            adapter: Store adapter supplying the entries
            resolve_type: Report entry kinds
            resolve_size: Report entry sizes
            feed_size: Maximum buffered entries per feed (0 = unbounded)
        """
        self.adapter = adapter
        self.resolve_type = resolve_type
        self.resolve_size = resolve_size
        self.feed_size = feed_size

    @property
    def resolve_children(self) -> bool:
        return self.resolve_type or self.resolve_size

    def start(self, path: str, scope: Optional[CancelScope] = None) -> Traversal:
        """Start listing ``path``.

        Must be called from a running event loop.

        Args:
            path: Path specifier to list
            scope: Cancellation scope of the run

        Returns:
            Traversal with the live feed and terminal result
        """
        return Traversal(path, self._source(path), scope or CancelScope(), self.feed_size)

    async def _source(self, path: str) -> AsyncIterator[EntryRecord]:
        async for entry in self.adapter.list_entries(path, self.resolve_children):
            yield self._normalise(entry)

    def _normalise(self, entry: EntryRecord) -> EntryRecord:
        if self.resolve_type and self.resolve_size:
            return entry
        return EntryRecord(
            name=entry.name,
            identifier=entry.identifier,
            size=entry.size if self.resolve_size else 0,
            kind=entry.kind if self.resolve_type else EntryKind.UNKNOWN,
            target=entry.target if self.resolve_type else None,
            mode=entry.mode,
            mod_time=entry.mod_time,
        )
