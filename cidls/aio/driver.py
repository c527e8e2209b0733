"""Async execution of listing runs.

This module provides the ListDriver class that sequences a run: it lists
the requested paths one after another, feeds each path's entries to the
aggregation policy and hands the resulting OutputUnits to the caller.
"""

import asyncio
from typing import Any, AsyncIterator, Callable, Optional, Sequence

from ..config import ListConfig
from ..errors import ListCancelledError
from ..model import OutputUnit
from .core import (
    AggregationPolicy,
    AsyncStoreAdapter,
    CancelScope,
    TraversalInvoker,
    create_policy,
)


class ListDriver:
    """Orchestrates a listing run over an ordered list of paths.

    Paths are processed strictly one at a time: path i+1's traversal is
    started only after path i's feed is drained and its result checked.
    The first error aborts the run. Units already handed out are not taken
    back; in batch mode that means nothing was handed out at all.
    """

    def __init__(
        self,
        adapter: AsyncStoreAdapter,
        config: Optional[ListConfig] = None,
        scope: Optional[CancelScope] = None
    ):
        """Initialize driver.

        Args:
            adapter: Store adapter supplying entries
            config: Run configuration (defaults to a batch run)
            scope: Cancellation scope spanning the run (created if None)
        """
        self.config = config or ListConfig()

        errors = self.config.validate()
        if errors:
            raise ValueError(f"Invalid configuration: {', '.join(errors)}")

        self.adapter = adapter
        self.scope = scope or CancelScope()
        self.invoker = TraversalInvoker(
            adapter,
            resolve_type=self.config.resolve_type,
            resolve_size=self.config.resolve_size,
            feed_size=self.config.feed_size,
        )

        # Track execution statistics
        self.stats = {
            'paths_listed': 0,
            'entries_seen': 0,
            'units_emitted': 0,
        }

    def cancel(self):
        """Cancel the run. The in-flight traversal stops promptly."""
        self.scope.cancel()

    def create_policy(self, paths: Sequence[str]) -> AggregationPolicy:
        return create_policy(paths, self.config.stream)

    async def run(self, paths: Sequence[str]) -> AsyncIterator[OutputUnit]:
        """Run the listing.

        Args:
            paths: Paths to list, in output order

        Yields:
            OutputUnits as the aggregation policy releases them

        Raises:
            ValueError: If no paths are given
            PathResolutionError: If a path can't be listed
            ListCancelledError: If the run's scope was cancelled
        """
        paths = list(paths)
        if not paths:
            raise ValueError("At least one path is required")

        policy = self.create_policy(paths)

        for index, path in enumerate(paths):
            if self.scope.cancelled:
                raise ListCancelledError(path)

            async with self.invoker.start(path, self.scope) as traversal:
                async for entry in traversal.entries():
                    self.stats['entries_seen'] += 1
                    for unit in policy.on_entry(index, entry):
                        self.stats['units_emitted'] += 1
                        yield unit
                # Only trust the absence of an error once the feed is drained
                await traversal.result()

            self.stats['paths_listed'] += 1
            for unit in policy.on_group_complete(index):
                self.stats['units_emitted'] += 1
                yield unit

        for unit in policy.on_run_complete():
            self.stats['units_emitted'] += 1
            yield unit

    async def run_to(
        self,
        paths: Sequence[str],
        sink: Callable[[OutputUnit], Any]
    ) -> int:
        """Run the listing, handing every unit to ``sink``.

        Args:
            paths: Paths to list
            sink: Callable (sync or async) receiving each OutputUnit

        Returns:
            Number of units emitted
        """
        count = 0
        units = self.run(paths)
        try:
            async for unit in units:
                result = sink(unit)
                if asyncio.iscoroutine(result):
                    await result
                count += 1
        finally:
            await units.aclose()
        return count
