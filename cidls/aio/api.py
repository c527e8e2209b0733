"""High-level async API for cidls.

This module provides simple functions for the common ways of running a
listing: iterating units, collecting them, rendering them as text or as
structured records.
"""

import asyncio
import io
from typing import AsyncIterator, Dict, Any, List, Optional, Sequence, TextIO

from ..config import ListConfig
from ..encoding import get_encoder
from ..model import OutputUnit
from ..render import TabularRenderer
from .core import AsyncStoreAdapter, CancelScope
from .driver import ListDriver


async def list_paths(
    paths: Sequence[str],
    adapter: AsyncStoreAdapter,
    resolve_type: bool = True,
    resolve_size: bool = True,
    streaming: bool = False,
    scope: Optional[CancelScope] = None
) -> AsyncIterator[OutputUnit]:
    """List paths and yield OutputUnits as they are released.

    Args:
        paths: Paths to list, in output order
        adapter: Store adapter supplying entries
        resolve_type: Resolve entry kinds
        resolve_size: Resolve entry sizes
        streaming: Emit one unit per entry instead of one unit at the end
        scope: Cancellation scope for the run

    Yields:
        OutputUnit objects

    Example:
        >>> async for unit in list_paths(['/docs'], adapter, streaming=True):
        ...     print(unit.to_json())
    """
    config = ListConfig(
        resolve_type=resolve_type,
        resolve_size=resolve_size,
        stream=streaming,
    )
    driver = ListDriver(adapter, config, scope)
    async for unit in driver.run(paths):
        yield unit


async def collect_outputs(
    paths: Sequence[str],
    adapter: AsyncStoreAdapter,
    **kwargs
) -> List[OutputUnit]:
    """Run a listing and return every unit it emits.

    Accepts the same keyword arguments as list_paths().
    """
    return [unit async for unit in list_paths(paths, adapter, **kwargs)]


async def render_outputs(
    units: AsyncIterator[OutputUnit],
    output: TextIO,
    config: ListConfig,
    path_count: int,
    transport: bool = False
) -> str:
    """Render units as text while they arrive.

    Args:
        units: Async iterator of OutputUnits
        output: Text stream to write to
        config: Run configuration (headers, size column, stream mode)
        path_count: Number of requested paths
        transport: Render each unit on its own, without carrying the last
            group key. Group labels and headers are then suppressed in
            streaming mode since their boundaries can't be recomputed.

    Returns:
        Last group key rendered
    """
    encoder = get_encoder(config.cid_base)
    ignore_breaks = transport and config.stream
    options = config.render_options(path_count, ignore_breaks=ignore_breaks)
    renderer = TabularRenderer(output, options, encoder)

    async for unit in units:
        if transport:
            renderer.last_group_key = ''
        renderer.render(unit)

    return renderer.last_group_key


async def ls(
    paths: Sequence[str],
    adapter: AsyncStoreAdapter,
    config: Optional[ListConfig] = None,
    scope: Optional[CancelScope] = None
) -> str:
    """List paths and return the rendered text.

    Example:
        >>> text = await ls(['/a', '/b'], adapter, ListConfig(headers=True))
    """
    config = config or ListConfig()
    paths = list(paths)
    driver = ListDriver(adapter, config, scope)
    buffer = io.StringIO()
    await render_outputs(driver.run(paths), buffer, config, len(paths))
    return buffer.getvalue()


async def ls_json(
    paths: Sequence[str],
    adapter: AsyncStoreAdapter,
    config: Optional[ListConfig] = None,
    scope: Optional[CancelScope] = None
) -> List[Dict[str, Any]]:
    """List paths and return the structured encoding of every unit."""
    config = config or ListConfig()
    encoder = get_encoder(config.cid_base)
    driver = ListDriver(adapter, config, scope)
    return [unit.to_dict(encoder) async for unit in driver.run(paths)]


def list_paths_sync(
    paths: Sequence[str],
    adapter: AsyncStoreAdapter,
    **kwargs
) -> List[OutputUnit]:
    """Blocking version of collect_outputs() for non-async callers."""
    return asyncio.run(collect_outputs(paths, adapter, **kwargs))
