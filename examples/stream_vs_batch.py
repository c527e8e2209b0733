#!/usr/bin/env python3
"""
Streaming vs batch listing of local directories with cidls.

This example demonstrates:
- Streaming entries as they are discovered
- Collecting, sorting and rendering in one go
- Threading the last group key through repeated render calls

Usage:
    python examples/stream_vs_batch.py [DIR ...]
"""

import asyncio
import sys
import time

from cidls import ListConfig, TabularRenderer
from cidls.aio import ListDriver, LocalStoreAdapter


async def main():
    """List the given directories twice, streamed and batched."""
    paths = sys.argv[1:] or ['.']
    adapter = LocalStoreAdapter('/')
    paths = [str(LocalStoreAdapter('.').resolve_path(p)) for p in paths]

    for config in (ListConfig.streaming(headers=True), ListConfig.batch(headers=True)):
        mode = "streaming" if config.stream else "batch"
        print(f"--- {mode} ---")

        driver = ListDriver(adapter, config)
        renderer = TabularRenderer(sys.stdout, config.render_options(len(paths)))
        start = time.perf_counter()
        async for unit in driver.run(paths):
            renderer.render(unit)
        elapsed = time.perf_counter() - start

        print(f"\n{driver.stats['entries_seen']} entries, "
              f"{driver.stats['units_emitted']} units in {elapsed:.3f}s\n")


if __name__ == "__main__":
    asyncio.run(main())
