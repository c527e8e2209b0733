"""Asynchronous implementation of cidls.

This package contains the asyncio listing engine: store adapters, the
per-path traversal machinery, aggregation policies and the driver that
sequences a run.
"""

# Core abstractions
from .core import (
    AsyncStoreAdapter,
    CancelScope,
    Traversal,
    TraversalInvoker,
    AggregationPolicy,
    StreamingPolicy,
    BatchPolicy,
    create_policy,
)

# Adapters
from .adapters import (
    LocalStoreAdapter,
    MemoryStoreAdapter,
)

# Orchestration
from .driver import ListDriver

# High-level API
from .api import (
    list_paths,
    collect_outputs,
    render_outputs,
    ls,
    ls_json,
    list_paths_sync,
)

__all__ = [
    # Core abstractions
    'AsyncStoreAdapter',
    'CancelScope',
    'Traversal',
    'TraversalInvoker',
    # Policies
    'AggregationPolicy',
    'StreamingPolicy',
    'BatchPolicy',
    'create_policy',
    # Adapters
    'LocalStoreAdapter',
    'MemoryStoreAdapter',
    # Orchestration
    'ListDriver',
    # High-level API
    'list_paths',
    'collect_outputs',
    'render_outputs',
    'ls',
    'ls_json',
    'list_paths_sync',
]
