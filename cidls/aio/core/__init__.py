"""Core abstractions for async listing.

This module defines the store interface, the per-path traversal machinery
and the aggregation policies the driver combines.
"""

from .adapter import AsyncStoreAdapter
from .invoker import CancelScope, Traversal, TraversalInvoker
from .policy import (
    AggregationPolicy,
    StreamingPolicy,
    BatchPolicy,
    create_policy,
)

__all__ = [
    # Adapter
    'AsyncStoreAdapter',
    # Traversal
    'CancelScope',
    'Traversal',
    'TraversalInvoker',
    # Policies
    'AggregationPolicy',
    'StreamingPolicy',
    'BatchPolicy',
    'create_policy',
]
