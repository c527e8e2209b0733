"""Async store adapters.

This module contains adapters that bridge specific stores to the listing
engine's AsyncStoreAdapter interface.
"""

from .filesystem import LocalStoreAdapter
from .memory import MemoryStoreAdapter

__all__ = [
    'LocalStoreAdapter',
    'MemoryStoreAdapter',
]
