"""Testing utilities for cidls consumers."""

from .fixtures import RecordingSink, build_store, make_entry

__all__ = ['RecordingSink', 'build_store', 'make_entry']
