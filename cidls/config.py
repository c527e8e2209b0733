"""Configuration system for cidls.

This module defines how callers specify a listing run: which metadata the
store should resolve, whether results stream or are collected, and how the
text renderer lays out its columns.
"""

from dataclasses import dataclass
from typing import List


# In streaming mode the column widths can't be computed from the whole
# listing, so every cell gets a generous minimum instead.
STREAM_MIN_CELL_WIDTH = 10
BATCH_MIN_CELL_WIDTH = 1
CELL_PADDING = 1

SUPPORTED_CID_BASES = ("identity", "base16", "base32")


@dataclass
class RenderOptions:
    """Layout switches for the tabular renderer."""

    headers: bool = False          # Print a Hash/Size/Name row per group
    size: bool = True              # Show the size column
    stream: bool = False           # Results arrive incrementally
    multiple_groups: bool = False  # More than one path was requested
    ignore_breaks: bool = False    # Suppress group labels and headers entirely

    @property
    def min_cell_width(self) -> int:
        """Minimum column width for the current mode."""
        return STREAM_MIN_CELL_WIDTH if self.stream else BATCH_MIN_CELL_WIDTH


@dataclass
class ListConfig:
    """Complete configuration for one listing run.

    The aggregation policy is chosen once from ``stream`` and cannot change
    during a run.
    """

    headers: bool = False
    resolve_type: bool = True
    resolve_size: bool = True
    stream: bool = False
    cid_base: str = "identity"
    feed_size: int = 0  # 0 = unbounded entry feed

    @property
    def resolve_children(self) -> bool:
        """Whether the store must resolve child metadata at all.

        The store only knows one switch for this, so asking for either the
        type or the size turns it on.
        """
        return self.resolve_type or self.resolve_size

    @classmethod
    def streaming(cls, **kwargs) -> 'ListConfig':
        """Create config that emits entries as soon as they are found."""
        return cls(stream=True, **kwargs)

    @classmethod
    def batch(cls, **kwargs) -> 'ListConfig':
        """Create config that collects, sorts and emits once."""
        return cls(stream=False, **kwargs)

    def render_options(self, path_count: int, ignore_breaks: bool = False) -> RenderOptions:
        """Build renderer options for a run over ``path_count`` paths.

        Args:
            path_count: Number of requested paths
            ignore_breaks: Suppress group labels and headers

        Returns:
            RenderOptions matching this configuration
        """
        return RenderOptions(
            headers=self.headers,
            size=self.resolve_size,
            stream=self.stream,
            multiple_groups=path_count > 1,
            ignore_breaks=ignore_breaks,
        )

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if self.cid_base not in SUPPORTED_CID_BASES:
            errors.append(
                f"unsupported cid_base {self.cid_base!r} "
                f"(expected one of {', '.join(SUPPORTED_CID_BASES)})"
            )

        if not isinstance(self.feed_size, int) or self.feed_size < 0:
            errors.append("feed_size must be a non-negative integer")

        return errors
