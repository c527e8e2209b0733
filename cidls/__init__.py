"""cidls - directory listings for content-addressed stores.

cidls lists the children of one or more store paths, either streaming
entries as they are discovered or collecting and sorting them per path,
and renders the result as aligned text or as structured records.

    from cidls.aio import ListDriver, LocalStoreAdapter
    from cidls import ListConfig, render_unit
"""

__version__ = "0.1.0"

from . import aio
from .config import ListConfig, RenderOptions
from .errors import (
    ListError,
    PathResolutionError,
    ListCancelledError,
    MalformedEntryWarning,
    UnreadableEntryWarning,
)
from .model import EntryKind, EntryRecord, GroupResult, OutputUnit
from .render import TabularRenderer, render_unit

__all__ = [
    "__version__",
    "aio",
    # Configuration
    "ListConfig",
    "RenderOptions",
    # Model
    "EntryKind",
    "EntryRecord",
    "GroupResult",
    "OutputUnit",
    # Errors
    "ListError",
    "PathResolutionError",
    "ListCancelledError",
    "MalformedEntryWarning",
    "UnreadableEntryWarning",
    # Rendering
    "TabularRenderer",
    "render_unit",
]
