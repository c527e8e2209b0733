"""Error types for cidls.

Listing failures are exceptions derived from ListError so callers can catch
every listing problem with a single clause while still telling resolution
failures apart from cancellation.
"""

from typing import Optional


class ListError(Exception):
    """Base class for errors that abort a listing run."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class PathResolutionError(ListError):
    """A requested path could not be traversed.

    Raised for missing paths, paths that are not listable (wrong type) and
    any access or resolution failure reported by the store.
    """

    def __init__(self, path: str, reason: str = "cannot resolve path"):
        super().__init__(f"{path}: {reason}", path)
        self.reason = reason


class ListCancelledError(ListError):
    """The run's cancel scope was triggered while a path was being listed."""

    def __init__(self, path: Optional[str] = None):
        message = "listing cancelled"
        if path is not None:
            message = f"listing cancelled while traversing {path}"
        super().__init__(message, path)


class MalformedEntryWarning(UserWarning):
    """An entry arrived with a required field missing or invalid.

    The store broke its contract, not the listing, so the renderer falls
    back to defaults and warns instead of failing the run.
    """


class UnreadableEntryWarning(UserWarning):
    """A child of a listed directory could not be read or stat'ed.

    The entry is still listed when its metadata is known, with the digest
    of empty content as its identifier; otherwise it is left out.
    """
