"""Package-specific exception types."""

from __future__ import annotations

from pathlib import Path


class PaneError(Exception):
    """Base class for markdown-pane errors."""


class TransformError(PaneError):
    """Raised when the Markdown transformer cannot process a document.

    The render pipeline never lets this escape; it is logged and turned into
    an empty result.
    """


class StorageError(PaneError, OSError):
    """Raised when the key-value store cannot be read or written.

    Args:
        path: Location of the backing store.
        reason: Human-readable description of the failure.
    """

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Storage error for {path}: {reason}")


class DocumentFileError(PaneError, OSError):
    """Raised when a document cannot be imported or exported."""


class FileTooLargeError(DocumentFileError):
    """Raised when an imported file exceeds the configured size limit.

    Args:
        path: File that was rejected.
        max_size: Maximum allowed size in bytes.
    """

    def __init__(self, path: Path, max_size: int):
        self.path = path
        self.max_size = max_size
        super().__init__(f"{path} exceeds the maximum allowed size of {max_size} bytes.")
