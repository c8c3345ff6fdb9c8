"""Exception hierarchy for shelver.

Errors are split by how far they are allowed to travel: a folder name that is
not an album is routine and never leaves the walker, a failed rename is
reported per album while the walk carries on, and anything that leaves the
collection in an unknown state aborts the whole run.
"""

from __future__ import annotations

from pathlib import Path


class ShelverError(Exception):
    """Base class for all shelver errors."""


class NotAnAlbumError(ShelverError):
    """Raised when a directory name does not follow the album pattern."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__("not an album")


class PreconditionError(ShelverError):
    """Raised when an operation is called out of order."""


class FilesystemTransientError(ShelverError):
    """A single album could not be moved. The run continues."""

    def __init__(self, source: Path, destination: Path, reason: str) -> None:
        self.source = source
        self.destination = destination
        self.reason = reason
        super().__init__(f"cannot move {source} to {destination}: {reason}")


class FilesystemFatalError(ShelverError):
    """The collection cannot be processed further. The run aborts."""


class ConfigError(ShelverError, ValueError):
    """Raised for missing or malformed configuration documents."""


class PlaylistError(ShelverError):
    """Raised when a playlist cannot be loaded or written."""
