"""Moving album directories to their resolved destination."""

from __future__ import annotations

import logging
import os

from .errors import FilesystemFatalError, FilesystemTransientError, PreconditionError
from .logging_utils import render_fields_block
from .models import AlbumLocation

LOGGER = logging.getLogger(__name__)


def relocate_album(location: AlbumLocation, *, dry_run: bool = False) -> bool:
    """Move an album directory to ``location.target_path``.

    Returns True when the album moved (or, in dry-run mode, would have moved)
    and False when it already sits at its target. Dry-run never touches the
    filesystem but applies the same checks as a real move. After a real move
    ``location.current_path`` points at the new directory.

    Raises:
        PreconditionError: if the target path has not been resolved yet.
        FilesystemTransientError: if this album cannot be moved.
        FilesystemFatalError: if the destination parent cannot be created.
    """
    target = location.target_path
    if target is None:
        raise PreconditionError("target not resolved")
    if not location.needs_move:
        return False

    source = location.current_path

    if target.exists() or target.is_symlink():
        raise FilesystemTransientError(source, target, "destination already exists")

    if dry_run:
        LOGGER.debug(
            render_fields_block(
                "Dry-Run: Would Move Album",
                {"Album": location, "From": location.relative_current, "To": location.relative_target},
            )
        )
        return True

    parent = target.parent
    if not parent.is_dir():
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FilesystemFatalError(f"Unable to create directory {parent}: {exc}") from exc

    try:
        os.rename(source, target)
    except OSError as exc:
        raise FilesystemTransientError(source, target, exc.strerror or str(exc)) from exc

    location.current_path = target
    return True
