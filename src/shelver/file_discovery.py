"""Directory traversal of the music collection.

Albums are renamed while the walk is still running, so the traversal is lazy
and re-checks every directory when it gets to it: a directory that was moved
away after being listed is skipped without complaint.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Container, Iterator
from pathlib import Path

from .album_name import identify_album
from .errors import FilesystemFatalError
from .logging_utils import render_fields_block
from .models import AlbumLocation

LOGGER = logging.getLogger(__name__)

ErrorCallback = Callable[[Path, OSError], None]


def _list_subdirectories(directory: Path) -> list[Path]:
    with os.scandir(directory) as entries:
        subdirectories = [
            Path(entry.path) for entry in entries if entry.is_dir(follow_symlinks=False)
        ]
    subdirectories.sort(key=lambda path: path.name)
    return subdirectories


def _log_unreadable(path: Path, exc: OSError) -> None:
    LOGGER.warning(
        render_fields_block(
            "Skipping Unreadable Directory",
            {"Path": path, "Reason": exc.strerror or str(exc)},
        )
    )


def walk_directories(
    root: Path,
    *,
    exclude: Container[Path] = (),
    on_error: ErrorCallback | None = None,
) -> Iterator[Path]:
    """Yield ``root`` and every directory below it, parents before children.

    Children are listed only when their parent is reached, after the caller
    has finished with the parent. Directories in ``exclude`` are neither
    yielded nor descended into; the container is consulted lazily, so callers
    may add to it during the walk. Symlinked directories are not followed.

    Raises:
        FilesystemFatalError: if ``root`` itself cannot be listed.
    """
    try:
        pending = list(reversed(_list_subdirectories(root)))
    except OSError as exc:
        raise FilesystemFatalError(f"Unable to read collection root {root}: {exc}") from exc

    yield root
    while pending:
        directory = pending.pop()
        if directory in exclude or not directory.is_dir():
            continue
        yield directory
        try:
            children = _list_subdirectories(directory)
        except FileNotFoundError:
            # Moved while we were busy with it.
            continue
        except OSError as exc:
            (on_error or _log_unreadable)(directory, exc)
            continue
        pending.extend(reversed(children))


def iter_album_locations(
    root: Path,
    *,
    exclude: Container[Path] = (),
    on_error: ErrorCallback | None = None,
) -> Iterator[AlbumLocation]:
    """Yield an :class:`AlbumLocation` for every album-shaped directory under ``root``."""
    for directory in walk_directories(root, exclude=exclude, on_error=on_error):
        if directory == root:
            continue
        location = AlbumLocation(root=root, current_path=directory)
        if identify_album(location) is not None:
            yield location
