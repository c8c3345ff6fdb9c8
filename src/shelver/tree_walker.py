"""Collection-wide album sorting.

One pre-order pass over the collection root: every album directory is parsed,
resolved against the genre and alias tables and moved to its canonical place.
Albums found under the incoming directory are handed to the playlists.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from pathlib import Path
from typing import Protocol

from .config import AliasTable, AppConfig, GenreTable
from .errors import FilesystemTransientError
from .file_discovery import iter_album_locations
from .genre_resolver import locate_album
from .logging_utils import render_fields_block
from .models import AlbumLocation, SortStats
from .relocator import relocate_album
from .run_summary import log_sort_summary

LOGGER = logging.getLogger(__name__)


class AlbumSink(Protocol):
    def add(self, location: AlbumLocation) -> None: ...


def _process_album(
    location: AlbumLocation,
    *,
    genres: GenreTable,
    aliases: AliasTable,
    unsorted_subdir: str,
    incoming_subdir: str,
    dry_run: bool,
    stats: SortStats,
    settled: set[Path],
    playlists: Iterable[AlbumSink],
) -> None:
    resolution = locate_album(location, genres, aliases, unsorted_subdir)
    stats.register_found(resolution.identity)
    origin = location.relative_current
    destination = location.relative_target
    is_new = location.is_under(incoming_subdir)

    if not resolution.has_known_genre:
        stats.register_uncategorized(destination)

    try:
        moved = relocate_album(location, dry_run=dry_run)
    except FilesystemTransientError as exc:
        LOGGER.error(
            render_fields_block(
                "Error Moving Album",
                {"Album": location, "From": origin, "To": destination, "Reason": exc.reason},
            )
        )
        stats.register_failure(f"{origin} -> {destination}: {exc.reason}")
        moved = False

    if moved:
        stats.register_moved()
        if location.target_path is not None:
            settled.add(location.target_path)
        LOGGER.info(
            render_fields_block(
                "Would Move Album" if dry_run else "Moved Album",
                {"Album": location, "From": origin, "To": destination},
            )
        )
    else:
        LOGGER.debug(render_fields_block("Album In Place", {"Album": location, "Path": origin}))

    if is_new:
        stats.register_new(destination or origin)
        for playlist in playlists:
            playlist.add(location)
        LOGGER.info(
            render_fields_block("New Album", {"Album": location, "Action": "added to playlists"}, pad_top=False)
        )


def sort_albums(
    root: Path,
    genres: GenreTable,
    aliases: AliasTable,
    unsorted_subdir: str,
    incoming_subdir: str,
    *,
    dry_run: bool = False,
    playlists: Iterable[AlbumSink] = (),
) -> SortStats:
    """Move every album under ``root`` to ``Genre/MainAlias/Album``.

    Per-album move failures are logged and counted and the walk carries on.
    Fatal filesystem errors propagate and abort the run.
    """
    stats = SortStats(dry_run=dry_run)
    playlists = list(playlists)
    settled: set[Path] = set()
    started = time.perf_counter()

    def _unreadable(path: Path, exc: OSError) -> None:
        message = f"Unable to read {path}: {exc.strerror or exc}"
        LOGGER.warning(message)
        stats.register_warning(message)

    LOGGER.info(
        render_fields_block(
            "Scanning For Albums",
            {"Root": root, "Mode": "dry-run" if dry_run else "sync"},
        )
    )
    for location in iter_album_locations(root, exclude=settled, on_error=_unreadable):
        _process_album(
            location,
            genres=genres,
            aliases=aliases,
            unsorted_subdir=unsorted_subdir,
            incoming_subdir=incoming_subdir,
            dry_run=dry_run,
            stats=stats,
            settled=settled,
            playlists=playlists,
        )

    stats.duration = time.perf_counter() - started
    log_sort_summary(stats)
    return stats


def sort_collection(
    config: AppConfig,
    *,
    dry_run: bool = False,
    playlists: Iterable[AlbumSink] = (),
) -> SortStats:
    settings = config.settings
    return sort_albums(
        settings.root,
        config.genres,
        config.aliases,
        settings.unsorted_subdir,
        settings.incoming_subdir,
        dry_run=dry_run,
        playlists=playlists,
    )
