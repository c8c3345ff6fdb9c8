"""Audit of album contents for anything that is not lossless audio."""

from __future__ import annotations

import logging
import os
import time
from pathlib import Path

from .album_name import identify_album
from .errors import PreconditionError
from .file_discovery import iter_album_locations
from .file_types import is_accepted, is_known_lossy
from .logging_utils import render_fields_block
from .models import AlbumLocation, AuditStats
from .run_summary import log_audit_summary

LOGGER = logging.getLogger(__name__)


def list_album_files(album_path: Path) -> list[str]:
    """Names of the regular files directly inside an album directory."""
    with os.scandir(album_path) as entries:
        return sorted(entry.name for entry in entries if entry.is_file())


def has_non_flac_files(album_path: Path) -> tuple[bool, list[str]]:
    """Tell whether an album holds anything besides flac tracks and cover art.

    Returns the verdict and the names of files with unexpected extensions.
    Known lossy formats count against the album but are not suspicious.
    """
    non_flac = False
    suspicious: list[str] = []
    for name in list_album_files(album_path):
        if is_accepted(name):
            continue
        non_flac = True
        if not is_known_lossy(name):
            suspicious.append(name)
    return non_flac, suspicious


def audit_album(location: AlbumLocation, stats: AuditStats) -> None:
    identity = identify_album(location)
    if identity is None:
        raise PreconditionError(f"{location.current_path.name} is not an album")
    stats.register_album()
    relative = location.relative_current
    try:
        non_flac, suspicious = has_non_flac_files(location.current_path)
    except FileNotFoundError:
        return
    except OSError as exc:
        reason = exc.strerror or str(exc)
        LOGGER.error(render_fields_block("Unable To Audit Album", {"Album": relative, "Reason": reason}))
        stats.register_error(f"{relative}: {reason}")
        return

    for name in suspicious:
        LOGGER.warning(render_fields_block("Suspicious File", {"File": name, "Album": relative}))
        stats.register_suspicious(f"{relative}/{name}")

    if not non_flac:
        return

    flagged = identity.is_lossy
    stats.register_non_lossless(relative, flagged=flagged)
    if flagged:
        LOGGER.info(render_fields_block("Non-Lossless Album", {"Album": relative}, pad_top=False))
    else:
        LOGGER.warning(
            render_fields_block(
                "Non-Lossless Album Not Flagged",
                {"Album": relative, "Hint": "folder name does not carry the lossy marker"},
            )
        )


def find_lossy_albums(root: Path) -> AuditStats:
    """Walk the collection and report albums that are not entirely lossless."""
    stats = AuditStats()
    started = time.perf_counter()

    def _unreadable(path: Path, exc: OSError) -> None:
        stats.register_error(f"Unable to read {path}: {exc.strerror or exc}")

    LOGGER.info(render_fields_block("Scanning For Non-Lossless Albums", {"Root": root}))
    for location in iter_album_locations(root, on_error=_unreadable):
        audit_album(location, stats)

    stats.duration = time.perf_counter() - started
    log_audit_summary(stats)
    return stats
