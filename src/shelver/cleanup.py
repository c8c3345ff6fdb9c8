"""Removal of directories left empty after albums were moved away."""

from __future__ import annotations

import logging
from pathlib import Path

from .file_discovery import walk_directories
from .logging_utils import render_fields_block
from .utils import format_relative, is_directory_empty

LOGGER = logging.getLogger(__name__)


def _sweep(root: Path, *, dry_run: bool) -> int:
    removed = 0
    for directory in walk_directories(root):
        if directory == root:
            continue
        try:
            if not is_directory_empty(directory):
                continue
        except FileNotFoundError:
            continue
        if dry_run:
            LOGGER.info("Would remove empty directory %s", format_relative(directory, root))
            removed += 1
            continue
        try:
            directory.rmdir()
        except FileNotFoundError:
            continue
        except OSError as exc:
            LOGGER.warning(
                render_fields_block(
                    "Unable To Remove Directory",
                    {"Path": format_relative(directory, root), "Reason": exc.strerror or str(exc)},
                )
            )
            continue
        LOGGER.info("Removed empty directory %s", format_relative(directory, root))
        removed += 1
    return removed


def delete_empty_folders(root: Path, *, dry_run: bool = False) -> int:
    """Delete empty directories under ``root`` until none are left.

    Removing a directory can leave its parent empty, so whole passes are
    repeated until one removes nothing. ``root`` itself is kept. In dry-run
    mode only the first pass is simulated and nothing is deleted.
    """
    LOGGER.info(render_fields_block("Scanning For Empty Directories", {"Root": root}))
    total = 0
    passes = 0
    while True:
        removed = _sweep(root, dry_run=dry_run)
        passes += 1
        total += removed
        if removed == 0 or dry_run:
            break

    LOGGER.info(
        render_fields_block(
            "Empty Directory Cleanup",
            {"Removed" if not dry_run else "Would remove": total, "Passes": passes},
        )
    )
    return total
