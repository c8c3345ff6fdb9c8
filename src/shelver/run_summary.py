"""End-of-run summaries for sorting and auditing.

The ordinary recap is logged at INFO. Conditions that need attention, such as
uncategorized albums, failed moves or unflagged lossy albums, get their own
WARNING or ERROR block so they stand out from the recap.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import TYPE_CHECKING, List

from .logging_utils import LogBlockBuilder

if TYPE_CHECKING:
    from .models import AuditStats, SortStats

LOGGER = logging.getLogger(__name__)

DETAIL_LIMIT = 10


def plural(count: int, singular: str, plural_form: str | None = None) -> str:
    noun = singular if count == 1 else (plural_form or f"{singular}s")
    return f"{count} {noun}"


def format_duration(seconds: float) -> str:
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes, remainder = divmod(seconds, 60)
    return f"{int(minutes)}m {remainder:.0f}s"


def limit_details(entries: List[str], *, limit: int = DETAIL_LIMIT) -> List[str]:
    """Collapse duplicates and keep the first ``limit`` distinct entries."""
    counts = Counter(entries)
    lines: List[str] = []
    for entry in dict.fromkeys(entries):
        count = counts[entry]
        lines.append(f"{entry} (x{count})" if count > 1 else entry)
    if len(lines) > limit:
        hidden = len(lines) - limit
        lines = lines[:limit]
        lines.append(f"... and {hidden} more (run with --verbose for details)")
    return lines


def log_sort_summary(stats: SortStats, *, logger: logging.Logger = LOGGER) -> None:
    builder = LogBlockBuilder("Sync Summary" if not stats.dry_run else "Sync Summary (dry-run)")
    builder.add_fields(
        [
            ("Albums found", stats.found),
            ("Lossy albums", stats.lossy),
            ("New albums", stats.new),
            ("Would move" if stats.dry_run else "Moved", stats.moved),
            ("Uncategorized", stats.uncategorized),
            ("Failed moves", stats.failed),
            ("Duration", format_duration(stats.duration)),
        ]
    )
    logger.info(builder.render())

    if stats.uncategorized:
        warning = LogBlockBuilder(f"!!! {plural(stats.uncategorized, 'album')} still UNCATEGORIZED !!!")
        warning.add_section("Albums", limit_details(stats.uncategorized_albums))
        logger.warning(warning.render())

    if stats.errors:
        errors = LogBlockBuilder(f"{plural(len(stats.errors), 'Error')} During Sync")
        errors.add_section("Details", limit_details(stats.errors))
        logger.error(errors.render())

    if stats.warnings:
        warnings = LogBlockBuilder(f"{plural(len(stats.warnings), 'Warning')} During Sync")
        warnings.add_section("Details", limit_details(stats.warnings))
        logger.warning(warnings.render())


def log_audit_summary(stats: AuditStats, *, logger: logging.Logger = LOGGER) -> None:
    builder = LogBlockBuilder("Audit Summary")
    builder.add_fields(
        [
            ("Albums checked", stats.albums),
            ("Non-lossless", stats.non_lossless),
            ("Not flagged", stats.unflagged),
            ("Suspicious files", len(stats.suspicious_files)),
            ("Duration", format_duration(stats.duration)),
        ]
    )
    if stats.non_lossless_albums:
        builder.add_section("Non-lossless albums", limit_details(stats.non_lossless_albums))
    logger.info(builder.render())

    if stats.unflagged:
        warning = LogBlockBuilder(f"!!! {plural(stats.unflagged, 'album')} not flagged as non-lossless !!!")
        warning.add_section("Albums", limit_details(stats.unflagged_albums))
        logger.warning(warning.render())

    if stats.errors:
        errors = LogBlockBuilder(f"{plural(len(stats.errors), 'Error')} During Audit")
        errors.add_section("Details", limit_details(stats.errors))
        logger.error(errors.render())
