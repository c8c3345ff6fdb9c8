from __future__ import annotations

import logging

import pytest

from shelver.models import AlbumIdentity, AuditStats, SortStats
from shelver.run_summary import format_duration, limit_details, log_audit_summary, log_sort_summary, plural


@pytest.mark.parametrize(
    ("seconds", "expected"),
    [(0.25, "250ms"), (3.21, "3.2s"), (125, "2m 5s")],
)
def test_format_duration(seconds: float, expected: str) -> None:
    assert format_duration(seconds) == expected


def test_plural() -> None:
    assert plural(1, "album") == "1 album"
    assert plural(3, "album") == "3 albums"
    assert plural(2, "entry", "entries") == "2 entries"


def test_limit_details_collapses_and_truncates() -> None:
    entries = ["a", "b", "a"] + [f"x{index}" for index in range(12)]

    lines = limit_details(entries)

    assert lines[0] == "a (x2)"
    assert lines[1] == "b"
    assert len(lines) == 11
    assert lines[-1].startswith("... and 4 more")


class TestLogSortSummary:
    """Test the sync summary blocks."""

    def test_summary_only_for_clean_run(self, caplog: pytest.LogCaptureFixture) -> None:
        stats = SortStats()
        stats.register_found(AlbumIdentity("a", "2000", "b", is_lossy=True))

        with caplog.at_level(logging.INFO):
            log_sort_summary(stats)

        assert len(caplog.records) == 1
        assert "Lossy albums" in caplog.records[0].getMessage()

    def test_problem_blocks(self, caplog: pytest.LogCaptureFixture) -> None:
        stats = SortStats(dry_run=True)
        stats.register_uncategorized("UNCATEGORIZED/a/a (2000) b")
        stats.register_failure("x -> y: destination already exists")
        stats.register_warning("Unable to read z")

        with caplog.at_level(logging.INFO):
            log_sort_summary(stats)

        levels = [record.levelno for record in caplog.records]
        assert levels == [logging.INFO, logging.WARNING, logging.ERROR, logging.WARNING]
        assert "Sync Summary (dry-run)" in caplog.records[0].getMessage()
        assert "1 album still UNCATEGORIZED" in caplog.records[1].getMessage()


def test_audit_summary_warns_about_unflagged(caplog: pytest.LogCaptureFixture) -> None:
    stats = AuditStats()
    stats.register_album()
    stats.register_non_lossless("a (2000) b", flagged=False)

    with caplog.at_level(logging.INFO):
        log_audit_summary(stats)

    assert [record.levelno for record in caplog.records] == [logging.INFO, logging.WARNING]
    assert "not flagged" in caplog.records[1].getMessage()
