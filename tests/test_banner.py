from __future__ import annotations

from io import StringIO
from pathlib import Path

from rich.console import Console

from shelver import __version__
from shelver.banner import build_banner_info, print_startup_banner
from shelver.config import AliasTable, AppConfig, GenreTable, Settings


def build_config(tmp_path: Path) -> AppConfig:
    return AppConfig(
        settings=Settings(root=tmp_path / "music", playlist_dir=tmp_path / "lists"),
        genres=GenreTable.from_mapping({"genre1": ["PPP"], "genre2": []}),
        aliases=AliasTable.from_mapping({"PPP": ["ppp"]}),
    )


def test_build_banner_info_from_config(tmp_path: Path) -> None:
    """Test that banner info mirrors the configuration."""
    info = build_banner_info(build_config(tmp_path), command="sync", dry_run=True)

    assert info.version == __version__
    assert info.command == "sync"
    assert info.dry_run is True
    assert info.verbose is False
    assert info.root == str(tmp_path / "music")
    assert info.playlist_dir == str(tmp_path / "lists")
    assert info.genre_count == 2
    assert info.alias_count == 1


def test_print_startup_banner_output(tmp_path: Path) -> None:
    """Test that the banner panel contains the mode and layout."""
    buffer = StringIO()
    console = Console(file=buffer, width=120, force_terminal=False)
    info = build_banner_info(build_config(tmp_path), command="check", dry_run=True, verbose=True)

    print_startup_banner(info, console)

    output = buffer.getvalue()
    assert "SHELVER" in output
    assert "check" in output
    assert "DRY-RUN" in output
    assert "VERBOSE" in output
    assert "UNCATEGORIZED" in output
