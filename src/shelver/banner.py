from __future__ import annotations

from dataclasses import dataclass

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .config import AppConfig


@dataclass
class BannerInfo:
    version: str
    command: str
    dry_run: bool
    verbose: bool
    root: str
    incoming_subdir: str
    unsorted_subdir: str
    playlist_dir: str
    genre_count: int
    alias_count: int


def build_banner_info(config: AppConfig, *, command: str, dry_run: bool = False, verbose: bool = False) -> BannerInfo:
    settings = config.settings
    return BannerInfo(
        version=__version__,
        command=command,
        dry_run=dry_run,
        verbose=verbose,
        root=str(settings.root),
        incoming_subdir=settings.incoming_subdir,
        unsorted_subdir=settings.unsorted_subdir,
        playlist_dir=str(settings.playlists_dir),
        genre_count=len(config.genres),
        alias_count=len(config.aliases),
    )


def print_startup_banner(info: BannerInfo, console: Console) -> None:
    """Print a panel with the version, mode and collection layout."""
    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column("Key", style="cyan bold", no_wrap=True)
    table.add_column("Value", style="white")

    table.add_row("Version", f"[bold]{info.version}[/bold]")
    mode_parts = [f"[bold]{info.command}[/bold]"]
    if info.dry_run:
        mode_parts.append("[yellow]DRY-RUN[/yellow]")
    if info.verbose:
        mode_parts.append("[cyan]VERBOSE[/cyan]")
    table.add_row("Mode", " ".join(mode_parts))
    table.add_row("Root", escape(info.root))
    table.add_row("Incoming", escape(info.incoming_subdir))
    table.add_row("Unsorted", escape(info.unsorted_subdir))
    table.add_row("Playlists", escape(info.playlist_dir))
    table.add_row("Genres", f"[bold]{info.genre_count}[/bold]")
    table.add_row("Aliases", f"[bold]{info.alias_count}[/bold]")

    console.print()
    console.print(Panel(table, title="[bold white]SHELVER[/bold white]", border_style="blue", padding=(1, 2)))
    console.print()
