from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:  # pragma: no cover
    from .config import AppConfig
    from .models import AuditStats, SortStats


SUCCESS_COLOR = "green"
WARNING_COLOR = "yellow"
ERROR_COLOR = "red"
DIM_COLOR = "dim"

SUCCESS_SYMBOL = "✓"
WARNING_SYMBOL = "⚠"
ERROR_SYMBOL = "✗"


class SummaryTableRenderer:
    """Renders run statistics and configuration as Rich tables."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    @staticmethod
    def _status_color(value: int, *, is_error: bool = False, is_warning: bool = False) -> str:
        if value == 0:
            return DIM_COLOR
        if is_error:
            return ERROR_COLOR
        if is_warning:
            return WARNING_COLOR
        return SUCCESS_COLOR

    @staticmethod
    def _status_symbol(*, is_error: bool = False, is_warning: bool = False) -> str:
        if is_error:
            return ERROR_SYMBOL
        if is_warning:
            return WARNING_SYMBOL
        return SUCCESS_SYMBOL

    @classmethod
    def _cell(cls, value: int, *, is_error: bool = False, is_warning: bool = False) -> str:
        color = cls._status_color(value, is_error=is_error, is_warning=is_warning)
        if value == 0:
            return f"[{color}]{value}[/{color}]"
        symbol = cls._status_symbol(is_error=is_error, is_warning=is_warning)
        return f"[{color}]{symbol} {value}[/{color}]"

    @staticmethod
    def _names_cell(names: Sequence[str]) -> str:
        if not names:
            return f"[{DIM_COLOR}](none)[/{DIM_COLOR}]"
        return escape(", ".join(names))

    @staticmethod
    def _metric_table(title: str) -> Table:
        table = Table(title=title, show_header=True, header_style="bold")
        table.add_column("Metric", style="cyan", no_wrap=True)
        table.add_column("Count", justify="right")
        return table

    def render_sort_table(self, stats: SortStats) -> Table:
        table = self._metric_table("Sync Summary (dry-run)" if stats.dry_run else "Sync Summary")
        table.add_row("Albums found", self._cell(stats.found))
        table.add_row("Lossy albums", self._cell(stats.lossy, is_warning=True))
        table.add_row("New albums", self._cell(stats.new))
        table.add_row("Would move" if stats.dry_run else "Moved", self._cell(stats.moved))
        table.add_row("Uncategorized", self._cell(stats.uncategorized, is_warning=True))
        table.add_row("Failed moves", self._cell(stats.failed, is_error=True))
        table.add_row("Duration", f"{stats.duration:.2f}s")
        return table

    def render_audit_table(self, stats: AuditStats) -> Table:
        table = self._metric_table("Audit Summary")
        table.add_row("Albums checked", self._cell(stats.albums))
        table.add_row("Non-lossless", self._cell(stats.non_lossless, is_warning=True))
        table.add_row("Not flagged", self._cell(stats.unflagged, is_error=True))
        table.add_row("Suspicious files", self._cell(len(stats.suspicious_files), is_warning=True))
        table.add_row("Errors", self._cell(len(stats.errors), is_error=True))
        table.add_row("Duration", f"{stats.duration:.2f}s")
        return table

    def render_settings_table(self, config: AppConfig) -> Table:
        settings = config.settings
        table = Table(title="Paths", show_header=False, box=None, padding=(0, 1))
        table.add_column("Key", style="cyan bold", no_wrap=True)
        table.add_column("Value")
        table.add_row("Root", escape(str(settings.root)))
        table.add_row("Incoming", escape(settings.incoming_subdir))
        table.add_row("Unsorted", escape(settings.unsorted_subdir))
        table.add_row("Playlists", escape(str(settings.playlists_dir)))
        return table

    def render_genres_table(self, config: AppConfig) -> Table:
        table = Table(title="Genres", show_header=True, header_style="bold")
        table.add_column("Genre", style="cyan", no_wrap=True)
        table.add_column("Artists")
        for genre in config.genres:
            table.add_row(escape(genre.name), self._names_cell(genre.artists))
        return table

    def render_aliases_table(self, config: AppConfig) -> Table:
        table = Table(title="Aliases", show_header=True, header_style="bold")
        table.add_column("Main alias", style="cyan", no_wrap=True)
        table.add_column("Also known as")
        for entry in config.aliases:
            table.add_row(escape(entry.main_alias), self._names_cell(entry.aliases))
        return table

    def render_playlists_table(self, names: Sequence[str]) -> Table:
        table = Table(title="Playlists", show_header=False)
        table.add_column("Playlist", style="cyan")
        for name in names:
            table.add_row(escape(name))
        if not names:
            table.add_row(f"[{DIM_COLOR}](none)[/{DIM_COLOR}]")
        return table

    def print_config(self, config: AppConfig) -> None:
        self.console.print(self.render_settings_table(config))
        self.console.print(self.render_genres_table(config))
        self.console.print(self.render_aliases_table(config))

    def print_sort_summary(self, stats: SortStats) -> None:
        self.console.print()
        self.console.print(self.render_sort_table(stats))
        if stats.uncategorized:
            self.console.print(
                f"[bold {ERROR_COLOR}]!!! {stats.uncategorized} album(s) still UNCATEGORIZED !!![/bold {ERROR_COLOR}]"
            )

    def print_audit_summary(self, stats: AuditStats) -> None:
        self.console.print()
        self.console.print(self.render_audit_table(stats))
        if stats.unflagged:
            message = f"!!! {stats.unflagged} album(s) not flagged as non-lossless !!!"
            self.console.print(f"[bold {ERROR_COLOR}]{message}[/bold {ERROR_COLOR}]")
