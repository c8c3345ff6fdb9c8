from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Optional, Sequence

from rich.console import Console

from . import __version__
from .banner import build_banner_info, print_startup_banner
from .cleanup import delete_empty_folders
from .config import AppConfig, ConfigPaths, load_config, resolve_config_paths, save_config
from .errors import ConfigError, FilesystemFatalError, PlaylistError, PreconditionError
from .flac_audit import find_lossy_albums
from .logging_utils import configure_logging, render_fields_block
from .playlist import Playlist, current_playlists, list_playlists, playlist_path, write_current_playlists
from .summary_table import SummaryTableRenderer
from .tree_walker import sort_collection

LOGGER = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG_ERROR = 2

Handler = Callable[[argparse.Namespace], int]


def _console() -> Console:
    return Console()


def _config_paths(args: argparse.Namespace) -> ConfigPaths:
    return resolve_config_paths(getattr(args, "config_dir", None))


def _load(args: argparse.Namespace) -> AppConfig:
    paths = _config_paths(args)
    LOGGER.debug("Loading configuration from %s", paths.directory)
    return load_config(paths)


def _print_banner(config: AppConfig, args: argparse.Namespace, *, command: str, dry_run: bool) -> None:
    info = build_banner_info(config, command=command, dry_run=dry_run, verbose=bool(getattr(args, "verbose", False)))
    print_startup_banner(info, _console())


def run_config_show(args: argparse.Namespace) -> int:
    config = _load(args)
    SummaryTableRenderer(_console()).print_config(config)
    return EXIT_OK


def run_config_save(args: argparse.Namespace) -> int:
    paths = _config_paths(args)
    config = load_config(paths)
    save_config(config, paths)
    LOGGER.info(
        render_fields_block(
            "Configuration Saved",
            {"Genres": paths.genres, "Aliases": paths.aliases},
        )
    )
    return EXIT_OK


def _sync(args: argparse.Namespace, *, dry_run: bool, command: str) -> int:
    config = _load(args)
    config.settings.check()
    _print_banner(config, args, command=command, dry_run=dry_run)

    playlists: tuple[Playlist, ...] = () if dry_run else current_playlists(config)
    stats = sort_collection(config, dry_run=dry_run, playlists=playlists)
    SummaryTableRenderer(_console()).print_sort_summary(stats)

    if not dry_run:
        write_current_playlists(playlists)
    delete_empty_folders(config.settings.root, dry_run=dry_run)
    return EXIT_FAILURE if stats.has_failures else EXIT_OK


def run_sync(args: argparse.Namespace) -> int:
    dry_run = bool(getattr(args, "dry_run", False))
    return _sync(args, dry_run=dry_run, command="sync")


def run_check(args: argparse.Namespace) -> int:
    return _sync(args, dry_run=True, command="check")


def run_fsck(args: argparse.Namespace) -> int:
    config = _load(args)
    config.settings.check()
    _print_banner(config, args, command="fsck", dry_run=True)
    stats = find_lossy_albums(config.settings.root)
    SummaryTableRenderer(_console()).print_audit_summary(stats)
    return EXIT_FAILURE if stats.errors else EXIT_OK


def run_playlist_show(args: argparse.Namespace) -> int:
    config = _load(args)
    names = list_playlists(config.settings.playlists_dir)
    renderer = SummaryTableRenderer(_console())
    renderer.console.print(renderer.render_playlists_table(names))
    return EXIT_OK


def run_playlist_update(args: argparse.Namespace) -> int:
    config = _load(args)
    playlist = Playlist(playlist_path(config, args.name), config.settings.root)
    LOGGER.info("Updating playlist %s", playlist.filename)
    playlist.update_and_save(config)
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shelver",
        description="Keep a music collection sorted as Root/Genre/Artist/Artist (Year) Title.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--config-dir",
        type=Path,
        default=None,
        help="Directory holding shelver.yaml and friends (default: $SHELVER_CONFIG_DIR or ~/.config/shelver)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug details to the console")
    parser.add_argument("--log-file", type=Path, default=None, help="Also write a debug log to this file")

    commands = parser.add_subparsers(dest="command", metavar="command")

    config_parser = commands.add_parser("config", aliases=["c"], help="Show or normalize the configuration")
    config_commands = config_parser.add_subparsers(dest="config_command", metavar="action")
    show = config_commands.add_parser("show", aliases=["ls"], help="Show paths, genres and aliases")
    show.set_defaults(handler=run_config_show)
    save = config_commands.add_parser("save", aliases=["sa"], help="Sort, deduplicate and rewrite genres and aliases")
    save.set_defaults(handler=run_config_save)

    sync = commands.add_parser("sync", aliases=["s"], help="Move albums to their place, then remove empty directories")
    sync.add_argument("-n", "--dry-run", action="store_true", help="Report what would change without touching disk")
    sync.set_defaults(handler=run_sync)

    check = commands.add_parser("check", help="Same as 'sync --dry-run'")
    check.set_defaults(handler=run_check)

    fsck = commands.add_parser("fsck", aliases=["audit"], help="List albums that are not entirely flac")
    fsck.set_defaults(handler=run_fsck)

    playlist_parser = commands.add_parser("playlist", aliases=["p"], help="Inspect or update playlists")
    playlist_commands = playlist_parser.add_subparsers(dest="playlist_command", metavar="action")
    playlist_show = playlist_commands.add_parser("show", aliases=["ls"], help="List playlists")
    playlist_show.set_defaults(handler=run_playlist_show)
    playlist_update = playlist_commands.add_parser(
        "update", aliases=["up"], help="Point a playlist at the current location of its albums"
    )
    playlist_update.add_argument("name", help="Playlist file name, e.g. 2016-01.m3u")
    playlist_update.set_defaults(handler=run_playlist_update)

    return parser


def dispatch(handler: Handler, args: argparse.Namespace) -> int:
    """Run a command handler, turning shelver errors into exit codes."""
    try:
        return handler(args)
    except ConfigError as exc:
        LOGGER.error(render_fields_block("Configuration Error", {"Reason": exc}))
        return EXIT_CONFIG_ERROR
    except FilesystemFatalError as exc:
        LOGGER.error(render_fields_block("Aborting", {"Reason": exc}))
        return EXIT_FAILURE
    except PlaylistError as exc:
        LOGGER.error(render_fields_block("Playlist Error", {"Reason": exc}))
        return EXIT_FAILURE
    except PreconditionError:
        LOGGER.exception("Internal error")
        return EXIT_FAILURE


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    handler: Optional[Handler] = getattr(args, "handler", None)
    if handler is None:
        parser.print_help(sys.stderr)
        return EXIT_CONFIG_ERROR

    configure_logging(verbose=args.verbose, log_file=args.log_file)
    return dispatch(handler, args)
