"""Date-stamped ``.m3u`` playlists of recently imported albums.

A playlist file lists one media file per line, relative to the collection
root, which is what MPD expects. Internally a playlist is a list of albums:
on load every line is reduced to its album directory, and on write every
album is expanded back to its sorted flac/mp3 files.
"""

from __future__ import annotations

import datetime as dt
import logging
from pathlib import Path, PurePosixPath
from typing import Iterable, List, Optional

from .config import AppConfig
from .errors import NotAnAlbumError, PlaylistError
from .file_types import PLAYLIST_SUFFIX, is_playlist
from .genre_resolver import locate_with_config
from .logging_utils import render_fields_block
from .models import AlbumLocation
from .utils import ensure_directory

LOGGER = logging.getLogger(__name__)

DAILY_FORMAT = "%Y-%m-%d"
MONTHLY_FORMAT = "%Y-%m"


def _album_key(location: AlbumLocation) -> Path:
    return location.target_path or location.current_path


def remove_duplicate_paths(paths: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(paths))


class Playlist:
    def __init__(self, path: Path, root: Path, albums: Optional[Iterable[AlbumLocation]] = None) -> None:
        self.path = path
        self.root = root
        self.albums: List[AlbumLocation] = list(albums or [])

    @property
    def filename(self) -> str:
        return self.path.name

    def __str__(self) -> str:
        return f"{self.filename}: {len(self.albums)} albums"

    def __len__(self) -> int:
        return len(self.albums)

    def exists(self) -> bool:
        return self.path.is_file() and is_playlist(self.path)

    def add(self, location: AlbumLocation) -> None:
        self.albums.append(location)

    def remove_duplicates(self) -> None:
        seen: set[Path] = set()
        unique: List[AlbumLocation] = []
        for album in self.albums:
            key = _album_key(album)
            if key in seen:
                continue
            seen.add(key)
            unique.append(album)
        self.albums = unique

    def load(self) -> None:
        """Append the albums referenced by the playlist file, if there is one."""
        try:
            content = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return
        except OSError as exc:
            raise PlaylistError(f"Unable to read playlist {self.path}: {exc}") from exc

        album_dirs = remove_duplicate_paths(
            str(PurePosixPath(line.strip()).parent) for line in content.splitlines() if line.strip()
        )
        for album_dir in album_dirs:
            self.albums.append(AlbumLocation(root=self.root, current_path=self.root / album_dir))

    def refresh(self, config: AppConfig) -> None:
        """Resolve every album again so the playlist follows moved albums."""
        kept: List[AlbumLocation] = []
        for album in self.albums:
            try:
                locate_with_config(album, config)
            except NotAnAlbumError:
                LOGGER.warning(
                    render_fields_block(
                        "Dropping Playlist Entry",
                        {"Playlist": self.filename, "Entry": album.relative_current, "Reason": "not an album"},
                    )
                )
                continue
            kept.append(album)
        self.albums = kept

    def lines(self) -> List[str]:
        lines: List[str] = []
        for album in self.albums:
            try:
                files = album.music_files()
            except FileNotFoundError as exc:
                raise PlaylistError(
                    f"Could not find path {album.on_disk_path}; have you synced lately?"
                ) from exc
            except OSError as exc:
                raise PlaylistError(f"Unable to list {album.on_disk_path}: {exc}") from exc
            lines.extend(str(path.relative_to(self.root)) for path in files)
        return lines

    def write(self) -> None:
        """Rewrite the playlist file from its albums."""
        if not self.albums:
            raise PlaylistError("Empty playlist, nothing to write.")
        self.remove_duplicates()
        lines = self.lines()
        try:
            ensure_directory(self.path.parent)
            self.path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
        except OSError as exc:
            raise PlaylistError(f"Unable to write playlist {self.path}: {exc}") from exc
        LOGGER.info(
            render_fields_block(
                "Wrote Playlist",
                {"Playlist": self.filename, "Albums": len(self.albums), "Files": len(lines)},
            )
        )

    def update_and_save(self, config: AppConfig) -> None:
        if not self.exists():
            raise PlaylistError(f"{self.path} does not exist or is not a {PLAYLIST_SUFFIX} playlist")
        self.load()
        self.refresh(config)
        self.write()


def playlist_path(config: AppConfig, name: str) -> Path:
    candidate = Path(name)
    if candidate.is_absolute():
        return candidate
    return config.settings.playlists_dir / candidate


def current_playlists(config: AppConfig, today: Optional[dt.date] = None) -> tuple[Playlist, Playlist]:
    """Load today's and this month's playlists, following albums moved since."""
    today = today or dt.date.today()
    directory = config.settings.playlists_dir
    root = config.settings.root
    daily = Playlist(directory / f"{today.strftime(DAILY_FORMAT)}{PLAYLIST_SUFFIX}", root)
    monthly = Playlist(directory / f"{today.strftime(MONTHLY_FORMAT)}{PLAYLIST_SUFFIX}", root)
    for playlist in (daily, monthly):
        playlist.load()
        playlist.refresh(config)
    return daily, monthly


def write_current_playlists(playlists: Iterable[Playlist]) -> int:
    written = 0
    for playlist in playlists:
        if not playlist.albums:
            continue
        playlist.write()
        written += 1
    return written


def list_playlists(directory: Path) -> List[str]:
    try:
        return sorted(entry.name for entry in directory.iterdir() if entry.is_file() and is_playlist(entry))
    except FileNotFoundError:
        return []
    except OSError as exc:
        raise PlaylistError(f"Unable to list playlists in {directory}: {exc}") from exc
