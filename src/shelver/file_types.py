"""File extension classification for album contents."""

from __future__ import annotations

from pathlib import Path

LOSSLESS_EXTENSIONS = frozenset({".flac"})
COVER_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png"})
LOSSY_EXTENSIONS = frozenset({".mp3", ".wma", ".m4a", ".ogg", ".opus", ".aac"})

# Files a lossless album may contain without being flagged.
ACCEPTED_EXTENSIONS = LOSSLESS_EXTENSIONS | COVER_EXTENSIONS

# Files referenced from playlists.
PLAYLIST_EXTENSIONS = frozenset({".flac", ".mp3"})

PLAYLIST_SUFFIX = ".m3u"


def extension_of(path: Path | str) -> str:
    return Path(path).suffix.lower()


def is_accepted(path: Path | str) -> bool:
    return extension_of(path) in ACCEPTED_EXTENSIONS


def is_known_lossy(path: Path | str) -> bool:
    return extension_of(path) in LOSSY_EXTENSIONS


def is_music_file(path: Path | str) -> bool:
    return extension_of(path) in PLAYLIST_EXTENSIONS


def is_playlist(path: Path | str) -> bool:
    return extension_of(path) == PLAYLIST_SUFFIX
