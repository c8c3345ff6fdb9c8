from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import List, Optional

from .file_types import is_music_file
from .utils import format_relative

LOSSY_MARKER = "[MP3]"
VARIOUS_ARTISTS = "Various Artists"
COMPILATION_SEPARATOR = " | "


@dataclass(frozen=True, slots=True)
class AlbumIdentity:
    artist: str
    year: str
    title: str
    is_lossy: bool = False
    main_alias: str = ""

    def __post_init__(self) -> None:
        if not self.main_alias:
            object.__setattr__(self, "main_alias", self.artist)

    @property
    def folder_name(self) -> str:
        """The canonical directory name, identical to the name it was parsed from."""
        name = f"{self.artist} ({self.year}) {self.title}"
        if self.is_lossy:
            name += f" {LOSSY_MARKER}"
        return name

    @property
    def display_name(self) -> str:
        return f"{self.main_alias}/{self.folder_name}"

    @property
    def is_compilation(self) -> bool:
        return self.main_alias == VARIOUS_ARTISTS

    @property
    def compilation_key(self) -> str:
        return f"{VARIOUS_ARTISTS}{COMPILATION_SEPARATOR}{self.title}"

    def with_main_alias(self, main_alias: str) -> AlbumIdentity:
        return replace(self, main_alias=main_alias)

    def __str__(self) -> str:
        return self.display_name


@dataclass(slots=True)
class AlbumLocation:
    """An album directory on disk and, once resolved, where it belongs."""

    root: Path
    current_path: Path
    identity: Optional[AlbumIdentity] = None
    target_path: Optional[Path] = None
    has_known_genre: bool = False

    @property
    def needs_move(self) -> bool:
        return self.target_path is not None and self.target_path != self.current_path

    @property
    def relative_current(self) -> str:
        return format_relative(self.current_path, self.root)

    @property
    def relative_target(self) -> str:
        return format_relative(self.target_path, self.root)

    def is_under(self, subdir: str) -> bool:
        return self.current_path.is_relative_to(self.root / subdir)

    @property
    def on_disk_path(self) -> Path:
        """The target directory once the album is there, the current one otherwise."""
        if self.target_path is not None and self.target_path.is_dir():
            return self.target_path
        return self.current_path

    def music_files(self) -> List[Path]:
        """Sorted audio files of the album, wherever it currently is."""
        directory = self.on_disk_path
        return sorted(entry for entry in directory.iterdir() if entry.is_file() and is_music_file(entry))

    def __str__(self) -> str:
        if self.identity is not None:
            return self.identity.display_name
        return self.current_path.name


@dataclass(slots=True)
class SortStats:
    found: int = 0
    lossy: int = 0
    moved: int = 0
    uncategorized: int = 0
    new: int = 0
    failed: int = 0
    dry_run: bool = False
    duration: float = 0.0
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    uncategorized_albums: List[str] = field(default_factory=list)
    new_albums: List[str] = field(default_factory=list)

    def register_found(self, identity: AlbumIdentity) -> None:
        self.found += 1
        if identity.is_lossy:
            self.lossy += 1

    def register_moved(self) -> None:
        self.moved += 1

    def register_uncategorized(self, detail: str) -> None:
        self.uncategorized += 1
        self.uncategorized_albums.append(detail)

    def register_new(self, detail: str) -> None:
        self.new += 1
        self.new_albums.append(detail)

    def register_failure(self, message: str) -> None:
        self.failed += 1
        self.register_error(message)

    def register_error(self, message: str) -> None:
        self.errors.append(message)

    def register_warning(self, message: str) -> None:
        if message not in self.warnings:
            self.warnings.append(message)

    @property
    def has_failures(self) -> bool:
        return bool(self.failed or self.errors)


@dataclass(slots=True)
class AuditStats:
    albums: int = 0
    non_lossless: int = 0
    unflagged: int = 0
    duration: float = 0.0
    non_lossless_albums: List[str] = field(default_factory=list)
    unflagged_albums: List[str] = field(default_factory=list)
    suspicious_files: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    def register_album(self) -> None:
        self.albums += 1

    def register_non_lossless(self, detail: str, *, flagged: bool) -> None:
        self.non_lossless += 1
        self.non_lossless_albums.append(detail)
        if not flagged:
            self.unflagged += 1
            self.unflagged_albums.append(detail)

    def register_suspicious(self, detail: str) -> None:
        self.suspicious_files.append(detail)

    def register_error(self, message: str) -> None:
        self.errors.append(message)
