"""Genre and alias resolution.

Resolution never touches the filesystem: given the same identity and tables it
always yields the same relative destination.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .album_name import identify_album
from .config import AliasTable, AppConfig, GenreTable
from .errors import NotAnAlbumError
from .models import AlbumIdentity, AlbumLocation


@dataclass(frozen=True, slots=True)
class Resolution:
    identity: AlbumIdentity
    relative_path: Path
    genre: Optional[str]

    @property
    def has_known_genre(self) -> bool:
        return self.genre is not None


def resolve_main_alias(identity: AlbumIdentity, aliases: AliasTable) -> AlbumIdentity:
    main_alias = aliases.main_alias_for(identity.artist)
    if main_alias is None:
        return identity
    return identity.with_main_alias(main_alias)


def find_genre(identity: AlbumIdentity, genres: GenreTable) -> Optional[str]:
    """Return the first genre claiming the album's main alias (or compilation)."""
    for genre in genres:
        if identity.is_compilation:
            found = genre.has_compilation(identity.compilation_key)
        else:
            found = genre.has_artist(identity.main_alias)
        if found:
            return genre.name
    return None


def resolve_destination(
    identity: AlbumIdentity,
    genres: GenreTable,
    aliases: AliasTable,
    unsorted_subdir: str,
) -> Resolution:
    """Compute where an album belongs, relative to the collection root.

    Known albums go to ``Genre/MainAlias/FolderName``; anything else is parked
    under ``UnsortedSubdir/MainAlias/FolderName``.
    """
    resolved = resolve_main_alias(identity, aliases)
    genre = find_genre(resolved, genres)
    top_level = genre if genre is not None else unsorted_subdir
    return Resolution(
        identity=resolved,
        relative_path=Path(top_level) / resolved.main_alias / resolved.folder_name,
        genre=genre,
    )


def locate_album(
    location: AlbumLocation,
    genres: GenreTable,
    aliases: AliasTable,
    unsorted_subdir: str,
) -> Resolution:
    """Resolve ``location`` in place, filling in its identity and target path.

    Raises:
        NotAnAlbumError: if the directory name is not an album name.
    """
    identity = identify_album(location)
    if identity is None:
        raise NotAnAlbumError(location.current_path.name)
    resolution = resolve_destination(identity, genres, aliases, unsorted_subdir)
    location.identity = resolution.identity
    location.target_path = location.root / resolution.relative_path
    location.has_known_genre = resolution.has_known_genre
    return resolution


def locate_with_config(location: AlbumLocation, config: AppConfig) -> Resolution:
    return locate_album(location, config.genres, config.aliases, config.settings.unsorted_subdir)
