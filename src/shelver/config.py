from __future__ import annotations

import logging
import os
from bisect import bisect_left
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path, PurePath
from typing import Any

import yaml

from .errors import ConfigError, FilesystemFatalError
from .utils import dump_yaml_file, load_yaml_file, xdg_config_home
from .validation import ValidationReport, validate_name_lists, validate_settings_data

LOGGER = logging.getLogger(__name__)

APP_NAME = "shelver"
MAIN_CONFIG_FILE = f"{APP_NAME}.yaml"
GENRES_CONFIG_FILE = f"{APP_NAME}_genres.yaml"
ALIASES_CONFIG_FILE = f"{APP_NAME}_aliases.yaml"
CONFIG_DIR_ENV = "SHELVER_CONFIG_DIR"

DEFAULT_INCOMING_SUBDIR = "INCOMING"
DEFAULT_UNSORTED_SUBDIR = "UNCATEGORIZED"
DEFAULT_PLAYLIST_SUBDIR = "playlists"


def _contains(sorted_values: tuple[str, ...], value: str) -> bool:
    index = bisect_left(sorted_values, value)
    return index < len(sorted_values) and sorted_values[index] == value


def _normalize_names(values: Iterable[str]) -> tuple[str, ...]:
    return tuple(sorted(set(values)))


def _name_order(name: str) -> tuple[str, str]:
    return (name.casefold(), name)


@dataclass(frozen=True)
class Genre:
    """A genre and the artists filed under it. ``artists`` is sorted and unique."""

    name: str
    artists: tuple[str, ...] = ()

    @classmethod
    def build(cls, name: str, artists: Iterable[str]) -> Genre:
        return cls(name=name, artists=_normalize_names(artists))

    def has_artist(self, artist: str) -> bool:
        return _contains(self.artists, artist)

    def has_compilation(self, compilation_key: str) -> bool:
        return _contains(self.artists, compilation_key)


@dataclass(frozen=True)
class ArtistAliases:
    """The main alias of an artist and the other names it is known by."""

    main_alias: str
    aliases: tuple[str, ...] = ()

    @classmethod
    def build(cls, main_alias: str, aliases: Iterable[str]) -> ArtistAliases:
        return cls(main_alias=main_alias, aliases=_normalize_names(aliases))

    def has_alias(self, name: str) -> bool:
        return _contains(self.aliases, name)


@dataclass(frozen=True)
class GenreTable:
    genres: tuple[Genre, ...] = ()

    @classmethod
    def from_mapping(cls, data: Mapping[str, Iterable[str]]) -> GenreTable:
        genres = [Genre.build(name, artists) for name, artists in data.items()]
        genres.sort(key=lambda genre: _name_order(genre.name))
        return cls(genres=tuple(genres))

    def __iter__(self):
        return iter(self.genres)

    def __len__(self) -> int:
        return len(self.genres)

    def names(self) -> list[str]:
        return [genre.name for genre in self.genres]

    def to_mapping(self) -> dict[str, list[str]]:
        return {genre.name: list(genre.artists) for genre in self.genres}


@dataclass(frozen=True)
class AliasTable:
    artists: tuple[ArtistAliases, ...] = ()

    @classmethod
    def from_mapping(cls, data: Mapping[str, Iterable[str]]) -> AliasTable:
        artists = [ArtistAliases.build(main_alias, aliases) for main_alias, aliases in data.items()]
        artists.sort(key=lambda entry: _name_order(entry.main_alias))
        return cls(artists=tuple(artists))

    def __iter__(self):
        return iter(self.artists)

    def __len__(self) -> int:
        return len(self.artists)

    def main_alias_for(self, artist: str) -> str | None:
        for entry in self.artists:
            if entry.has_alias(artist):
                return entry.main_alias
        return None

    def to_mapping(self) -> dict[str, list[str]]:
        return {entry.main_alias: list(entry.aliases) for entry in self.artists}


@dataclass(frozen=True)
class Settings:
    root: Path
    incoming_subdir: str = DEFAULT_INCOMING_SUBDIR
    unsorted_subdir: str = DEFAULT_UNSORTED_SUBDIR
    playlist_dir: Path | None = None

    @property
    def incoming_dir(self) -> Path:
        return self.root / self.incoming_subdir

    @property
    def unsorted_dir(self) -> Path:
        return self.root / self.unsorted_subdir

    @property
    def playlists_dir(self) -> Path:
        return self.playlist_dir or self.root / DEFAULT_PLAYLIST_SUBDIR

    def check(self) -> None:
        """Make sure the collection root can be walked."""
        if not self.root.exists():
            raise FilesystemFatalError(f"Collection root {self.root} does not exist")
        if not self.root.is_dir():
            raise FilesystemFatalError(f"Collection root {self.root} is not a directory")
        if not os.access(self.root, os.R_OK | os.X_OK):
            raise FilesystemFatalError(f"Collection root {self.root} cannot be read")


@dataclass(frozen=True)
class AppConfig:
    settings: Settings
    genres: GenreTable = field(default_factory=GenreTable)
    aliases: AliasTable = field(default_factory=AliasTable)


@dataclass(frozen=True)
class ConfigPaths:
    directory: Path

    @property
    def main(self) -> Path:
        return self.directory / MAIN_CONFIG_FILE

    @property
    def genres(self) -> Path:
        return self.directory / GENRES_CONFIG_FILE

    @property
    def aliases(self) -> Path:
        return self.directory / ALIASES_CONFIG_FILE


def default_config_dir() -> Path:
    override = os.getenv(CONFIG_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return xdg_config_home() / APP_NAME


def resolve_config_paths(directory: Path | None = None) -> ConfigPaths:
    return ConfigPaths(directory=(directory or default_config_dir()).expanduser())


def _load_document(path: Path) -> dict[str, Any]:
    try:
        return load_yaml_file(path)
    except OSError as exc:
        raise ConfigError(f"Unable to read {path}: {exc}") from exc
    except (yaml.YAMLError, ValueError) as exc:
        raise ConfigError(f"Unable to parse {path}: {exc}") from exc


def _ensure_document(path: Path) -> dict[str, Any]:
    if not path.exists():
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.touch()
        except OSError as exc:
            raise ConfigError(f"Unable to create {path}: {exc}") from exc
        LOGGER.warning("Configuration file %s created. Populate it.", path)
        return {}
    return _load_document(path)


def _ensure_string_list(value: Any, *, field_name: str) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigError(f"'{field_name}' must be provided as a list of strings")
    result: list[str] = []
    for index, entry in enumerate(value):
        if not isinstance(entry, (str, int, float)) or isinstance(entry, bool):
            raise ConfigError(f"'{field_name}[{index}]' must be a string")
        text = str(entry).strip()
        if text:
            result.append(text)
    return result


def _build_name_lists(data: Mapping[Any, Any], *, document: str) -> dict[str, list[str]]:
    result: dict[str, list[str]] = {}
    for key, value in data.items():
        name = str(key).strip()
        if not name:
            raise ConfigError(f"{document} contains an empty name")
        result[name] = _ensure_string_list(value, field_name=f"{document}.{name}")
    return result


def _validate_subdir(value: Any, *, field_name: str, default: str) -> str:
    if value is None:
        return default
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"'{field_name}' must be a non-empty string")
    subdir = value.strip()
    parts = PurePath(subdir).parts
    if len(parts) != 1 or PurePath(subdir).is_absolute() or subdir in {".", ".."}:
        raise ConfigError(f"'{field_name}' must be a single directory name, got '{subdir}'")
    return subdir


def build_settings(data: Mapping[str, Any]) -> Settings:
    root_raw = data.get("root")
    if not isinstance(root_raw, str) or not root_raw.strip():
        raise ConfigError("'root' is required and must be a path")
    root = Path(root_raw.strip()).expanduser().resolve()

    playlist_raw = data.get("playlist_dir")
    if playlist_raw is not None and (not isinstance(playlist_raw, str) or not playlist_raw.strip()):
        raise ConfigError("'playlist_dir' must be a path when specified")
    playlist_dir = Path(playlist_raw.strip()).expanduser().resolve() if playlist_raw else None

    return Settings(
        root=root,
        incoming_subdir=_validate_subdir(
            data.get("incoming_subdir"), field_name="incoming_subdir", default=DEFAULT_INCOMING_SUBDIR
        ),
        unsorted_subdir=_validate_subdir(
            data.get("unsorted_subdir"), field_name="unsorted_subdir", default=DEFAULT_UNSORTED_SUBDIR
        ),
        playlist_dir=playlist_dir,
    )


def _check_report(report: ValidationReport, path: Path) -> None:
    for issue in report.warnings:
        LOGGER.warning("%s: %s (%s)", path.name, issue.message, issue.path)
    if not report.is_valid:
        details = "\n".join(f"  - {line}" for line in report.describe_errors())
        raise ConfigError(f"Invalid configuration in {path}:\n{details}")


def load_config(paths: ConfigPaths) -> AppConfig:
    """Load the three configuration documents and normalize the tables once.

    Every document is validated before any table is built.
    """
    if not paths.main.exists():
        raise ConfigError(f"Main configuration file {paths.main} does not exist")
    main_data = _load_document(paths.main)
    _check_report(validate_settings_data(main_data), paths.main)
    settings = build_settings(main_data)

    tables: dict[str, dict[str, list[str]]] = {}
    for document, path in (("genres", paths.genres), ("aliases", paths.aliases)):
        data = _ensure_document(path)
        _check_report(validate_name_lists(data, document=document), path)
        tables[document] = _build_name_lists(data, document=document)
    genres, aliases = tables["genres"], tables["aliases"]
    return AppConfig(
        settings=settings,
        genres=GenreTable.from_mapping(genres),
        aliases=AliasTable.from_mapping(aliases),
    )


def save_config(config: AppConfig, paths: ConfigPaths) -> None:
    """Write the genre and alias documents back, sorted and deduplicated."""
    try:
        dump_yaml_file(paths.aliases, config.aliases.to_mapping())
        dump_yaml_file(paths.genres, config.genres.to_mapping())
    except OSError as exc:
        raise ConfigError(f"Unable to write configuration to {paths.directory}: {exc}") from exc
