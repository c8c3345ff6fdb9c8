from __future__ import annotations

from pathlib import Path

import pytest

from shelver.album_name import parse_album_name
from shelver.config import AliasTable, GenreTable
from shelver.errors import NotAnAlbumError
from shelver.genre_resolver import find_genre, locate_album, resolve_destination, resolve_main_alias
from shelver.models import AlbumLocation

UNSORTED = "UNCATEGORIZED"


@pytest.fixture
def genres() -> GenreTable:
    return GenreTable.from_mapping(
        {
            "genre1": ["PPP", "RRR", "arthi"],
            "Compilations": ["Various Artists | Greatest Hits"],
        }
    )


@pytest.fixture
def aliases() -> AliasTable:
    return AliasTable.from_mapping(
        {
            "PPP": ["arthi東京?-4."],
            "CCC": ["arthij"],
        }
    )


class TestResolveDestination:
    """Test resolve_destination against the reference scenarios."""

    def test_known_artist(self, genres: GenreTable) -> None:
        identity = parse_album_name("arthi (2000) jqojdoijd")
        resolution = resolve_destination(identity, genres, AliasTable(), UNSORTED)
        assert resolution.relative_path == Path("genre1/arthi/arthi (2000) jqojdoijd")
        assert resolution.has_known_genre is True
        assert resolution.genre == "genre1"

    def test_unknown_artist_goes_to_unsorted(self) -> None:
        identity = parse_album_name("arthi (2000) jqojdoijd")
        resolution = resolve_destination(identity, GenreTable.from_mapping({"genre1": ["PPP"]}), AliasTable(), UNSORTED)
        assert resolution.relative_path == Path("UNCATEGORIZED/arthi/arthi (2000) jqojdoijd")
        assert resolution.has_known_genre is False
        assert resolution.genre is None

    def test_alias_resolves_main_alias(self, genres: GenreTable, aliases: AliasTable) -> None:
        identity = parse_album_name("arthi東京?-4. (2000) jqojdoijd(??)--+")
        resolution = resolve_destination(identity, genres, aliases, UNSORTED)
        assert resolution.relative_path == Path("genre1/PPP/arthi東京?-4. (2000) jqojdoijd(??)--+")
        assert resolution.identity.main_alias == "PPP"
        assert resolution.identity.artist == "arthi東京?-4."
        assert identity.main_alias == "arthi東京?-4."

    def test_lossy_marker_kept_in_folder_name(self, genres: GenreTable) -> None:
        identity = parse_album_name("arthi (2000) jqojdoijd [MP3]")
        resolution = resolve_destination(identity, genres, AliasTable(), UNSORTED)
        assert resolution.relative_path == Path("genre1/arthi/arthi (2000) jqojdoijd [MP3]")

    def test_compilation_matched_by_title(self, genres: GenreTable) -> None:
        identity = parse_album_name("Various Artists (1995) Greatest Hits")
        resolution = resolve_destination(identity, genres, AliasTable(), UNSORTED)
        assert resolution.relative_path == Path("Compilations/Various Artists/Various Artists (1995) Greatest Hits")

    def test_unknown_compilation_is_uncategorized(self, genres: GenreTable) -> None:
        identity = parse_album_name("Various Artists (1995) Other Hits")
        resolution = resolve_destination(identity, genres, AliasTable(), UNSORTED)
        assert resolution.has_known_genre is False
        assert resolution.relative_path.parts[:2] == ("UNCATEGORIZED", "Various Artists")

    def test_various_artists_not_matched_directly(self) -> None:
        table = GenreTable.from_mapping({"genre1": ["Various Artists"]})
        identity = parse_album_name("Various Artists (1995) Greatest Hits")
        assert find_genre(identity, table) is None

    def test_is_deterministic(self, genres: GenreTable, aliases: AliasTable) -> None:
        identity = parse_album_name("arthi東京?-4. (2000) jqojdoijd(??)--+")
        first = resolve_destination(identity, genres, aliases, UNSORTED)
        for _ in range(5):
            assert resolve_destination(identity, genres, aliases, UNSORTED) == first

    def test_artist_in_two_genres_picks_first_alphabetically(self) -> None:
        table = GenreTable.from_mapping({"rock": ["arthi"], "Ambient": ["arthi"], "jazz": ["arthi"]})
        identity = parse_album_name("arthi (2000) jqojdoijd")
        assert find_genre(identity, table) == "Ambient"


class TestResolveMainAlias:
    """Test alias lookups."""

    def test_without_alias_keeps_identity(self, aliases: AliasTable) -> None:
        identity = parse_album_name("nobody (2000) nothing")
        assert resolve_main_alias(identity, aliases) is identity

    def test_main_alias_itself_is_not_an_alias(self, aliases: AliasTable) -> None:
        identity = parse_album_name("CCC (2000) nothing")
        assert resolve_main_alias(identity, aliases).main_alias == "CCC"

    def test_alias_lookup_is_exact(self, aliases: AliasTable) -> None:
        identity = parse_album_name("ARTHIJ (2000) nothing")
        assert resolve_main_alias(identity, aliases).main_alias == "ARTHIJ"


class TestLocateAlbum:
    """Test resolving a location in place."""

    def test_sets_absolute_target(self, genres: GenreTable, aliases: AliasTable) -> None:
        root = Path("/tmp/shelver_test")
        location = AlbumLocation(root=root, current_path=root / "INCOMING" / "arthi (2000) jqojdoijd")
        resolution = locate_album(location, genres, aliases, UNSORTED)
        assert location.target_path == root / "genre1" / "arthi" / "arthi (2000) jqojdoijd"
        assert location.has_known_genre is True
        assert location.identity == resolution.identity
        assert location.relative_target == "genre1/arthi/arthi (2000) jqojdoijd"

    def test_rejects_non_album(self, genres: GenreTable, aliases: AliasTable) -> None:
        location = AlbumLocation(root=Path("/tmp"), current_path=Path("/tmp/music"))
        with pytest.raises(NotAnAlbumError):
            locate_album(location, genres, aliases, UNSORTED)
        assert location.target_path is None
