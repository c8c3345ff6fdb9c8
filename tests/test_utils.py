from __future__ import annotations

from pathlib import Path

import pytest

from shelver.file_types import is_accepted, is_known_lossy, is_music_file, is_playlist
from shelver.utils import dump_yaml_file, format_relative, is_directory_empty, load_yaml_file


def test_yaml_round_trip_keeps_order(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "doc.yaml"
    dump_yaml_file(path, {"z": ["1"], "a": ["東京"]})

    assert list(load_yaml_file(path)) == ["z", "a"]
    assert "東京" in path.read_text(encoding="utf-8")


def test_empty_yaml_is_empty_mapping(tmp_path: Path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_yaml_file(path) == {}


def test_non_mapping_yaml_rejected(tmp_path: Path) -> None:
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError, match="mapping"):
        load_yaml_file(path)


def test_format_relative(tmp_path: Path) -> None:
    assert format_relative(tmp_path / "a" / "b", tmp_path) == "a/b"
    assert format_relative(Path("/elsewhere"), tmp_path) == "/elsewhere"
    assert format_relative(None, tmp_path) == ""


def test_is_directory_empty(tmp_path: Path) -> None:
    assert is_directory_empty(tmp_path)
    (tmp_path / "x").mkdir()
    assert not is_directory_empty(tmp_path)


@pytest.mark.parametrize(
    ("name", "accepted", "lossy", "music"),
    [
        ("01.FLAC", True, False, True),
        ("cover.Jpeg", True, False, False),
        ("01.mp3", False, True, True),
        ("01.opus", False, True, False),
        ("notes.txt", False, False, False),
    ],
)
def test_file_types(name: str, accepted: bool, lossy: bool, music: bool) -> None:
    assert is_accepted(name) is accepted
    assert is_known_lossy(name) is lossy
    assert is_music_file(name) is music


def test_is_playlist() -> None:
    assert is_playlist("2016-01.M3U")
    assert not is_playlist("2016-01.m3u8")
