from __future__ import annotations

from pathlib import Path

from shelver.cleanup import delete_empty_folders


class TestDeleteEmptyFolders:
    """Test removal of directories emptied by moves."""

    def test_nested_empty_directories_removed(self, tmp_path: Path) -> None:
        (tmp_path / "genre1" / "artist" / "gone").mkdir(parents=True)
        (tmp_path / "INCOMING").mkdir()

        removed = delete_empty_folders(tmp_path)

        assert removed == 4
        assert list(tmp_path.iterdir()) == []

    def test_root_is_kept(self, tmp_path: Path) -> None:
        root = tmp_path / "music"
        root.mkdir()

        assert delete_empty_folders(root) == 0
        assert root.is_dir()

    def test_directories_with_files_survive(self, tmp_path: Path) -> None:
        album = tmp_path / "genre1" / "PPP" / "PPP (2000) kept"
        album.mkdir(parents=True)
        (album / "01.flac").write_bytes(b"")
        (tmp_path / "genre1" / "empty").mkdir()

        removed = delete_empty_folders(tmp_path)

        assert removed == 1
        assert (album / "01.flac").is_file()
        assert not (tmp_path / "genre1" / "empty").exists()

    def test_second_run_removes_nothing(self, tmp_path: Path) -> None:
        (tmp_path / "a" / "b" / "c").mkdir(parents=True)
        delete_empty_folders(tmp_path)

        assert delete_empty_folders(tmp_path) == 0

    def test_dry_run_deletes_nothing(self, tmp_path: Path) -> None:
        (tmp_path / "a" / "b").mkdir(parents=True)
        (tmp_path / "c").mkdir()

        removed = delete_empty_folders(tmp_path, dry_run=True)

        assert removed == 2
        assert (tmp_path / "a" / "b").is_dir()
        assert (tmp_path / "c").is_dir()
