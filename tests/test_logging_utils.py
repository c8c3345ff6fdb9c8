from __future__ import annotations

import logging
from pathlib import Path

import pytest
from rich.logging import RichHandler

from shelver.logging_utils import LogBlockBuilder, configure_logging, render_fields_block, render_section_block


def test_render_fields_block_aligns_labels() -> None:
    block = render_fields_block("Moved Album", {"Album": "PPP/x (2000) y", "To": "genre1/PPP"}, pad_top=False)

    assert block.splitlines() == [
        "Moved Album",
        "-----------",
        "    Album   : PPP/x (2000) y",
        "    To      : genre1/PPP",
    ]


def test_pad_top_adds_leading_blank_line() -> None:
    assert render_fields_block("T", {"Key": 1}).startswith("\nT\n-")


def test_sections_list_items_and_empty_label() -> None:
    block = render_section_block("Errors", [("Details", ["one", "two"]), ("Other", [])], pad_top=False)

    assert "Details:\n    - one\n    - two" in block
    assert block.endswith("Other:\n    (none)")


def test_long_values_wrap() -> None:
    builder = LogBlockBuilder("Wrap", pad_top=False)
    builder.add_fields({"Reason": "word " * 60})

    lines = builder.render().splitlines()
    assert len(lines) > 3
    assert all(len(line) <= 100 for line in lines)


def test_list_values_are_joined() -> None:
    assert "a, b" in render_fields_block("T", {"Items": ["a", "b"]})


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    level = root.level
    yield root
    for handler in list(root.handlers):
        if isinstance(handler, (RichHandler, logging.FileHandler)):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.mark.usefixtures("restore_root_logger")
class TestConfigureLogging:
    """Test handler installation on the root logger."""

    def test_console_only(self) -> None:
        configure_logging()
        root = logging.getLogger()

        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], RichHandler)
        assert root.level == logging.INFO

    def test_log_file_and_verbose(self, tmp_path: Path) -> None:
        log_file = tmp_path / "logs" / "shelver.log"
        configure_logging(verbose=True, log_file=log_file)
        root = logging.getLogger()

        logging.getLogger("shelver.test").debug("hello file")
        for handler in root.handlers:
            handler.flush()

        assert root.level == logging.DEBUG
        assert "hello file" in log_file.read_text(encoding="utf-8")
