"""
Tests for listing display helpers.
"""

import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from modules.file_service.formatting import (
    FOLDER_ICON,
    DEFAULT_ICON,
    format_date,
    format_file_size,
    get_file_extension,
    get_file_icon,
)


@pytest.mark.parametrize("size, expected", [
    (0, "0 B"),
    (1, "1 B"),
    (1023, "1023 B"),
    (1024, "1 KB"),
    (1536, "1.5 KB"),
    (1024 ** 2, "1 MB"),
    (5 * 1024 ** 3, "5 GB"),
    (3 * 1024 ** 4, "3 TB"),
])
def test_format_file_size(size, expected):
    assert format_file_size(size) == expected


def test_format_file_size_caps_at_terabytes():
    assert format_file_size(2048 * 1024 ** 4) == "2048 TB"


def test_format_date():
    assert format_date("2024-03-05T14:07:09.123456") == "2024-03-05 14:07"


def test_format_date_passthrough():
    assert format_date("SystemTime { tv_sec: 0 }") == "SystemTime { tv_sec: 0 }"


class TestFileIcons:
    """Test extension and icon lookup."""

    def test_extension(self):
        assert get_file_extension("Report.PDF") == "pdf"
        assert get_file_extension("archive.tar.gz") == "gz"
        assert get_file_extension("Makefile") == ""

    def test_directory_icon(self):
        assert get_file_icon("photos.png", is_dir=True) == FOLDER_ICON

    def test_known_and_unknown_extensions(self):
        assert get_file_icon("song.mp3", is_dir=False) == "🎵"
        assert get_file_icon("data.unknownext", is_dir=False) == DEFAULT_ICON


def test_public_helpers_documented():
    for helper in (format_file_size, format_date, get_file_extension, get_file_icon):
        assert helper.__doc__
