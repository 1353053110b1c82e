# tests/test_utils.py
"""Test utilities and helpers"""

import pytest

from xspf_tools.core.exceptions import ExportError
from xspf_tools.utils import (
    atomic_write_text,
    ensure_directory,
    file_uri_to_path,
    format_duration,
    sanitize_filename,
)


class TestHelpers:
    """Test helper functions"""

    def test_sanitize_filename(self):
        """Test filename sanitization"""
        assert sanitize_filename("Morning Theme") == "Morning Theme"
        assert "/" not in sanitize_filename("AC/DC")
        assert "\\" not in sanitize_filename("a\\b")
        assert sanitize_filename("Track One", restricted=True) == "Track_One"

    def test_format_duration(self):
        """Test duration formatting"""
        assert format_duration(90) == "1:30"
        assert format_duration(3661) == "1:01:01"
        assert format_duration(0) == "0:00"
        assert format_duration(-10) == "0:00"

    def test_ensure_directory(self, temp_dir):
        """Test nested directories are created and existing ones accepted"""
        path = temp_dir / "a" / "b"

        assert ensure_directory(path) == path
        assert path.is_dir()
        assert ensure_directory(path) == path


class TestFileUriToPath:
    """Test converting playlist locations to paths"""

    @pytest.mark.parametrize("location,expected", [
        ("file:///music/song.ogg", "/music/song.ogg"),
        ("file:///music/My%20Song.ogg", "/music/My Song.ogg"),
        ("file://localhost/music/song.ogg", "/music/song.ogg"),
        ("FILE:///music/song.ogg", "/music/song.ogg"),
        ("file:///C:/Music/song.mp3", "C:/Music/song.mp3"),
        ("file://server/share/song.mp3", "//server/share/song.mp3"),
        ("relative/song.mp3", "relative/song.mp3"),
        ("relative/My%20Song.mp3", "relative/My%20Song.mp3"),
        ("  /music/song.ogg  ", "/music/song.ogg"),
        ("http://example.com/song.mp3", "http://example.com/song.mp3"),
    ])
    def test_locations(self, location, expected):
        """Test file URIs are decoded and other locations kept"""
        assert file_uri_to_path(location) == expected


class TestAtomicWriteText:
    """Test all-or-nothing text writes"""

    def test_write(self, temp_dir):
        """Test content is written with LF newlines"""
        path = temp_dir / "out.txt"
        atomic_write_text(path, "a\nb\n")

        assert path.read_bytes() == b"a\nb\n"

    def test_no_temporary_files_left(self, temp_dir):
        """Test only the destination remains after a write"""
        atomic_write_text(temp_dir / "out.txt", "x")

        assert [p.name for p in temp_dir.iterdir()] == ["out.txt"]

    def test_missing_directory(self, temp_dir):
        """Test a missing parent directory raises ExportError"""
        path = temp_dir / "missing" / "out.txt"

        with pytest.raises(ExportError) as exc_info:
            atomic_write_text(path, "x")

        assert exc_info.value.details["file_path"] == str(path)

    def test_destination_is_directory(self, temp_dir):
        """Test replacing a directory fails cleanly"""
        (temp_dir / "out").mkdir()

        with pytest.raises(ExportError):
            atomic_write_text(temp_dir / "out", "x")

        assert [p.name for p in temp_dir.iterdir()] == ["out"]
