"""
Utility functions for xspf-tools.

This module provides common utility functions used across the application:
    - Filename sanitization (using yt-dlp's sanitize_filename)
    - Atomic text file writes for the file-based exports
    - Path and URI helpers
    - Duration formatting

Usage:
    from xspf_tools.utils import (
        sanitize_filename,
        atomic_write_text,
        ensure_directory
    )
"""

import os
import re
import tempfile
from pathlib import Path
from urllib.parse import unquote

from yt_dlp.utils import sanitize_filename as yt_dlp_sanitize

from xspf_tools.core.exceptions import ExportError


FILE_URI_PREFIX = "file://"

# file:///C:/Music/... keeps a leading slash before the drive letter
_WINDOWS_DRIVE_PATTERN = re.compile(r"^/[A-Za-z]:[/\\]")


def sanitize_filename(name: str, restricted: bool = False) -> str:
    """
    Sanitize a string for use as a filename.

    Uses yt-dlp's sanitize_filename function, which handles path
    separators, characters invalid on Windows and control characters.

    Args:
        name: The string to sanitize (e.g., a track title).
        restricted: If True, use more aggressive sanitization that
                   removes all special characters and spaces. Default False.

    Returns:
        Sanitized string safe for use in filenames. May be empty.

    Examples:
        sanitize_filename("Morning Theme")  # "Morning Theme"
        sanitize_filename("AC/DC")          # "AC⧸DC"
    """
    return yt_dlp_sanitize(name, restricted=restricted)


def ensure_directory(path: Path) -> Path:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Path to the directory.

    Returns:
        The same path (for chaining).

    Raises:
        OSError: If directory cannot be created (permissions, a file in
                 the way, etc.)
    """
    path.mkdir(parents=True, exist_ok=True)
    return path


def atomic_write_text(path: Path, text: str) -> None:
    """
    Write a UTF-8 text file all-or-nothing.

    The content is written to a temporary file next to the destination and
    then moved over it with os.replace(), so a failure part-way through
    never leaves a truncated output file behind.

    Args:
        path: Destination file. Its parent directory must exist.
        text: Complete file content. Newlines are written as "\\n" on every
              platform.

    Raises:
        ExportError: If the temporary file cannot be created or written,
                     or the destination cannot be replaced.
    """
    directory = path.parent if str(path.parent) else Path(".")
    tmp_name = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            newline="\n",
            dir=directory,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(text)
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise ExportError(
            f"Cannot write {path}: {e.strerror or e}",
            details={"file_path": str(path), "original_error": str(e)}
        ) from e


def file_uri_to_path(location: str) -> str:
    """
    Convert an XSPF location to a file path string.

    Handles:
        - file:///abs/path           -> /abs/path
        - file://localhost/abs/path  -> /abs/path
        - file://server/share/a.mp3  -> //server/share/a.mp3
        - file:///C:/Music/a.mp3     -> C:/Music/a.mp3
        - percent escapes in file URIs (%20 -> space)
        - anything else is returned unchanged

    Examples:
        file_uri_to_path("file:///music/My%20Song.ogg")  # "/music/My Song.ogg"
        file_uri_to_path("relative/song.mp3")            # "relative/song.mp3"
    """
    location = location.strip()
    if not location.lower().startswith(FILE_URI_PREFIX):
        return location

    rest = location[len(FILE_URI_PREFIX):]
    if rest.lower().startswith("localhost/"):
        rest = rest[len("localhost"):]
    elif rest and not rest.startswith("/"):
        # file://server/share/a.mp3 names a network path
        rest = "//" + rest
    rest = unquote(rest)

    if _WINDOWS_DRIVE_PATTERN.match(rest):
        rest = rest[1:]
    return rest


def format_duration(seconds: int) -> str:
    """
    Format duration in seconds to human-readable string.

    Args:
        seconds: Duration in seconds. Negative values are shown as 0:00.

    Returns:
        Formatted string like "3:45" or "1:02:30".

    Examples:
        format_duration(225)   # "3:45"
        format_duration(3750)  # "1:02:30"
        format_duration(45)    # "0:45"
    """
    seconds = max(0, seconds)
    if seconds < 3600:
        minutes = seconds // 60
        secs = seconds % 60
        return f"{minutes}:{secs:02d}"
    else:
        hours = seconds // 3600
        minutes = (seconds % 3600) // 60
        secs = seconds % 60
        return f"{hours}:{minutes:02d}:{secs:02d}"
