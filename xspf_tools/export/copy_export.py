"""
The "copy" sink: copy every track into a directory under a metadata name.

File Naming:
    {position}_{date}_{title}.{extension}

    position   1-based playlist position, zero-padded to position_width
               digits (widened when the playlist is longer)
    date       ISO date (YYYY-MM-DD) or "nodate"
    title      extracted title, else the original file stem (sanitized)
    extension  original extension; omitted with its dot if there is none

    The title part is cut at a character boundary so the whole name,
    including room for a collision suffix, stays within MAX_NAME_BYTES
    bytes of UTF-8.

    Example: 003_2018-01-15_MorningTheme.ogg

Numbering follows playlist order, never the filename's own sequence
number. A skipped track leaves a gap in the numbering rather than
shifting the tracks after it.

Collisions:
    A name already taken by an earlier track in this run, or by a file
    already in the directory, gets "_2", "_3", ... before the extension
    (compared case-insensitively). Existing files are never overwritten;
    target files are created exclusively.

Errors:
    - Missing or unreadable source file: track is skipped, logged and
      reported; the copy continues.
    - Destination directory cannot be created, or a target file cannot be
      written: ExportError, the copy stops.
"""

import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from tqdm import tqdm

from xspf_tools.core.exceptions import ExportError
from xspf_tools.core.logger import get_logger, log_copy_skip
from xspf_tools.playlist.models import Playlist, Track
from xspf_tools.utils import ensure_directory, sanitize_filename

logger = get_logger(__name__)


NODATE_LABEL = "nodate"
UNKNOWN_LABEL = "Unknown"

# Common file system limit on one path component
MAX_NAME_BYTES = 255
# Room kept for a "_N" collision suffix
SUFFIX_RESERVE = 8


@dataclass(frozen=True)
class CopiedFile:
    """A track that was copied."""
    position: int
    source: Path
    destination: Path


@dataclass(frozen=True)
class SkippedTrack:
    """A track that was not copied, and why."""
    position: int
    path: str
    reason: str


@dataclass(frozen=True)
class CopyReport:
    """
    Outcome of copy_playlist().

    Attributes:
        copied: Copied tracks, in playlist order.
        skipped: Skipped tracks, in playlist order.
    """
    copied: tuple[CopiedFile, ...] = ()
    skipped: tuple[SkippedTrack, ...] = ()

    @property
    def total(self) -> int:
        return len(self.copied) + len(self.skipped)

    def render(self) -> str:
        """Human-readable summary, one line per skipped track."""
        lines = [f"Copied {len(self.copied)} of {self.total} tracks"]
        for skipped in self.skipped:
            lines.append(f"  skipped {skipped.position}: {skipped.path} ({skipped.reason})")
        return "\n".join(lines) + "\n"


def effective_position_width(track_count: int, minimum: int = 3) -> int:
    """Padding wide enough for the last position, and at least minimum."""
    return max(minimum, len(str(track_count)))


def _truncate_utf8(text: str, max_bytes: int) -> str:
    return text.encode("utf-8")[:max_bytes].decode("utf-8", "ignore")


def destination_base(track: Track, width: int) -> str:
    """
    Compute the destination name of a track without its extension.

    Long titles are shortened so the final name fits MAX_NAME_BYTES.

    Example:
        destination_base(track, 3)  # "003_2018-01-15_MorningTheme"
    """
    meta = track.metadata
    date = meta.date.isoformat() if meta.date is not None else NODATE_LABEL
    label = sanitize_filename(meta.title or meta.stem) or UNKNOWN_LABEL
    prefix = f"{track.position:0{width}d}_{date}_"

    extension_bytes = len(meta.extension.encode("utf-8")) + 1 if meta.extension else 0
    budget = MAX_NAME_BYTES - SUFFIX_RESERVE - extension_bytes - len(prefix)
    label = _truncate_utf8(label, max(budget, 1)) or UNKNOWN_LABEL
    return f"{prefix}{label}"


def destination_name(track: Track, width: int) -> str:
    """Full destination filename of a track, before collision handling."""
    base = destination_base(track, width)
    extension = track.metadata.extension
    return f"{base}.{extension}" if extension else base


class NameAllocator:
    """
    Hands out unique filenames within one destination directory.

    A name is unavailable if it was handed out earlier in this run or a
    file (or dangling link) of that name is already in the directory.
    """

    def __init__(self, directory: Path) -> None:
        self.directory = directory
        self._claimed: set[str] = set()

    def _available(self, name: str) -> bool:
        if name.casefold() in self._claimed:
            return False
        return not os.path.lexists(self.directory / name)

    def claim(self, base: str, extension: str = "") -> str:
        """
        Reserve a unique filename.

        Returns:
            base.extension if free, else base_2.extension, base_3.extension, ...
        """
        suffix = f".{extension}" if extension else ""
        candidate = f"{base}{suffix}"
        counter = 1
        while not self._available(candidate):
            counter += 1
            candidate = f"{base}_{counter}{suffix}"
        self._claimed.add(candidate.casefold())
        return candidate


def _write_exclusive(source: BinaryIO, target: Path) -> None:
    """
    Copy an open source file into a new target file.

    Raises:
        ExportError: If the target cannot be created or written. A
                     partially written target is removed.
    """
    try:
        handle = open(target, "xb")
    except OSError as e:
        raise ExportError(
            f"Cannot create {target}: {e.strerror or e}",
            details={"file_path": str(target), "original_error": str(e)}
        ) from e

    try:
        with handle:
            shutil.copyfileobj(source, handle)
    except OSError as e:
        target.unlink(missing_ok=True)
        raise ExportError(
            f"Failed writing {target}: {e.strerror or e}",
            details={"file_path": str(target), "original_error": str(e)}
        ) from e


def copy_playlist(
    playlist: Playlist,
    destination: Path,
    base_dir: Path | None = None,
    position_width: int = 3,
    preserve_timestamps: bool = True,
    show_progress: bool = False
) -> CopyReport:
    """
    Copy every track of a playlist into a directory.

    Args:
        playlist: Playlist to copy.
        destination: Target directory; created if it doesn't exist.
        base_dir: Directory for resolving relative track paths. Defaults
                  to the playlist file's directory.
        position_width: Minimum zero-padding of the position prefix.
        preserve_timestamps: Copy modification times and permission bits.
        show_progress: Show a tqdm progress bar.

    Returns:
        CopyReport listing copied and skipped tracks.

    Raises:
        ExportError: If the destination directory cannot be created or a
                     target file cannot be written.
    """
    if base_dir is None:
        base_dir = playlist.base_dir

    try:
        ensure_directory(destination)
    except OSError as e:
        raise ExportError(
            f"Cannot create destination directory {destination}: {e.strerror or e}",
            details={"file_path": str(destination), "original_error": str(e)}
        ) from e

    width = effective_position_width(len(playlist), position_width)
    allocator = NameAllocator(destination)
    copied: list[CopiedFile] = []
    skipped: list[SkippedTrack] = []

    with tqdm(playlist.tracks, desc="Copying", unit="file", disable=not show_progress) as bar:
        for track in bar:
            source = track.resolve_source(base_dir)

            if not source.is_file():
                reason = "source file not found" if not source.exists() else "source is not a regular file"
                log_copy_skip(logger, track.position, track.path, reason)
                skipped.append(SkippedTrack(track.position, track.path, reason))
                continue

            try:
                source_handle = open(source, "rb")
            except OSError as e:
                reason = f"cannot read source: {e.strerror or e}"
                log_copy_skip(logger, track.position, track.path, reason)
                skipped.append(SkippedTrack(track.position, track.path, reason))
                continue

            name = allocator.claim(destination_base(track, width), track.metadata.extension)
            target = destination / name
            with source_handle:
                _write_exclusive(source_handle, target)

            if preserve_timestamps:
                try:
                    shutil.copystat(source, target)
                except OSError as e:
                    logger.warning(f"Could not copy timestamps to {target}: {e}")

            logger.debug(f"Copied {source} -> {target}")
            copied.append(CopiedFile(track.position, source, target))

    logger.info(f"Copied {len(copied)} of {len(playlist)} tracks to {destination}")
    return CopyReport(copied=tuple(copied), skipped=tuple(skipped))
