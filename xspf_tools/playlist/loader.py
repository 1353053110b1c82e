"""
Playlist loading.

Turns the reader's raw entries into a Playlist: positions are assigned in
document order, inline tags are interpreted, and the filename extractor
runs once per track. A bad entry degrades into an UNPARSED or PARTIAL
track; only an empty playlist stops the load.

Usage:
    from xspf_tools.playlist.loader import load_playlist_file

    playlist = load_playlist_file(Path("practice.xspf"))
    print(f"{len(playlist)} tracks")
"""

import re
from pathlib import Path
from typing import Iterable

from xspf_tools.core.exceptions import EmptyPlaylistError
from xspf_tools.core.logger import get_logger
from xspf_tools.playlist.extractor import DEFAULT_RULES, ExtractorRules, extract_metadata
from xspf_tools.playlist.models import ParseStatus, Playlist, Track, TrackDuration
from xspf_tools.playlist.reader import RawTrackEntry, read_xspf

logger = get_logger(__name__)


# Whole milliseconds with optional fraction; longer values are not real durations
_DURATION_PATTERN = re.compile(r"([0-9]{1,15})(?:\.[0-9]*)?")


def parse_duration_tag(value: str | None) -> TrackDuration | None:
    """
    Interpret an XSPF <duration> value (milliseconds).

    Args:
        value: Tag text, or None if the tag is absent.

    Returns:
        TrackDuration, or None if absent, empty, negative or not a plain
        decimal number. Fractional milliseconds are truncated.

    Examples:
        parse_duration_tag("184000")    # TrackDuration(184000)
        parse_duration_tag(" 1500.9 ")  # TrackDuration(1500)
        parse_duration_tag("3:04")      # None
        parse_duration_tag("1e6")       # None
    """
    if value is None:
        return None
    match = _DURATION_PATTERN.fullmatch(value.strip())
    if not match:
        return None
    return TrackDuration(int(match.group(1)))


def load_playlist(
    entries: Iterable[RawTrackEntry],
    title: str | None = None,
    source: Path | None = None,
    rules: ExtractorRules = DEFAULT_RULES
) -> Playlist:
    """
    Build a Playlist from raw track entries.

    Args:
        entries: Raw entries in playlist order.
        title: Playlist title, if any.
        source: Path of the playlist document, if loaded from a file.
        rules: Filename grammar for the extractor.

    Returns:
        Playlist with one Track per entry, in the same order.

    Raises:
        EmptyPlaylistError: If there are no entries.
    """
    tracks = []
    for position, entry in enumerate(entries, 1):
        inline_title = entry.tags.get("title")
        if inline_title is not None:
            inline_title = inline_title.strip()

        raw_duration = entry.tags.get("duration")
        inline_duration = parse_duration_tag(raw_duration)
        if raw_duration is not None and inline_duration is None:
            logger.debug(f"Track {position}: ignoring malformed duration {raw_duration!r}")

        metadata = extract_metadata(entry.location, inline_title, rules)
        if metadata.status is not ParseStatus.COMPLETE:
            logger.debug(
                f"Track {position}: {metadata.status.value} "
                f"(missing: {', '.join(metadata.missing_fields)}) {entry.location}"
            )
        for note in metadata.notes:
            logger.debug(f"Track {position}: {note}")

        tracks.append(Track(
            path=entry.location,
            position=position,
            metadata=metadata,
            inline_title=inline_title,
            inline_duration=inline_duration,
            tags=entry.tags,
        ))

    if not tracks:
        raise EmptyPlaylistError(
            "Playlist contains no tracks",
            details={"file_path": str(source) if source else None}
        )

    playlist = Playlist(tracks=tuple(tracks), title=title, source=source)
    counts = playlist.count_by_status()
    logger.info(
        f"Loaded {len(playlist)} tracks "
        f"({counts[ParseStatus.COMPLETE]} complete, "
        f"{counts[ParseStatus.PARTIAL]} partial, "
        f"{counts[ParseStatus.UNPARSED]} unparsed)"
    )
    return playlist


def load_playlist_file(path: Path, rules: ExtractorRules = DEFAULT_RULES) -> Playlist:
    """
    Read an XSPF file and load it into a Playlist.

    Raises:
        PlaylistReadError: If the file cannot be read or parsed.
        EmptyPlaylistError: If the document lists no usable tracks.
    """
    document = read_xspf(path)
    return load_playlist(document.entries, title=document.title, source=path, rules=rules)
