"""
Data models for playlist entities.

This module defines immutable dataclasses representing a loaded XSPF
playlist: the Playlist itself, its Tracks, and the metadata extracted from
each track's filename.

Design Decisions:
    - All dataclasses are frozen (immutable); sequences are tuples
    - Degraded parsing is a status value on the record, never an exception
    - Playlist order is validated on construction, and there is no sorting
      API: position N is always the Nth entry of the document
    - Durations are exact integer milliseconds

Usage:
    from xspf_tools.playlist.models import Playlist, Track, ParseStatus

    for track in playlist:
        if track.metadata.status is ParseStatus.UNPARSED:
            print(f"<unparsed: {track.path}>")
"""

import datetime
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path, PureWindowsPath
from types import MappingProxyType
from typing import Iterator, Mapping

from xspf_tools.utils import format_duration


# Names used in ExtractedMetadata.missing_fields, in reporting order
METADATA_FIELDS = ("sequence_number", "date", "title")


class ParseStatus(Enum):
    """
    Completeness of the metadata extracted from a filename.

    COMPLETE: sequence number, date and title are all present.
    PARTIAL: at least one is present, at least one is missing.
    UNPARSED: none of the three could be determined.
    """
    COMPLETE = "complete"
    PARTIAL = "partial"
    UNPARSED = "unparsed"

    @classmethod
    def from_missing(cls, missing_fields: tuple[str, ...]) -> "ParseStatus":
        if not missing_fields:
            return cls.COMPLETE
        if len(missing_fields) == len(METADATA_FIELDS):
            return cls.UNPARSED
        return cls.PARTIAL


class TrackType(Enum):
    """Recording conventions recognised from the filename layout."""
    UNKNOWN = "unknown"
    VIOLIN_LAYERING = "violin_layering"
    MUSE_SCORE = "muse_score"

    @property
    def shortname(self) -> str:
        """Abbreviated name for compact display."""
        return _TRACK_TYPE_SHORTNAMES[self]


_TRACK_TYPE_SHORTNAMES = {
    TrackType.UNKNOWN: "?",
    TrackType.VIOLIN_LAYERING: "VL",
    TrackType.MUSE_SCORE: "MS",
}


@dataclass(frozen=True, order=True)
class TrackDuration:
    """
    Exact track duration in milliseconds.

    Supports addition with another TrackDuration or a plain int of
    milliseconds, so totals accumulate without floating point error.
    Rounding only happens when the value is formatted.

    Example:
        total = TrackDuration(0)
        total += TrackDuration(90500)
        str(total)  # "1:30"
    """
    milliseconds: int

    def __add__(self, other: "TrackDuration | int") -> "TrackDuration":
        if isinstance(other, TrackDuration):
            return TrackDuration(self.milliseconds + other.milliseconds)
        if isinstance(other, int):
            return TrackDuration(self.milliseconds + other)
        return NotImplemented

    __radd__ = __add__

    def to_timecode(self) -> str:
        """Format as "M:SS" or "H:MM:SS"; leftover milliseconds are dropped."""
        return format_duration(self.milliseconds // 1000)

    def __str__(self) -> str:
        return self.to_timecode()


@dataclass(frozen=True)
class ExtractedMetadata:
    """
    Structured fields derived from a track's filename.

    Attributes:
        sequence_number: Ordinal parsed from the filename. Descriptive
                         only; it never affects playlist order.
        date: Calendar date parsed from the filename (or its directory).
        title: Title from the remaining filename tokens, or the playlist's
               inline title when the filename has none.
        raw_tokens: The substrings the filename stem was split into.
        status: COMPLETE, PARTIAL or UNPARSED.
        missing_fields: Names of absent fields, subset of METADATA_FIELDS.
        notes: Diagnostics such as "ambiguous sequence number".
        track_type: Recording convention recognised from the layout.
        stem: Base name without directory and extension.
        extension: Extension without the dot, "" if the file has none.
    """
    sequence_number: int | None
    date: datetime.date | None
    title: str | None
    raw_tokens: tuple[str, ...]
    status: ParseStatus
    missing_fields: tuple[str, ...] = ()
    notes: tuple[str, ...] = ()
    track_type: TrackType = TrackType.UNKNOWN
    stem: str = ""
    extension: str = ""

    def __post_init__(self) -> None:
        if self.status is not ParseStatus.from_missing(self.missing_fields):
            raise ValueError(
                f"status {self.status.value!r} contradicts missing fields {self.missing_fields}"
            )


@dataclass(frozen=True)
class Track:
    """
    Immutable representation of one playlist entry.

    Attributes:
        path: File reference as given in the playlist (file:// URIs are
              decoded to paths). Never empty; may be relative and need not
              exist.
        position: 1-based position in the playlist.
        metadata: Fields extracted from the path's filename.
        inline_title: <title> from the playlist, None if absent.
        inline_duration: <duration> from the playlist, None if absent or
                         malformed.
        tags: Every simple element of the <track>, read-only.
    """
    path: str
    position: int
    metadata: ExtractedMetadata
    inline_title: str | None = None
    inline_duration: TrackDuration | None = None
    tags: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.path:
            raise ValueError("Track path must not be empty")
        if self.position < 1:
            raise ValueError(f"Track position must be 1-based, got {self.position}")
        object.__setattr__(self, "tags", MappingProxyType(dict(self.tags)))

    def resolve_source(self, base_dir: Path | None = None) -> Path:
        """
        Get the file this track refers to.

        Args:
            base_dir: Directory that relative paths are relative to,
                      normally the playlist file's directory.

        Returns:
            The path itself if absolute (or no base_dir), else base_dir/path.
        """
        source = Path(self.path)
        if base_dir is None or source.is_absolute() or PureWindowsPath(self.path).is_absolute():
            return source
        return base_dir / source


@dataclass(frozen=True)
class Playlist:
    """
    Ordered collection of tracks loaded from one playlist document.

    Insertion order is playback order and export order. Construction
    checks that track positions run 1..N in sequence, so a reordered tuple
    can never masquerade as a playlist.

    Attributes:
        tracks: Tracks in playlist order.
        title: The playlist's <title>, if any.
        source: Path of the playlist document, if loaded from a file.
    """
    tracks: tuple[Track, ...]
    title: str | None = None
    source: Path | None = None

    def __post_init__(self) -> None:
        for expected, track in enumerate(self.tracks, 1):
            if track.position != expected:
                raise ValueError(
                    f"Playlist out of order: track at index {expected - 1} "
                    f"has position {track.position}"
                )

    def __len__(self) -> int:
        return len(self.tracks)

    def __iter__(self) -> Iterator[Track]:
        return iter(self.tracks)

    def __getitem__(self, index: int) -> Track:
        return self.tracks[index]

    @property
    def base_dir(self) -> Path | None:
        """Directory that relative track paths are resolved against."""
        if self.source is None:
            return None
        return self.source.parent

    def count_by_status(self) -> dict[ParseStatus, int]:
        """Number of tracks per parse status (every status present as a key)."""
        counts = {status: 0 for status in ParseStatus}
        for track in self.tracks:
            counts[track.metadata.status] += 1
        return counts
