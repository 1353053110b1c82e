"""
Playlist module for xspf-tools.

Reads XSPF documents and loads them into ordered, immutable Playlist
objects with metadata extracted from every track's filename.

Modules:
    models     - Playlist, Track, ExtractedMetadata, TrackDuration
    extractor  - Filename metadata extraction
    reader     - XSPF document reader
    loader     - Builds a Playlist from reader output
    duration   - Total running time

Usage:
    from xspf_tools.playlist import load_playlist_file, aggregate_durations

    playlist = load_playlist_file(Path("practice.xspf"))
    summary = aggregate_durations(playlist)
"""

from xspf_tools.playlist.duration import RuntimeSummary, aggregate_durations
from xspf_tools.playlist.extractor import DEFAULT_RULES, ExtractorRules, extract_metadata
from xspf_tools.playlist.loader import load_playlist, load_playlist_file, parse_duration_tag
from xspf_tools.playlist.models import (
    ExtractedMetadata,
    ParseStatus,
    Playlist,
    Track,
    TrackDuration,
    TrackType,
)
from xspf_tools.playlist.reader import RawTrackEntry, XspfDocument, parse_xspf, read_xspf

__all__ = [
    # Models
    "Playlist",
    "Track",
    "ExtractedMetadata",
    "ParseStatus",
    "TrackType",
    "TrackDuration",
    # Extraction
    "ExtractorRules",
    "DEFAULT_RULES",
    "extract_metadata",
    # Reading and loading
    "RawTrackEntry",
    "XspfDocument",
    "parse_xspf",
    "read_xspf",
    "load_playlist",
    "load_playlist_file",
    "parse_duration_tag",
    # Duration
    "RuntimeSummary",
    "aggregate_durations",
]
