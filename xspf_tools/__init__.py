"""
xspf-tools: Extract track info from XSPF playlists.

This package reads XSPF playlists, derives structured metadata (sequence
number, recording date, title) from each track's filename, and exports
the result in one of several forms.

Architecture:
    The work is split into loading and exporting:

    LOAD (playlist/): Build an ordered, immutable Playlist
        - Read the XSPF document (title, track locations, inline tags)
        - Extract sequence number, date and title from every filename
        - Mark tracks whose filename could only be partly parsed, or
          not at all, instead of dropping them

    EXPORT (export/): Exactly one sink per run
        - dump: summary of every track
        - runtime: total duration, with the count of unknown durations
        - list: one path per line
        - json: one record per track
        - copy: files copied into a directory as
          {position}_{date|nodate}_{title}.{ext}

Modules:
    core/       - Configuration, logging, exceptions
    playlist/   - Models, filename extractor, XSPF reader, loader, durations
    export/     - The five export sinks
    utils/      - Filename sanitization, atomic writes, formatting helpers
    cli.py      - Command-line interface

Usage:
    Command Line:
        xspf-tools dump practice.xspf
        xspf-tools json practice.xspf practice.json
        xspf-tools copy practice.xspf ~/Desktop/practice

    Python API:
        from xspf_tools.playlist import load_playlist_file
        from xspf_tools.export import render_summary, write_json

        playlist = load_playlist_file(Path("practice.xspf"))
        print(render_summary(playlist))
        write_json(playlist, Path("practice.json"))

Dependencies:
    - click / rich-click: CLI framework and colors
    - pyyaml: Configuration file parsing
    - tqdm: Progress bar for the copy export
    - yt-dlp: Filename sanitization
"""

__version__ = "0.3.0"
__author__ = "xspf-tools"
__license__ = "MIT"

# Convenience imports for common usage
from xspf_tools.core import (
    Config,
    ConfigError,
    EmptyPlaylistError,
    ExportError,
    PlaylistReadError,
    XspfToolsError,
    get_logger,
    load_config,
    setup_logging,
)
from xspf_tools.playlist import (
    ParseStatus,
    Playlist,
    Track,
    aggregate_durations,
    extract_metadata,
    load_playlist,
    load_playlist_file,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "Config",
    "load_config",
    "setup_logging",
    "get_logger",
    # Exceptions
    "XspfToolsError",
    "ConfigError",
    "PlaylistReadError",
    "EmptyPlaylistError",
    "ExportError",
    # Playlist
    "Playlist",
    "Track",
    "ParseStatus",
    "extract_metadata",
    "load_playlist",
    "load_playlist_file",
    "aggregate_durations",
]
