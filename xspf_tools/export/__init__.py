"""
Export module for xspf-tools.

Each sink is a read-only consumer of a loaded Playlist:

    dump     - render_summary(): one line per track, degraded tracks marked
    runtime  - render_runtime(): total duration and unknown-duration count
    list     - write_list(): one path per line into a file
    json     - write_json(): structured records into a file
    copy     - copy_playlist(): files copied and renamed into a directory

SINKS maps each mode name to a SinkSpec so the CLI can validate the
destination before loading anything and dispatch to exactly one sink.

Usage:
    from xspf_tools.export import SINKS

    sink = SINKS["json"]
    output = sink.run(playlist, Path("out.json"), config, False)
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from xspf_tools.core.config import Config
from xspf_tools.export.copy_export import (
    CopiedFile,
    CopyReport,
    NameAllocator,
    SkippedTrack,
    copy_playlist,
    destination_name,
)
from xspf_tools.export.json_export import ExportRecord, read_json, render_json, write_json
from xspf_tools.export.listing import render_list, write_list
from xspf_tools.export.summary import render_runtime, render_summary
from xspf_tools.playlist.models import Playlist


# Destination kinds
DESTINATION_FILE = "file"
DESTINATION_DIRECTORY = "directory"


@dataclass(frozen=True)
class SinkSpec:
    """
    Description of one export mode.

    Attributes:
        name: Mode name used on the command line.
        destination: None, DESTINATION_FILE or DESTINATION_DIRECTORY.
        help: One-line description.
        run: Callable(playlist, destination, config, show_progress) returning
             text for stdout ("" if the sink writes only to its destination).
    """
    name: str
    destination: str | None
    help: str
    run: Callable[[Playlist, Path | None, Config, bool], str]

    @property
    def needs_destination(self) -> bool:
        return self.destination is not None


def _run_dump(playlist: Playlist, destination: Path | None, config: Config, show_progress: bool) -> str:
    return render_summary(playlist)


def _run_runtime(playlist: Playlist, destination: Path | None, config: Config, show_progress: bool) -> str:
    return render_runtime(playlist)


def _run_list(playlist: Playlist, destination: Path | None, config: Config, show_progress: bool) -> str:
    write_list(playlist, destination)
    return ""


def _run_json(playlist: Playlist, destination: Path | None, config: Config, show_progress: bool) -> str:
    write_json(playlist, destination, indent=config.json.indent)
    return ""


def _run_copy(playlist: Playlist, destination: Path | None, config: Config, show_progress: bool) -> str:
    report = copy_playlist(
        playlist,
        destination,
        position_width=config.copy.position_width,
        preserve_timestamps=config.copy.preserve_timestamps,
        show_progress=show_progress,
    )
    return report.render()


SINKS: dict[str, SinkSpec] = {
    sink.name: sink
    for sink in (
        SinkSpec("dump", None, "Print a summary of every track", _run_dump),
        SinkSpec("runtime", None, "Print the total running time", _run_runtime),
        SinkSpec("list", DESTINATION_FILE, "Write track paths to <outfile>", _run_list),
        SinkSpec("json", DESTINATION_FILE, "Write track metadata as JSON to <outfile>", _run_json),
        SinkSpec("copy", DESTINATION_DIRECTORY, "Copy and rename tracks into <outdir>", _run_copy),
    )
}

__all__ = [
    "SINKS",
    "SinkSpec",
    "DESTINATION_FILE",
    "DESTINATION_DIRECTORY",
    # Sinks
    "render_summary",
    "render_runtime",
    "render_list",
    "write_list",
    "render_json",
    "write_json",
    "read_json",
    "ExportRecord",
    "copy_playlist",
    "destination_name",
    "NameAllocator",
    "CopyReport",
    "CopiedFile",
    "SkippedTrack",
]
