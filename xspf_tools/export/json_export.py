"""
The "json" sink: structured export of every track.

The document is a single array with one object per track, in playlist
order:

    [
      {
        "position": 1,
        "path": "/music/03_2018-01-15_MorningTheme.ogg",
        "sequence_number": 3,
        "date": "2018-01-15",
        "title": "MorningTheme",
        "parse_status": "complete",
        "duration_ms": 184000,
        "track_type": "unknown",
        "raw_tokens": ["03", "2018-01-15", "MorningTheme"],
        "missing_fields": []
      }
    ]

Missing optional values are written as null. read_json() decodes a
document back into ExportRecords.
"""

import datetime
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from xspf_tools.core.exceptions import PlaylistReadError
from xspf_tools.core.logger import get_logger
from xspf_tools.playlist.models import ParseStatus, Playlist, Track
from xspf_tools.utils import atomic_write_text

logger = get_logger(__name__)


@dataclass(frozen=True)
class ExportRecord:
    """
    One object of the JSON export.

    The first five fields are the stable schema; the rest are additive
    diagnostics and default to None / () when reading older documents.
    """
    path: str
    sequence_number: int | None
    date: datetime.date | None
    title: str | None
    parse_status: ParseStatus
    position: int | None = None
    duration_ms: int | None = None
    track_type: str | None = None
    raw_tokens: tuple[str, ...] = ()
    missing_fields: tuple[str, ...] = ()

    @classmethod
    def from_track(cls, track: Track) -> "ExportRecord":
        meta = track.metadata
        return cls(
            path=track.path,
            sequence_number=meta.sequence_number,
            date=meta.date,
            title=meta.title,
            parse_status=meta.status,
            position=track.position,
            duration_ms=(
                track.inline_duration.milliseconds
                if track.inline_duration is not None else None
            ),
            track_type=meta.track_type.value,
            raw_tokens=meta.raw_tokens,
            missing_fields=meta.missing_fields,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "position": self.position,
            "path": self.path,
            "sequence_number": self.sequence_number,
            "date": self.date.isoformat() if self.date is not None else None,
            "title": self.title,
            "parse_status": self.parse_status.value,
            "duration_ms": self.duration_ms,
            "track_type": self.track_type,
            "raw_tokens": list(self.raw_tokens),
            "missing_fields": list(self.missing_fields),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ExportRecord":
        """
        Raises:
            KeyError: If a required key is missing.
            ValueError: If the date or parse_status value is invalid.
        """
        raw_date = data["date"]
        return cls(
            path=data["path"],
            sequence_number=data["sequence_number"],
            date=datetime.date.fromisoformat(raw_date) if raw_date is not None else None,
            title=data["title"],
            parse_status=ParseStatus(data["parse_status"]),
            position=data.get("position"),
            duration_ms=data.get("duration_ms"),
            track_type=data.get("track_type"),
            raw_tokens=tuple(data.get("raw_tokens") or ()),
            missing_fields=tuple(data.get("missing_fields") or ()),
        )


def render_json(playlist: Playlist, indent: int = 2) -> str:
    """
    Serialize the playlist to the JSON export format.

    Args:
        playlist: Playlist to export.
        indent: Indentation; 0 writes a single line.
    """
    records = [ExportRecord.from_track(track).to_dict() for track in playlist]
    return json.dumps(records, indent=indent or None, ensure_ascii=False) + "\n"


def write_json(playlist: Playlist, destination: Path, indent: int = 2) -> None:
    """
    Write the JSON export to a file (UTF-8).

    Raises:
        ExportError: If the destination cannot be written.
    """
    atomic_write_text(destination, render_json(playlist, indent))
    logger.info(f"Wrote {len(playlist)} records to {destination}")


def read_json(path: Path) -> list[ExportRecord]:
    """
    Read a JSON export back into records, in document order.

    Raises:
        PlaylistReadError: If the file cannot be read or is not a valid
                           export document.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise PlaylistReadError(
            f"Cannot read JSON export {path}: {e.strerror or e}",
            details={"file_path": str(path), "original_error": str(e)}
        ) from e
    except json.JSONDecodeError as e:
        raise PlaylistReadError(
            f"Invalid JSON in {path}: {e}",
            details={"file_path": str(path), "original_error": str(e)}
        ) from e

    if not isinstance(data, list):
        raise PlaylistReadError(
            f"JSON export {path} must contain an array",
            details={"file_path": str(path)}
        )

    try:
        return [ExportRecord.from_dict(item) for item in data]
    except (KeyError, TypeError, ValueError) as e:
        raise PlaylistReadError(
            f"Malformed record in JSON export {path}: {e}",
            details={"file_path": str(path), "original_error": str(e)}
        ) from e
