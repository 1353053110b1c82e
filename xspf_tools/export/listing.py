"""The "list" sink: one track path per line."""

from pathlib import Path

from xspf_tools.core.logger import get_logger
from xspf_tools.playlist.models import Playlist
from xspf_tools.utils import atomic_write_text

logger = get_logger(__name__)


def render_list(playlist: Playlist) -> str:
    """Every track path in playlist order, newline-terminated."""
    return "".join(f"{track.path}\n" for track in playlist)


def write_list(playlist: Playlist, destination: Path) -> None:
    """
    Write the track paths to a file (UTF-8, one per line).

    Unparsed tracks are included: their raw path is still a valid entry.

    Raises:
        ExportError: If the destination cannot be written.
    """
    atomic_write_text(destination, render_list(playlist))
    logger.info(f"Wrote {len(playlist)} paths to {destination}")
