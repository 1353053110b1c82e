"""
XSPF document reader.

Thin wrapper around the standard library's ElementTree that pulls out the
parts of an XSPF playlist the rest of the application needs: the playlist
title and, for each <track>, its location plus every simple tag.

    <playlist version="1" xmlns="http://xspf.org/ns/0/">
      <title>Practice</title>
      <trackList>
        <track>
          <location>file:///music/2018-01-15/03_MorningTheme.ogg</location>
          <title>Morning Theme</title>
          <duration>184000</duration>
        </track>
      </trackList>
    </playlist>

Documents with or without the XSPF namespace are accepted.
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path

from xspf_tools.core.exceptions import PlaylistReadError
from xspf_tools.core.logger import get_logger
from xspf_tools.utils import file_uri_to_path

logger = get_logger(__name__)


XSPF_NAMESPACE = "http://xspf.org/ns/0/"


@dataclass(frozen=True)
class RawTrackEntry:
    """
    One <track> element as read from the document.

    Attributes:
        location: The file path (file:// URIs already decoded).
        tags: Text of the track's other simple child elements, keyed by
              local tag name (e.g. "title", "duration", "creator").
              A tag that is not in the document is not in the mapping.
    """
    location: str
    tags: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class XspfDocument:
    """Parsed playlist document: optional title plus entries in document order."""
    title: str | None
    entries: tuple[RawTrackEntry, ...]


def _local_name(tag: str) -> str:
    """Strip an ElementTree "{namespace}" prefix from a tag."""
    return tag.rpartition("}")[2]


def _child(element: ET.Element, name: str) -> ET.Element | None:
    for child in element:
        if _local_name(child.tag) == name:
            return child
    return None


def parse_xspf(content: str | bytes, source: str = "<string>") -> XspfDocument:
    """
    Parse XSPF content already held in memory.

    Args:
        content: The XML document.
        source: Name used in error messages and logs.

    Returns:
        XspfDocument with the entries in document order.

    Raises:
        PlaylistReadError: If the content is not well-formed XML or the root
                           element is not <playlist>.
    """
    try:
        root = ET.fromstring(content)
    except ET.ParseError as e:
        raise PlaylistReadError(
            f"Invalid XML in playlist {source}: {e}",
            details={"file_path": source, "original_error": str(e)}
        ) from e

    if _local_name(root.tag) != "playlist":
        raise PlaylistReadError(
            f"Not an XSPF playlist: root element is <{_local_name(root.tag)}>",
            details={"file_path": source, "root": root.tag}
        )

    title_element = _child(root, "title")
    title = None
    if title_element is not None and title_element.text and title_element.text.strip():
        title = title_element.text.strip()

    entries = []
    track_list = _child(root, "trackList")
    if track_list is not None:
        for index, track_element in enumerate(track_list, 1):
            if _local_name(track_element.tag) != "track":
                continue
            entry = _read_track(track_element)
            if entry is None:
                logger.warning(f"Skipping track element {index} in {source}: no location")
                continue
            entries.append(entry)

    logger.debug(f"Read {len(entries)} track entries from {source}")
    return XspfDocument(title=title, entries=tuple(entries))


def _escape_line_breaks(location: str) -> str:
    """Re-encode line breaks so a path always fits on one output line."""
    if "\n" not in location and "\r" not in location:
        return location
    logger.warning(f"Line break in track location {location!r}, kept percent-encoded")
    return location.replace("\r", "%0D").replace("\n", "%0A")


def _read_track(track_element: ET.Element) -> RawTrackEntry | None:
    """
    Build a RawTrackEntry from a <track> element.

    Returns:
        None if the track has no non-empty <location>.

    Behavior:
        Only the first <location> is used (XSPF allows several alternatives).
        Elements with children (<extension>, <link> with nested content)
        are ignored; for repeated simple tags the first one wins.
    """
    location = None
    tags: dict[str, str] = {}

    for child in track_element:
        name = _local_name(child.tag)
        text = (child.text or "").strip()
        if name == "location":
            if location is None and text:
                location = _escape_line_breaks(file_uri_to_path(text))
            continue
        if len(child) or name in tags:
            continue
        tags[name] = text

    if not location:
        return None
    return RawTrackEntry(location=location, tags=tags)


def read_xspf(path: Path) -> XspfDocument:
    """
    Read and parse an XSPF playlist file.

    Args:
        path: Path to the .xspf file.

    Returns:
        XspfDocument with the entries in document order.

    Raises:
        PlaylistReadError: If the file cannot be read or is not a valid
                           XSPF document.
    """
    try:
        content = path.read_bytes()
    except OSError as e:
        raise PlaylistReadError(
            f"Cannot read playlist {path}: {e.strerror or e}",
            details={"file_path": str(path), "original_error": str(e)}
        ) from e

    return parse_xspf(content, source=str(path))
