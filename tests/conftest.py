"""Test configuration and fixtures"""

import logging
import tempfile
from pathlib import Path

import pytest

from xspf_tools.playlist import RawTrackEntry, load_playlist


SAMPLE_XSPF = """<?xml version="1.0" encoding="UTF-8"?>
<playlist version="1" xmlns="http://xspf.org/ns/0/">
  <title>Practice</title>
  <trackList>
    <track>
      <location>file://{root}/2018-01-15/03_MorningTheme.ogg</location>
      <title>Morning Theme</title>
      <duration>184000</duration>
    </track>
    <track>
      <location>file://{root}/untitled_track.mp3</location>
      <duration>61500</duration>
    </track>
    <track>
      <location>file://{root}/(((.flac</location>
    </track>
    <track>
      <location>file://{root}/20180116-2-Etude%20Two.mp3</location>
      <creator>Me</creator>
    </track>
  </trackList>
</playlist>
"""


@pytest.fixture
def temp_dir():
    """Create temporary directory for tests"""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def sample_xspf(temp_dir):
    """Sample playlist whose four tracks live under temp_dir/music"""
    music_dir = temp_dir / "music"
    path = temp_dir / "practice.xspf"
    path.write_text(SAMPLE_XSPF.format(root=music_dir.as_posix()), encoding="utf-8")
    return path


@pytest.fixture
def sample_music(temp_dir):
    """Create the audio files referenced by sample_xspf"""
    music_dir = temp_dir / "music"
    (music_dir / "2018-01-15").mkdir(parents=True)
    files = [
        music_dir / "2018-01-15" / "03_MorningTheme.ogg",
        music_dir / "untitled_track.mp3",
        music_dir / "(((.flac",
        music_dir / "20180116-2-Etude Two.mp3",
    ]
    for index, path in enumerate(files):
        path.write_bytes(f"audio-{index}".encode())
    return files


@pytest.fixture
def make_playlist():
    """Build a Playlist from (location, tags) pairs or bare locations"""
    def _make(*entries, title=None, source=None):
        raw = []
        for entry in entries:
            if isinstance(entry, str):
                raw.append(RawTrackEntry(location=entry))
            else:
                location, tags = entry
                raw.append(RawTrackEntry(location=location, tags=dict(tags)))
        return load_playlist(raw, title=title, source=source)
    return _make


@pytest.fixture(autouse=True)
def reset_root_logger():
    """Keep handlers installed by setup_logging() from leaking between tests"""
    root_logger = logging.getLogger()
    saved = root_logger.handlers[:]
    level = root_logger.level
    yield
    root_logger.handlers[:] = saved
    root_logger.setLevel(level)
