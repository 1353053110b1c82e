"""Test the dump, runtime, list and json sinks"""

import datetime
import json

import pytest

from xspf_tools.core.exceptions import ExportError, PlaylistReadError
from xspf_tools.export import (
    ExportRecord,
    read_json,
    render_json,
    render_list,
    render_runtime,
    render_summary,
    write_json,
    write_list,
)
from xspf_tools.playlist.loader import load_playlist, load_playlist_file
from xspf_tools.playlist.models import ParseStatus
from xspf_tools.playlist.reader import parse_xspf


@pytest.fixture
def playlist(sample_xspf):
    """The loaded sample playlist"""
    return load_playlist_file(sample_xspf)


class TestSummary:
    """Test the dump sink"""

    def test_sample_summary(self, playlist, sample_xspf):
        """Test one line per track plus header and footer"""
        music_dir = (sample_xspf.parent / "music").as_posix()
        lines = render_summary(playlist).splitlines()

        assert lines == [
            "Practice (4 tracks)",
            "1  [?]   3  2018-01-15  MorningTheme  (3:04)",
            "2  [?]  --  ----------  untitled track  (1:01)  (partial: missing sequence_number, date)",
            f"3  <unparsed: {music_dir}/(((.flac>",
            "4  [MS]   2  2018-01-16  Etude Two",
            "2 complete, 1 partial, 1 unparsed",
        ]

    def test_header_falls_back_to_file_name(self, make_playlist, temp_dir):
        """Test the header uses the file name when the playlist has no title"""
        playlist = make_playlist("01_a.mp3", source=temp_dir / "lessons.xspf")

        assert render_summary(playlist).startswith("lessons.xspf (1 track)\n")

    def test_position_padding(self, make_playlist):
        """Test positions are right-aligned to the widest position"""
        playlist = make_playlist(*[f"{n}_2018-01-15_t.mp3" for n in range(1, 11)])
        lines = render_summary(playlist).splitlines()

        assert lines[1].startswith(" 1  [?]")
        assert lines[10].startswith("10  [?]")


class TestRuntime:
    """Test the runtime sink"""

    def test_partial_runtime(self, playlist):
        """Test unknown durations are reported alongside the total"""
        assert render_runtime(playlist) == (
            "Total runtime: 4:05 across 4 tracks\n"
            "2 of 4 tracks had unknown duration (not included in the total)\n"
        )

    def test_complete_runtime(self, make_playlist):
        """Test the report when every duration is known"""
        playlist = make_playlist(("01_a.mp3", {"duration": "3750000"}))

        assert render_runtime(playlist) == (
            "Total runtime: 1:02:30 across 1 tracks\n"
            "All 1 tracks have a known duration\n"
        )


class TestList:
    """Test the list sink"""

    def test_one_path_per_line(self, playlist):
        """Test every track appears once, unparsed ones included"""
        text = render_list(playlist)

        assert text.endswith("\n")
        assert len(text.splitlines()) == len(playlist)
        assert text.splitlines() == [track.path for track in playlist]

    def test_line_break_in_location(self):
        """Test a location with an encoded line break stays on one line"""
        document = parse_xspf(
            "<playlist><trackList>"
            "<track><location>file:///music/a%0Ab.mp3</location></track>"
            "</trackList></playlist>"
        )
        text = render_list(load_playlist(document.entries))

        assert text == "/music/a%0Ab.mp3\n"
        assert len(text.splitlines()) == 1

    def test_write_list(self, playlist, temp_dir):
        """Test the list file is written as UTF-8 with LF endings"""
        destination = temp_dir / "list.txt"
        write_list(playlist, destination)

        content = destination.read_bytes().decode("utf-8")
        assert content == render_list(playlist)
        assert "\r\n" not in content
        assert list(temp_dir.glob(".list.txt.*")) == []

    def test_write_list_replaces_existing_file(self, make_playlist, temp_dir):
        """Test an existing output file is overwritten"""
        destination = temp_dir / "list.txt"
        destination.write_text("old content\n" * 10, encoding="utf-8")

        write_list(make_playlist("a.mp3"), destination)

        assert destination.read_text(encoding="utf-8") == "a.mp3\n"

    def test_unwritable_destination(self, playlist, temp_dir):
        """Test a missing parent directory raises ExportError"""
        with pytest.raises(ExportError):
            write_list(playlist, temp_dir / "missing" / "list.txt")


class TestJson:
    """Test the json sink"""

    def test_record_fields(self, playlist):
        """Test the required keys and their values"""
        records = json.loads(render_json(playlist))

        assert len(records) == 4
        assert records[0] == {
            "position": 1,
            "path": playlist[0].path,
            "sequence_number": 3,
            "date": "2018-01-15",
            "title": "MorningTheme",
            "parse_status": "complete",
            "duration_ms": 184000,
            "track_type": "unknown",
            "raw_tokens": ["03", "MorningTheme"],
            "missing_fields": [],
        }

    def test_missing_values_are_null(self, playlist):
        """Test absent fields are written as null, never omitted"""
        records = json.loads(render_json(playlist))
        unparsed = records[2]

        assert unparsed["sequence_number"] is None
        assert unparsed["date"] is None
        assert unparsed["title"] is None
        assert unparsed["duration_ms"] is None
        assert unparsed["parse_status"] == "unparsed"
        assert unparsed["missing_fields"] == ["sequence_number", "date", "title"]

    def test_order_matches_playlist(self, playlist):
        """Test records appear in playlist order"""
        records = json.loads(render_json(playlist))

        assert [record["path"] for record in records] == [track.path for track in playlist]

    def test_indent(self, playlist):
        """Test indent=0 writes a single line"""
        assert render_json(playlist, indent=0).count("\n") == 1
        assert render_json(playlist, indent=4).splitlines()[1].startswith("    {")

    def test_non_ascii_titles(self, make_playlist):
        """Test titles are written as UTF-8 rather than escaped"""
        text = render_json(make_playlist("01_Träumerei.mp3"))

        assert "Träumerei" in text

    def test_read_back(self, playlist, temp_dir):
        """Test a written export decodes to the same records"""
        destination = temp_dir / "out.json"
        write_json(playlist, destination)

        records = read_json(destination)

        assert records == [ExportRecord.from_track(track) for track in playlist]
        assert records[0].date == datetime.date(2018, 1, 15)
        assert records[2].parse_status is ParseStatus.UNPARSED

    def test_read_minimal_record(self, temp_dir):
        """Test documents with only the core keys can be read"""
        path = temp_dir / "minimal.json"
        path.write_text(json.dumps([{
            "path": "a.mp3",
            "sequence_number": None,
            "date": None,
            "title": "a",
            "parse_status": "partial",
        }]), encoding="utf-8")

        (record,) = read_json(path)

        assert record.title == "a"
        assert record.position is None
        assert record.raw_tokens == ()

    @pytest.mark.parametrize("content", [
        "not json",
        '{"path": "a.mp3"}',
        '[{"path": "a.mp3"}]',
        '[{"path": "a.mp3", "sequence_number": 1, "date": "2018-13-01", '
        '"title": "a", "parse_status": "complete"}]',
    ])
    def test_read_invalid(self, temp_dir, content):
        """Test malformed documents raise PlaylistReadError"""
        path = temp_dir / "bad.json"
        path.write_text(content, encoding="utf-8")

        with pytest.raises(PlaylistReadError):
            read_json(path)
