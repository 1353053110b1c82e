"""Test duration arithmetic and runtime aggregation"""

from xspf_tools.playlist.duration import aggregate_durations
from xspf_tools.playlist.models import TrackDuration


class TestTrackDuration:
    """Test TrackDuration arithmetic and formatting"""

    def test_addition(self):
        """Test adding durations and plain milliseconds"""
        assert TrackDuration(1000) + TrackDuration(500) == TrackDuration(1500)
        assert TrackDuration(1000) + 250 == TrackDuration(1250)
        assert 250 + TrackDuration(1000) == TrackDuration(1250)
        assert sum([TrackDuration(1), TrackDuration(2)], TrackDuration(0)) == TrackDuration(3)

    def test_ordering(self):
        """Test durations compare by length"""
        assert TrackDuration(999) < TrackDuration(1000)
        assert max(TrackDuration(5), TrackDuration(7)) == TrackDuration(7)

    def test_timecode(self):
        """Test milliseconds are dropped only when formatting"""
        assert str(TrackDuration(90999)) == "1:30"
        assert TrackDuration(3750000).to_timecode() == "1:02:30"
        assert str(TrackDuration(0)) == "0:00"


class TestAggregateDurations:
    """Test summing playlist durations"""

    def test_all_known(self, make_playlist):
        """Test every duration contributes to the total"""
        playlist = make_playlist(
            ("01_a.mp3", {"duration": "1500"}),
            ("02_b.mp3", {"duration": "2500"}),
        )
        summary = aggregate_durations(playlist)

        assert summary.total == TrackDuration(4000)
        assert summary.track_count == 2
        assert summary.unknown_duration_count == 0
        assert summary.is_complete

    def test_unknown_durations_are_counted(self, make_playlist):
        """Test tracks without duration are excluded and counted"""
        playlist = make_playlist(
            ("01_a.mp3", {"duration": "1500"}),
            "02_b.mp3",
            ("03_c.mp3", {"duration": "bogus"}),
        )
        summary = aggregate_durations(playlist)

        assert summary.total == TrackDuration(1500)
        assert summary.unknown_duration_count == 2
        assert summary.known_count == 1
        assert not summary.is_complete

    def test_no_known_durations(self, make_playlist):
        """Test a playlist without any durations totals zero"""
        summary = aggregate_durations(make_playlist("01_a.mp3"))

        assert summary.total == TrackDuration(0)
        assert summary.unknown_duration_count == 1

    def test_sums_are_exact(self, make_playlist):
        """Test many fractional-second durations sum without drift"""
        playlist = make_playlist(*[("01_a.mp3", {"duration": "100"}) for _ in range(1000)])

        assert aggregate_durations(playlist).total == TrackDuration(100000)
