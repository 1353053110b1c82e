"""Total running time of a playlist."""

from dataclasses import dataclass

from xspf_tools.playlist.models import Playlist, TrackDuration


@dataclass(frozen=True)
class RuntimeSummary:
    """
    Result of aggregate_durations().

    Attributes:
        total: Exact sum of every known track duration.
        track_count: Number of tracks in the playlist.
        unknown_duration_count: Tracks without a duration; not in total.
    """
    total: TrackDuration
    track_count: int
    unknown_duration_count: int

    @property
    def known_count(self) -> int:
        return self.track_count - self.unknown_duration_count

    @property
    def is_complete(self) -> bool:
        """True when every track contributed to the total."""
        return self.unknown_duration_count == 0


def aggregate_durations(playlist: Playlist) -> RuntimeSummary:
    """
    Sum the inline durations of a playlist.

    Filenames do not encode duration, so tracks without a <duration> tag
    are counted as unknown rather than estimated.
    """
    total = TrackDuration(0)
    unknown = 0
    for track in playlist:
        if track.inline_duration is None:
            unknown += 1
        else:
            total += track.inline_duration

    return RuntimeSummary(
        total=total,
        track_count=len(playlist),
        unknown_duration_count=unknown,
    )
