"""
Text sinks: the "dump" summary and the "runtime" report.

Both return the complete text; printing is left to the caller.

Summary layout:

    Practice (4 tracks)
      1  [MS]   3  2018-01-15  Etude  (2:11)
      2  [?]  --  ----------  untitled track  (partial: missing sequence_number, date)
      3  <unparsed: /music/(((.ogg>
      4  [VL]  12  2018-01-16  Melody
    2 complete, 1 partial, 1 unparsed
"""

from xspf_tools.playlist.duration import aggregate_durations
from xspf_tools.playlist.models import ParseStatus, Playlist, Track


NO_SEQUENCE = "--"
NO_DATE = "-" * 10


def _summary_line(track: Track, position_width: int) -> str:
    position = f"{track.position:>{position_width}}"
    meta = track.metadata

    if meta.status is ParseStatus.UNPARSED:
        return f"{position}  <unparsed: {track.path}>"

    sequence = str(meta.sequence_number) if meta.sequence_number is not None else NO_SEQUENCE
    date = meta.date.isoformat() if meta.date is not None else NO_DATE
    line = f"{position}  [{meta.track_type.shortname}] {sequence:>3}  {date}  {meta.title or ''}"

    if track.inline_duration is not None:
        line += f"  ({track.inline_duration})"
    if meta.status is ParseStatus.PARTIAL:
        line += f"  (partial: missing {', '.join(meta.missing_fields)})"
    return line


def render_summary(playlist: Playlist) -> str:
    """
    Render one line per track, in playlist order.

    Degraded tracks are marked rather than hidden: partial tracks list
    their missing fields and unparsed tracks show their raw path.

    Returns:
        The summary text, ending with a newline.
    """
    count = len(playlist)
    title = playlist.title or (playlist.source.name if playlist.source else "Playlist")
    lines = [f"{title} ({count} track{'s' if count != 1 else ''})"]

    position_width = len(str(count))
    lines.extend(_summary_line(track, position_width) for track in playlist)

    counts = playlist.count_by_status()
    lines.append(
        f"{counts[ParseStatus.COMPLETE]} complete, "
        f"{counts[ParseStatus.PARTIAL]} partial, "
        f"{counts[ParseStatus.UNPARSED]} unparsed"
    )
    return "\n".join(lines) + "\n"


def render_runtime(playlist: Playlist) -> str:
    """
    Render the total running time of the playlist.

    When some tracks have no duration the report says how many, so the
    total is never presented as more exact than it is.

    Returns:
        The report text, ending with a newline.
    """
    summary = aggregate_durations(playlist)
    lines = [f"Total runtime: {summary.total} across {summary.track_count} tracks"]
    if summary.is_complete:
        lines.append(f"All {summary.track_count} tracks have a known duration")
    else:
        lines.append(
            f"{summary.unknown_duration_count} of {summary.track_count} "
            f"tracks had unknown duration (not included in the total)"
        )
    return "\n".join(lines) + "\n"
