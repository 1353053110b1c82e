"""
Filename metadata extraction.

Recording files are named by a loose convention: a sequence number, a
recording date and a descriptive title, separated by underscores, dashes
or spaces, in whatever order the recorder preferred:

    03_2018-01-15_MorningTheme.ogg   -> #3, 2018-01-15, "MorningTheme"
    20180115-3-Etude.mp3             -> #3, 2018-01-15, "Etude" (MuseScore)
    v12b-Melody.flac                 -> #12, no date, "Melody" (violin layering)
    untitled_track.mp3               -> no number, no date, "untitled track"

Tokens are classified by their content, never by their position:

    date      YYYYMMDD, YYYY-MM-DD, YYYY.MM.DD (month/day may be one digit)
              or DD.MM.YYYY; must be a real calendar date within
              [min_year, max_year]
    sequence  1..max_sequence_digits digits, optionally prefixed with "v"
              and followed by one variant letter ("v3b")
    noise     no letters or digits at all; never part of a title
    title     everything else, joined with single spaces

When more than one token has the sequence (or date) shape, the filename is
ambiguous: that field is left empty, a note is recorded and the competing
tokens stay in the title.

extract_metadata() never raises. The worst case is an UNPARSED record
that still carries the tokens it found.
"""

import datetime
import re
from dataclasses import dataclass

from xspf_tools.core.config import ExtractorConfig
from xspf_tools.playlist.models import (
    METADATA_FIELDS,
    ExtractedMetadata,
    ParseStatus,
    TrackType,
)


AMBIGUOUS_SEQUENCE_NOTE = "ambiguous sequence number"
AMBIGUOUS_DATE_NOTE = "ambiguous date"
DIRECTORY_DATE_NOTE = "date taken from directory name"
INLINE_TITLE_NOTE = "title taken from playlist"

_DELIMITERS = r"\s_\-"

# Dashed dates are matched as a whole before splitting on the delimiters
_DATE_RUN = r"\d{4}[-.]\d{1,2}[-.]\d{1,2}|\d{1,2}\.\d{1,2}\.\d{4}"
_TOKEN_PATTERN = re.compile(
    rf"(?<![^{_DELIMITERS}])(?:{_DATE_RUN})(?![^{_DELIMITERS}])|[^{_DELIMITERS}]+"
)

_COMPACT_DATE = re.compile(r"^(\d{4})(\d{2})(\d{2})$")
_ISO_DATE = re.compile(r"^(\d{4})[-.](\d{1,2})[-.](\d{1,2})$")
_DAY_FIRST_DATE = re.compile(r"^(\d{1,2})\.(\d{1,2})\.(\d{4})$")

_VIOLIN_LAYERING = re.compile(r"^v\d+[a-z]?-.+$")
_MUSE_SCORE = re.compile(r"^\d{8}[a-z]?-\d+-.+$")

_PATH_SEPARATORS = re.compile(r"[\\/]")


@dataclass(frozen=True)
class ExtractorRules:
    """
    Shape predicates of the filename grammar.

    Attributes:
        max_sequence_digits: Longest all-digit token accepted as a sequence
                             number.
        date_from_directory: Use the parent directory's name as the date
                             when the filename has no date token.
        min_year: Earliest year accepted in a date token.
        max_year: Latest year accepted in a date token.
    """
    max_sequence_digits: int = 3
    date_from_directory: bool = True
    min_year: int = 1900
    max_year: int = 2099

    @classmethod
    def from_config(cls, config: ExtractorConfig) -> "ExtractorRules":
        return cls(
            max_sequence_digits=config.max_sequence_digits,
            date_from_directory=config.date_from_directory,
        )

    def sequence_value(self, token: str) -> int | None:
        """Return the sequence number a token encodes, or None."""
        digits = token
        if token[:1] == "v":
            digits = token[1:]
            if digits[-1:].isalpha():
                digits = digits[:-1]
        if not digits.isascii() or not digits.isdigit():
            return None
        if len(digits) > self.max_sequence_digits:
            return None
        return int(digits)

    def date_value(self, token: str) -> datetime.date | None:
        """Return the calendar date a token encodes, or None."""
        match = _COMPACT_DATE.match(token) or _ISO_DATE.match(token)
        if match:
            year, month, day = match.groups()
        else:
            match = _DAY_FIRST_DATE.match(token)
            if not match:
                return None
            day, month, year = match.groups()

        if not self.min_year <= int(year) <= self.max_year:
            return None
        try:
            return datetime.date(int(year), int(month), int(day))
        except ValueError:
            return None


DEFAULT_RULES = ExtractorRules()


def split_filename(path: str) -> tuple[str, str, str]:
    """
    Split a path into (parent directory name, stem, extension).

    Both "/" and "\\" separate directories. The extension is the text
    after the last dot, without the dot; a leading dot (".hidden") does
    not start an extension.

    Examples:
        split_filename("/music/2018-01-15/03_Theme.ogg")
        # ("2018-01-15", "03_Theme", "ogg")
        split_filename("notes")
        # ("", "notes", "")
    """
    parts = _PATH_SEPARATORS.split(path)
    base = parts[-1]
    parent = parts[-2] if len(parts) > 1 else ""

    stem, dot, extension = base.rpartition(".")
    if not dot or not stem:
        stem, extension = base, ""
    return parent, stem, extension


def tokenize(stem: str) -> tuple[str, ...]:
    """
    Split a filename stem into tokens.

    A non-empty stem made only of delimiters ("___") is kept whole as a
    single token, so an unparsed name still reports what it contained.

    Example:
        tokenize("03_2018-01-15_Morning Theme")
        # ("03", "2018-01-15", "Morning", "Theme")
    """
    tokens = tuple(_TOKEN_PATTERN.findall(stem))
    if not tokens and stem:
        return (stem,)
    return tokens


def _is_noise(token: str) -> bool:
    return not any(char.isalnum() for char in token)


def _detect_track_type(stem: str) -> TrackType:
    if _VIOLIN_LAYERING.match(stem):
        return TrackType.VIOLIN_LAYERING
    if _MUSE_SCORE.match(stem):
        return TrackType.MUSE_SCORE
    return TrackType.UNKNOWN


def extract_metadata(
    path: str,
    inline_title: str | None = None,
    rules: ExtractorRules = DEFAULT_RULES
) -> ExtractedMetadata:
    """
    Derive structured metadata from a track's file path.

    Args:
        path: File path (or bare file name) of the track.
        inline_title: Title supplied by the playlist, used only when the
                      filename yields no title tokens.
        rules: Shape predicates to classify tokens with.

    Returns:
        ExtractedMetadata with status COMPLETE, PARTIAL or UNPARSED.

    Example:
        meta = extract_metadata("03_2018-01-15_MorningTheme.ogg")
        meta.sequence_number  # 3
        meta.date             # datetime.date(2018, 1, 15)
        meta.title            # "MorningTheme"
        meta.status           # ParseStatus.COMPLETE
    """
    parent, stem, extension = split_filename(path)
    tokens = tokenize(stem)
    notes: list[str] = []

    sequence_candidates = []
    date_candidates = []
    for index, token in enumerate(tokens):
        value = rules.sequence_value(token)
        if value is not None:
            sequence_candidates.append((index, value))
            continue
        day = rules.date_value(token)
        if day is not None:
            date_candidates.append((index, day))

    claimed: set[int] = set()

    sequence_number = None
    if len(sequence_candidates) == 1:
        index, sequence_number = sequence_candidates[0]
        claimed.add(index)
    elif sequence_candidates:
        notes.append(AMBIGUOUS_SEQUENCE_NOTE)

    date = None
    if len(date_candidates) == 1:
        index, date = date_candidates[0]
        claimed.add(index)
    elif date_candidates:
        notes.append(AMBIGUOUS_DATE_NOTE)

    if date is None and not date_candidates and rules.date_from_directory and parent:
        date = rules.date_value(parent)
        if date is not None:
            notes.append(DIRECTORY_DATE_NOTE)

    title_tokens = [
        token for index, token in enumerate(tokens)
        if index not in claimed and not _is_noise(token)
    ]
    title = " ".join(title_tokens) or None
    if title is None and inline_title and inline_title.strip():
        title = inline_title.strip()
        notes.append(INLINE_TITLE_NOTE)

    values = {"sequence_number": sequence_number, "date": date, "title": title}
    missing = tuple(name for name in METADATA_FIELDS if values[name] is None)

    return ExtractedMetadata(
        sequence_number=sequence_number,
        date=date,
        title=title,
        raw_tokens=tokens,
        status=ParseStatus.from_missing(missing),
        missing_fields=missing,
        notes=tuple(notes),
        track_type=_detect_track_type(stem),
        stem=stem,
        extension=extension,
    )
