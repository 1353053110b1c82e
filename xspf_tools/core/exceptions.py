"""
Exception classes for xspf-tools.

This module defines the fatal errors of the application. Per-track
problems (an unparsable filename, a missing duration, a copy source that
no longer exists) are never raised; they are recorded on the track or in
the sink's report instead.

Exception Hierarchy:
    XspfToolsError (base)
        ConfigError - Configuration file issues
        PlaylistReadError - Playlist document cannot be read or parsed
        EmptyPlaylistError - Playlist contains no tracks
        ExportError - Output destination cannot be written
"""


class XspfToolsError(Exception):
    """
    Base exception for all xspf-tools errors.

    All custom exceptions in this project inherit from this class,
    allowing callers to catch every fatal error with a single except
    clause.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context (paths, values).

    Example:
        try:
            playlist = load_playlist_file(path)
        except XspfToolsError as e:
            logger.error(f"Operation failed: {e.message}")
            if e.details:
                logger.debug(f"Details: {e.details}")
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable error description shown to the user.
            details: Optional dictionary containing additional context.
                     Common keys include:
                     - 'file_path': The file involved in the error
                     - 'original_error': The underlying exception text
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return the error message for display."""
        return self.message


class ConfigError(XspfToolsError):
    """
    Raised when there's an issue with the configuration file.

    This is a CRITICAL error that stops program execution.

    Common causes:
        - Explicit --config path does not exist
        - Invalid YAML syntax
        - A value has the wrong type or is out of range

    Example:
        raise ConfigError(
            "'copy.position_width' must be an integer between 1 and 9",
            details={'field': 'copy.position_width', 'value': 0}
        )
    """
    pass


class PlaylistReadError(XspfToolsError):
    """
    Raised when the playlist document cannot be read.

    This is a CRITICAL error that stops program execution.

    Common causes:
        - File not found or permission denied
        - Document is not well-formed XML
        - Root element is not an XSPF <playlist>
    """
    pass


class EmptyPlaylistError(XspfToolsError):
    """
    Raised when a playlist yields zero track entries.

    Every export mode needs at least one track to be meaningful, so this
    is raised by the loader before any sink gets the chance to create
    output.
    """
    pass


class ExportError(XspfToolsError):
    """
    Raised when an export destination cannot be written.

    This is a CRITICAL error for the invocation. It covers an output file
    that cannot be created or replaced and a copy destination directory
    that cannot be created or written into. A single track whose source
    file is missing is NOT an ExportError; the copy sink skips it.

    Example:
        raise ExportError(
            "Cannot write list file: Permission denied",
            details={'file_path': '/root/list.txt'}
        )
    """
    pass
