"""
Logging configuration for xspf-tools.

This module sets up the logging system with multiple outputs:
    - Console: Messages on stderr with tqdm-compatible formatting
    - log_full.log: Complete log of all events (DEBUG and above)
    - log_errors.log: Only ERROR and CRITICAL level messages
    - copy_skipped.log: Tracks the copy export could not copy

Export output itself (summaries, runtime reports) goes to stdout through
click; logging only ever writes to stderr and the log files, so piping a
dump into another program is safe.

Log File Locations:
    Log files are only written when a log directory is configured
    (logging.directory in xspf_tools.yaml or --log-dir). Each run creates
    new files with a timestamp suffix.

Usage:
    from xspf_tools.core.logger import setup_logging, get_logger

    setup_logging(log_dir)  # Call once at startup
    logger = get_logger(__name__)  # Get logger for each module

    logger.info("Loaded playlist")
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import TextIO

from tqdm import tqdm


# Log file name prefixes (created in the log directory)
LOG_FULL_PREFIX = "log_full"
LOG_ERRORS_PREFIX = "log_errors"
COPY_SKIPPED_PREFIX = "copy_skipped"

# Log format for file output (detailed with timestamp)
FILE_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


# ANSI color codes
class Colors:
    """ANSI color codes for terminal output."""
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    WHITE = "\033[37m"
    BOLD = "\033[1m"


class ColoredConsoleFormatter(logging.Formatter):
    """
    Custom formatter that adds colors to console output.

    Colors:
        - DEBUG: Blue
        - INFO: Green
        - WARNING: Yellow
        - ERROR: Red
        - CRITICAL: Bold Red
    """

    LEVEL_COLORS = {
        logging.DEBUG: Colors.BLUE,
        logging.INFO: Colors.GREEN,
        logging.WARNING: Colors.YELLOW,
        logging.ERROR: Colors.RED,
        logging.CRITICAL: Colors.BOLD + Colors.RED,
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno, Colors.WHITE)
        return f"{color}{record.levelname}{Colors.RESET}: {record.getMessage()}"


class TqdmLoggingHandler(logging.Handler):
    """
    Logging handler that writes to the console without breaking tqdm bars.

    The copy export shows a progress bar while log messages (e.g. skipped
    tracks) are emitted. tqdm.write() prints the message above the active
    bar instead of tearing it.

    Attributes:
        stream: The output stream (defaults to sys.stderr).
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        super().__init__()
        self.stream = stream

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            # Resolved per call so that stream redirection (pytest, CliRunner) is honored
            tqdm.write(msg, file=self.stream or sys.stderr)
        except Exception:
            self.handleError(record)


class CopySkippedTrackHandler(logging.Handler):
    """
    Handler that captures tracks skipped by the copy export.

    This handler listens for log records carrying copy-skip information and
    writes them to copy_skipped.log in a simple, human-readable format:

        007 /music/2018-01-15/07_Lullaby.ogg
        source file not found

        012 /music/2018-01-16/12_Etude.flac
        permission denied

    The handler looks for specific extra fields in log records:
        - 'copy_skipped_position': The track's playlist position
        - 'copy_skipped_path': The track's path as given in the playlist
        - 'copy_skipped_reason': Why the track was skipped

    Only records containing these fields are written to the report.

    Usage:
        log_copy_skip(logger, position=7, path="...", reason="source file not found")
    """

    def __init__(self, report_path: Path) -> None:
        """
        Args:
            report_path: Path to the copy_skipped.log file.
                         File will be created/overwritten by open().
        """
        super().__init__()
        self.report_path = report_path
        self.report_file: TextIO | None = None

    def open(self) -> None:
        """Open the report file for writing (overwrites existing content)."""
        self.report_file = open(self.report_path, "w", encoding="utf-8")

    def emit(self, record: logging.LogRecord) -> None:
        if not hasattr(record, "copy_skipped_path"):
            return

        if self.report_file is None:
            return

        try:
            position = getattr(record, "copy_skipped_position", None)
            path = getattr(record, "copy_skipped_path", "")
            reason = getattr(record, "copy_skipped_reason", "unknown reason")

            prefix = f"{position:03d}" if position is not None else "???"
            self.report_file.write(f"{prefix} {path}\n")
            self.report_file.write(f"{reason}\n\n")
            self.report_file.flush()
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        """Close the report file handle. Safe to call multiple times."""
        if self.report_file is not None:
            try:
                self.report_file.close()
            except OSError:
                pass
            self.report_file = None
        super().close()


class ErrorOnlyFilter(logging.Filter):
    """Filter that only allows ERROR and CRITICAL level records."""

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= logging.ERROR


def setup_logging(log_dir: Path | None = None, console_level: str = "INFO") -> None:
    """
    Configure the logging system for the application.

    This function should be called ONCE at application startup, after the
    configuration is loaded but before the playlist is read.

    Args:
        log_dir: Directory where log files will be created, or None to log
                 to the console only.
        console_level: Minimum level name for console output
                       ("DEBUG", "INFO", "WARNING" or "ERROR").

    Behavior:
        1. Configure root logger level to DEBUG
        2. Remove any existing handlers
        3. Add console handler (TqdmLoggingHandler) at console_level
        4. If log_dir is given:
           - Create log_dir if it doesn't exist
           - Add log_full_{timestamp}.log at DEBUG
           - Add log_errors_{timestamp}.log filtered to ERROR+
           - Add copy_skipped_{timestamp}.log (CopySkippedTrackHandler)

    Raises:
        OSError: If the log directory or a log file cannot be created.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Remove any existing handlers
    root_logger.handlers.clear()

    # Console handler (tqdm-compatible) with colors
    console_handler = TqdmLoggingHandler()
    console_handler.setLevel(getattr(logging, console_level.upper(), logging.INFO))
    console_handler.setFormatter(ColoredConsoleFormatter())
    root_logger.addHandler(console_handler)

    if log_dir is None:
        return

    log_dir.mkdir(parents=True, exist_ok=True)

    # Generate timestamp for this run
    timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")

    # Full log file handler
    full_handler = logging.FileHandler(
        log_dir / f"{LOG_FULL_PREFIX}_{timestamp}.log", mode="w", encoding="utf-8"
    )
    full_handler.setLevel(logging.DEBUG)
    full_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, FILE_DATE_FORMAT))
    root_logger.addHandler(full_handler)

    # Error-only log file handler
    error_handler = logging.FileHandler(
        log_dir / f"{LOG_ERRORS_PREFIX}_{timestamp}.log", mode="w", encoding="utf-8"
    )
    error_handler.setLevel(logging.DEBUG)  # Filter handles the level restriction
    error_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, FILE_DATE_FORMAT))
    error_handler.addFilter(ErrorOnlyFilter())
    root_logger.addHandler(error_handler)

    # Copy skip report handler
    skip_handler = CopySkippedTrackHandler(log_dir / f"{COPY_SKIPPED_PREFIX}_{timestamp}.log")
    skip_handler.open()
    root_logger.addHandler(skip_handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: The logger name, typically __name__ of the calling module.

    Returns:
        logging.Logger: A logger instance configured by setup_logging().

    Note:
        Loggers obtained before setup_logging() is called have no handlers
        of their own; records still propagate to whatever the root logger
        has at emit time.
    """
    return logging.getLogger(name)


def log_copy_skip(
    logger: logging.Logger,
    position: int,
    path: str,
    reason: str
) -> None:
    """
    Log a track the copy export had to skip.

    Logs a WARNING and attaches the extra fields CopySkippedTrackHandler
    uses to write to copy_skipped.log.

    Args:
        logger: The logger to use for the message.
        position: 1-based playlist position of the track.
        path: The track's path as given in the playlist.
        reason: Why the track was skipped.

    Example:
        log_copy_skip(logger, 7, "/music/07_Lullaby.ogg", "source file not found")
    """
    logger.warning(
        f"Skipped track {position}: {path} ({reason})",
        extra={
            "copy_skipped_position": position,
            "copy_skipped_path": path,
            "copy_skipped_reason": reason,
        }
    )


def shutdown_logging() -> None:
    """
    Properly shut down the logging system.

    Flushes and closes all handlers and removes them from the root logger.
    Typically called in a finally block at application exit.
    """
    root_logger = logging.getLogger()

    for handler in root_logger.handlers[:]:
        try:
            handler.flush()
            handler.close()
        except OSError:
            pass
        root_logger.removeHandler(handler)
