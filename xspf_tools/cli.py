"""
Command-line interface for xspf-tools.

This module implements the CLI using Click, with rich-click providing the
help formatting and colors.

Usage:
    xspf-tools <mode> <in.xspf> [<outfile>]

Modes:
    dump      Print a summary of every track
    runtime   Print the total running time
    list      Write the path of every track to <outfile>
    json      Write the extracted track info to <outfile> as JSON
    copy      Copy every track into the directory <outfile>, renamed as
              {position}_{date|nodate}_{title}.{ext}

Exit Codes:
    0    Success (copy may still have skipped tracks; they are reported)
    1    Configuration error or unexpected error
    2    Usage error (unknown mode, missing or extra destination)
    3    Playlist could not be read
    4    Playlist has no tracks
    5    Output could not be written
    6    Any other xspf-tools error
    130  Interrupted by user
"""

import sys
from pathlib import Path
from typing import Optional

import rich_click as click

# Configure rich-click for better help formatting
click.rich_click.USE_RICH_MARKUP = True
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "magenta italic"
click.rich_click.MAX_WIDTH = 100

from xspf_tools import __version__
from xspf_tools.core import (
    Config,
    ConfigError,
    EmptyPlaylistError,
    ExportError,
    PlaylistReadError,
    XspfToolsError,
    get_logger,
    load_config,
    setup_logging,
    shutdown_logging,
)
from xspf_tools.export import SINKS, SinkSpec
from xspf_tools.playlist import ExtractorRules, load_playlist_file

logger = get_logger(__name__)


EXIT_CONFIG_ERROR = 1
EXIT_READ_ERROR = 3
EXIT_EMPTY_PLAYLIST = 4
EXIT_EXPORT_ERROR = 5
EXIT_OTHER_ERROR = 6
EXIT_INTERRUPTED = 130
EXIT_UNEXPECTED_ERROR = 1


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("mode", type=click.Choice(list(SINKS)), metavar="<mode>")
@click.argument(
    "playlist_path",
    type=click.Path(dir_okay=False, path_type=Path),
    metavar="<in.xspf>"
)
@click.argument(
    "destination",
    required=False,
    type=click.Path(path_type=Path),
    metavar="[<outfile>]"
)
@click.option(
    "--config", "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    metavar="<config.yaml>",
    help="Configuration file (default: ./xspf_tools.yaml if present)"
)
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    metavar="<dir>",
    help="Write log files into this directory"
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Show debug messages on the console"
)
@click.option(
    "--no-progress",
    is_flag=True,
    help="Don't show a progress bar while copying"
)
@click.version_option(__version__, "--version", prog_name="xspf-tools")
def cli(
    mode: str,
    playlist_path: Path,
    destination: Optional[Path],
    config_path: Optional[Path],
    log_dir: Optional[Path],
    verbose: bool,
    no_progress: bool
) -> None:
    """
    xspf-tools: Extract track info from XSPF playlists.

    Reads the playlist, derives sequence number, date and title from each
    track's filename, and exports the result in the chosen <mode>.

    \b
    MODES:
        dump      Print a summary of every track
        runtime   Print the total running time
        list      Write the filenames of all tracks to <outfile>
        json      Write the extracted info as JSON to <outfile>
        copy      Copy all tracks into the directory <outfile>,
                  renamed {position}_{date}_{title}.{ext}

    \b
    EXAMPLES:
        xspf-tools dump practice.xspf
        xspf-tools json practice.xspf practice.json
        xspf-tools copy practice.xspf ~/Desktop/practice
    """
    sink = SINKS[mode]

    # Checked before any parsing work
    if sink.needs_destination and destination is None:
        raise click.UsageError(f"Mode '{mode}' requires a destination {sink.destination}")
    if not sink.needs_destination and destination is not None:
        raise click.UsageError(f"Mode '{mode}' prints to the console and takes no destination")

    _run_export(
        sink=sink,
        playlist_path=playlist_path,
        destination=destination,
        config_path=config_path,
        log_dir=log_dir,
        verbose=verbose,
        show_progress=not no_progress,
    )


def _run_export(
    sink: SinkSpec,
    playlist_path: Path,
    destination: Path | None,
    config_path: Path | None,
    log_dir: Path | None,
    verbose: bool,
    show_progress: bool
) -> None:
    """
    Execute one export based on CLI options.

    This is the main orchestration function that:
    1. Loads configuration
    2. Sets up logging
    3. Loads the playlist
    4. Runs the selected sink
    5. Prints the sink's output

    Raises:
        SystemExit: On fatal errors (with the exit code for the error kind).
    """
    try:
        config = load_config(config_path)
        _setup_logging(config, log_dir, verbose)
        logger.debug(f"xspf-tools {__version__}: {sink.name} {playlist_path}")

        rules = ExtractorRules.from_config(config.extractor)
        playlist = load_playlist_file(playlist_path, rules=rules)

        output = sink.run(playlist, destination, config, show_progress)
        if output:
            click.echo(output, nl=False)

    except ConfigError as e:
        click.echo(f"Configuration error: {e.message}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)

    except PlaylistReadError as e:
        click.echo(f"Playlist error: {e.message}", err=True)
        logger.debug(f"Details: {e.details}")
        sys.exit(EXIT_READ_ERROR)

    except EmptyPlaylistError as e:
        click.echo(f"Playlist error: {e.message}: {playlist_path}", err=True)
        sys.exit(EXIT_EMPTY_PLAYLIST)

    except ExportError as e:
        click.echo(f"Export error: {e.message}", err=True)
        logger.error(f"Export error: {e.message}", exc_info=True)
        sys.exit(EXIT_EXPORT_ERROR)

    except XspfToolsError as e:
        click.echo(f"Error: {e.message}", err=True)
        logger.error(f"Error: {e.message}", exc_info=True)
        sys.exit(EXIT_OTHER_ERROR)

    except KeyboardInterrupt:
        click.echo("\nInterrupted by user", err=True)
        logger.info("Interrupted by user")
        sys.exit(EXIT_INTERRUPTED)

    except Exception as e:
        click.echo(f"Unexpected error: {e}", err=True)
        logger.exception("Unexpected error")
        sys.exit(EXIT_UNEXPECTED_ERROR)

    finally:
        shutdown_logging()


def _setup_logging(config: Config, log_dir: Path | None, verbose: bool) -> None:
    """
    Configure logging from config and CLI overrides.

    Raises:
        ConfigError: If the log directory cannot be created.
    """
    directory = log_dir or config.logging.directory
    console_level = "DEBUG" if verbose else config.logging.console_level
    try:
        setup_logging(directory, console_level)
    except OSError as e:
        raise ConfigError(
            f"Cannot create log files in {directory}: {e.strerror or e}",
            details={"log_dir": str(directory), "original_error": str(e)}
        ) from e


if __name__ == "__main__":
    cli()
