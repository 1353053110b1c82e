"""
Configuration management for xspf-tools.

This module handles loading, validating, and providing access to the
optional configuration stored in xspf_tools.yaml.

The configuration file contains:
    - Filename grammar settings for the metadata extractor
    - Naming and copy behavior for the copy export
    - Formatting of the JSON export
    - Log file directory and console verbosity

Configuration File Location:
    Passed explicitly with --config, or xspf_tools.yaml in the current
    working directory. The file is optional: without it every setting
    takes its default value.

Example xspf_tools.yaml:
    extractor:
      max_sequence_digits: 3
      date_from_directory: true

    copy:
      position_width: 3
      preserve_timestamps: true

    json:
      indent: 2

    logging:
      directory: null   # Optional: write log files here
      console_level: INFO
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from xspf_tools.core.exceptions import ConfigError


# Default configuration file name (looked up in current working directory)
CONFIG_FILENAME = "xspf_tools.yaml"

_CONSOLE_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass(frozen=True)
class ExtractorConfig:
    """
    Filename metadata extractor settings.

    Attributes:
        max_sequence_digits: Longest all-digit token still treated as a
                             sequence number. Default: 3.
        date_from_directory: Fall back to the parent directory name for the
                             date when the filename has none. Default: True.
    """
    max_sequence_digits: int = 3
    date_from_directory: bool = True


@dataclass(frozen=True)
class CopyConfig:
    """
    Copy export settings.

    Attributes:
        position_width: Minimum zero-padding of the position prefix.
                        Widened automatically for longer playlists.
        preserve_timestamps: Copy file timestamps and permission bits
                             along with the data (shutil.copystat).
    """
    position_width: int = 3
    preserve_timestamps: bool = True


@dataclass(frozen=True)
class JsonConfig:
    """
    JSON export settings.

    Attributes:
        indent: Indentation of the exported document. 0 writes the whole
                array on a single line.
    """
    indent: int = 2


@dataclass(frozen=True)
class LoggingConfig:
    """
    Logging settings.

    Attributes:
        directory: Directory for log files, or None for console only.
        console_level: Minimum level shown on the console.
    """
    directory: Path | None = None
    console_level: str = "INFO"


@dataclass(frozen=True)
class Config:
    """
    Complete application configuration.

    Created by load_config() and treated as immutable.

    Example:
        config = load_config()
        print(f"Padding copy positions to {config.copy.position_width} digits")
    """
    extractor: ExtractorConfig = field(default_factory=ExtractorConfig)
    copy: CopyConfig = field(default_factory=CopyConfig)
    json: JsonConfig = field(default_factory=JsonConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(config_path: Path | None = None) -> Config:
    """
    Load and validate configuration from xspf_tools.yaml.

    Args:
        config_path: Optional explicit path to config file. It must exist.
                     If None, xspf_tools.yaml in the current working
                     directory is used when present.

    Returns:
        Config: A frozen dataclass containing all configuration values.
                All defaults when no file is found.

    Raises:
        ConfigError: If an explicit file is missing, the file cannot be
                     read, has invalid YAML syntax, or contains invalid
                     values.

    Example:
        try:
            config = load_config()
        except ConfigError as e:
            print(f"Configuration error: {e.message}")
            sys.exit(1)
    """
    if config_path is None:
        config_path = Path.cwd() / CONFIG_FILENAME
        if not config_path.exists():
            return Config()
    elif not config_path.exists():
        raise ConfigError(
            f"Configuration file not found: {config_path}",
            details={"file_path": str(config_path)}
        )

    # Read file content
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            content = f.read()
    except OSError as e:
        raise ConfigError(
            f"Failed to read configuration file: {e}",
            details={"file_path": str(config_path), "original_error": str(e)}
        ) from e

    # Parse YAML
    try:
        raw_config = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(
            f"Invalid YAML syntax in configuration file: {e}",
            details={"file_path": str(config_path), "original_error": str(e)}
        ) from e

    # An empty file is a valid, all-defaults configuration
    if raw_config is None:
        return Config()

    if not isinstance(raw_config, dict):
        raise ConfigError(
            "Configuration file must contain a YAML dictionary",
            details={"file_path": str(config_path)}
        )

    return Config(
        extractor=_parse_extractor_config(_section(raw_config, "extractor")),
        copy=_parse_copy_config(_section(raw_config, "copy")),
        json=_parse_json_config(_section(raw_config, "json")),
        logging=_parse_logging_config(_section(raw_config, "logging")),
    )


def _section(raw_config: dict[str, Any], name: str) -> dict[str, Any]:
    """
    Return a config section as a dictionary ({} if absent).

    Raises:
        ConfigError: If the section is present but not a dictionary.
    """
    section = raw_config.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigError(
            f"Section '{name}' must be a dictionary",
            details={"section": name}
        )
    return section


def _int_in_range(section: dict[str, Any], key: str, name: str,
                  default: int, low: int, high: int) -> int:
    value = section.get(key)
    if value is None:
        return default
    # bool is an int subclass, but `indent: true` is a mistake
    if isinstance(value, bool) or not isinstance(value, int) or not low <= value <= high:
        raise ConfigError(
            f"'{name}.{key}' must be an integer between {low} and {high}",
            details={"field": f"{name}.{key}", "value": value}
        )
    return value


def _bool(section: dict[str, Any], key: str, name: str, default: bool) -> bool:
    value = section.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ConfigError(
            f"'{name}.{key}' must be true or false",
            details={"field": f"{name}.{key}", "value": value}
        )
    return value


def _parse_extractor_config(section: dict[str, Any]) -> ExtractorConfig:
    return ExtractorConfig(
        max_sequence_digits=_int_in_range(section, "max_sequence_digits", "extractor", 3, 1, 9),
        date_from_directory=_bool(section, "date_from_directory", "extractor", True),
    )


def _parse_copy_config(section: dict[str, Any]) -> CopyConfig:
    return CopyConfig(
        position_width=_int_in_range(section, "position_width", "copy", 3, 1, 9),
        preserve_timestamps=_bool(section, "preserve_timestamps", "copy", True),
    )


def _parse_json_config(section: dict[str, Any]) -> JsonConfig:
    return JsonConfig(indent=_int_in_range(section, "indent", "json", 2, 0, 8))


def _parse_logging_config(section: dict[str, Any]) -> LoggingConfig:
    """
    Parse and validate the logging configuration section.

    Expands ~ in the log directory. Does NOT create the directory (that
    happens in setup_logging()).

    Raises:
        ConfigError: If directory is not a string or console_level is not
                     a known level name.
    """
    directory = None
    raw_directory = section.get("directory")
    if raw_directory is not None:
        if not isinstance(raw_directory, str) or not raw_directory.strip():
            raise ConfigError(
                "'logging.directory' must be a non-empty string or null",
                details={"field": "logging.directory"}
            )
        directory = Path(raw_directory.strip()).expanduser().resolve()

    console_level = section.get("console_level", "INFO")
    if not isinstance(console_level, str) or console_level.upper() not in _CONSOLE_LEVELS:
        raise ConfigError(
            f"'logging.console_level' must be one of {', '.join(_CONSOLE_LEVELS)}",
            details={"field": "logging.console_level", "value": console_level}
        )

    return LoggingConfig(directory=directory, console_level=console_level.upper())
