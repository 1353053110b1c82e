"""
Core module for xspf-tools.

This module provides the foundational components used throughout the application:
    - exceptions: Custom exception classes for fatal errors
    - config: Configuration loading and validation
    - logger: Logging system with console and file outputs

Usage:
    from xspf_tools.core import (
        Config, load_config,
        setup_logging, get_logger,
        XspfToolsError, ConfigError, EmptyPlaylistError
    )
"""

from xspf_tools.core.config import (
    Config,
    CopyConfig,
    ExtractorConfig,
    JsonConfig,
    LoggingConfig,
    load_config,
)
from xspf_tools.core.exceptions import (
    ConfigError,
    EmptyPlaylistError,
    ExportError,
    PlaylistReadError,
    XspfToolsError,
)
from xspf_tools.core.logger import (
    get_logger,
    log_copy_skip,
    setup_logging,
    shutdown_logging,
)

__all__ = [
    # Config
    "Config",
    "ExtractorConfig",
    "CopyConfig",
    "JsonConfig",
    "LoggingConfig",
    "load_config",
    # Exceptions
    "XspfToolsError",
    "ConfigError",
    "PlaylistReadError",
    "EmptyPlaylistError",
    "ExportError",
    # Logger
    "setup_logging",
    "get_logger",
    "log_copy_skip",
    "shutdown_logging",
]
