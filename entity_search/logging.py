"""Logging setup shared by the CLI and host applications."""

import logging
import sys
from enum import Enum
from typing import TextIO

# Third-party loggers that log every request at INFO/DEBUG
CHATTY_LOGGERS = ("opensearch", "urllib3", "botocore", "aiohttp")


class LogLevel(Enum):
    """Logging level enumeration."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def setup_logging(
    level: str | LogLevel = LogLevel.INFO,
    format_string: str | None = None,
    include_timestamp: bool = True,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Configure the root logger.

    Library modules only create loggers; the application decides where records go.
    Third-party request logging is kept at WARNING unless a higher level is asked for.

    Args:
        level: Level name or LogLevel; unknown names fall back to INFO
        format_string: Custom format string (optional)
        include_timestamp: Prefix records with the time
        stream: Output stream (default: stdout)

    Returns:
        The "entity-search" application logger
    """
    level_name = level.value if isinstance(level, LogLevel) else level.upper()
    numeric_level = logging.getLevelNamesMapping().get(level_name, logging.INFO)

    if format_string is None:
        format_string = "%(name)s  %(levelname)s  %(message)s"
        if include_timestamp:
            format_string = f"%(asctime)s  {format_string}"

    logging.basicConfig(
        level=numeric_level,
        format=format_string,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=stream or sys.stdout,
        force=True,
    )

    for name in CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))

    return logging.getLogger("entity-search")


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a module (typically ``__name__``)."""
    return logging.getLogger(name)
