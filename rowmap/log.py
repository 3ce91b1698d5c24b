"""Logging configuration for the rowmap system."""

import logging
import logging.handlers
import sys
from pathlib import Path

import colorlog

from rowmap import config

LOG_FORMAT = "%(asctime)s %(levelname)8s %(message)s (%(name)s:%(lineno)d)"
COLOR_LOG_FORMAT = (
    "%(asctime)s %(log_color)s%(levelname)8s%(reset)s %(message)s "
    "\033[90m(%(name)s:%(lineno)d)\033[0m"
)
DATE_FORMAT = "%m-%d %H:%M:%S"

LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "red,bg_white",
}


def parse_level(level: int | str) -> int:
    """Convert a level name such as ``"debug"`` to its numeric value.

    Args:
        level: Numeric level or level name

    Returns:
        Numeric logging level

    Raises:
        ValueError: If the level name is unknown
    """
    if isinstance(level, int):
        return level

    value = logging.getLevelName(level.upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level}")
    return value


def setup_logging(
    level: int | str = logging.INFO,
    use_colors: bool = True,
    log_file: Path | None = None,
    rotate: bool = True,
) -> None:
    """Configure the root logger.

    Args:
        level: Logging level to use
        use_colors: Whether console output is colored
        log_file: Optional file receiving a plain copy of every record
        rotate: Rotate ``log_file`` at 5MB instead of overwriting it per run
    """
    handlers = [_console_handler(use_colors)]

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(_file_handler(log_file, rotate))

    logging.basicConfig(level=parse_level(level), handlers=handlers, force=True)


def _console_handler(use_colors: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)

    if use_colors:
        formatter: logging.Formatter = colorlog.ColoredFormatter(
            COLOR_LOG_FORMAT,
            datefmt=DATE_FORMAT,
            log_colors=LOG_COLORS,
            style="%",
        )
    else:
        formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    handler.setFormatter(formatter)
    return handler


def _file_handler(log_file: Path, rotate: bool) -> logging.Handler:
    handler: logging.Handler
    if rotate:
        handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=5 * 1024 * 1024,
            backupCount=4,
            encoding="utf-8",
        )
    else:
        handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")

    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def setup_production_logging(level: int | str | None = None) -> None:
    """Log to the console and to a rotating ``logs/rowmap.log``.

    Args:
        level: Logging level, ``settings.log_level`` when omitted
    """
    if level is None:
        level = config.settings.log_level
    setup_logging(level=level, log_file=Path("logs", "rowmap.log"), rotate=True)


def setup_test_logging(level: int | str = logging.DEBUG) -> None:
    """Log to the console and to ``logs/test/test.log``, overwritten per run."""
    setup_logging(
        level=level,
        log_file=Path("logs", "test", "test.log"),
        rotate=False,
    )
