"""
Logging Setup.

Every package logger lives under the ``fiscal_qr`` namespace, so a single
setup_logger() call configures the pipeline, the adapters and the CLI.
Console records are coloured by level through colorama; a size-rotated log
file is optional.

Usage:
    from fiscal_qr.utils.logger import setup_logger, get_logger

    setup_logger(level="DEBUG")
    logger = get_logger(__name__)
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

# Colour is optional; records stay plain without colorama
try:
    import colorama
    from colorama import Fore, Style
    colorama.init()
    COLORAMA_AVAILABLE = True
except ImportError:
    COLORAMA_AVAILABLE = False

ROOT_LOGGER_NAME = "fiscal_qr"

DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_MAX_BYTES = 10 * 1024 * 1024
DEFAULT_BACKUP_COUNT = 5


def _level_colors():
    if not COLORAMA_AVAILABLE:
        return {}
    return {
        logging.DEBUG: Fore.CYAN,
        logging.INFO: Fore.GREEN,
        logging.WARNING: Fore.YELLOW,
        logging.ERROR: Fore.RED,
        logging.CRITICAL: Fore.RED + Style.BRIGHT,
    }


class ColoredFormatter(logging.Formatter):
    """Wraps each console record in the colour of its level."""

    LEVEL_COLORS = _level_colors()

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = self.LEVEL_COLORS.get(record.levelno)
        if not color:
            return message
        return f"{color}{message}{Style.RESET_ALL}"


def _console_handler(level: int, formatter: logging.Formatter) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _file_handler(
    path: str,
    level: int,
    formatter: logging.Formatter,
    max_bytes: int,
    backup_count: int
) -> logging.Handler:
    log_path = Path(path)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding='utf-8'
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logger(
    level: str = "INFO",
    log_format: Optional[str] = None,
    date_format: Optional[str] = None,
    log_file: Optional[str] = None,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
    colorize: bool = True,
    quiet: bool = False
) -> logging.Logger:
    """
    Configure the ``fiscal_qr`` logger tree.

    Calling it again replaces the previous handlers.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Record format; DEFAULT_FORMAT when None.
        date_format: asctime format; DEFAULT_DATE_FORMAT when None.
        log_file: Rotating log file path, or None for console only.
        max_bytes: Size at which the log file rotates.
        backup_count: Rotated files kept.
        colorize: Colour console records by level.
        quiet: Attach no console handler.

    Returns:
        The ``fiscal_qr`` logger.
    """
    numeric_level = getattr(logging, str(level).upper(), logging.INFO)
    log_format = log_format or DEFAULT_FORMAT
    date_format = date_format or DEFAULT_DATE_FORMAT

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(numeric_level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    plain = logging.Formatter(log_format, datefmt=date_format)

    if not quiet:
        if colorize and COLORAMA_AVAILABLE:
            console_formatter = ColoredFormatter(log_format, datefmt=date_format)
        else:
            console_formatter = plain
        logger.addHandler(_console_handler(numeric_level, console_formatter))

    if log_file:
        logger.addHandler(
            _file_handler(log_file, numeric_level, plain, max_bytes, backup_count)
        )

    logger.debug(
        f"Logging initialized (level={logging.getLevelName(numeric_level)}, "
        f"file={log_file or 'disabled'})"
    )
    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Logger for a module, placed under the ``fiscal_qr`` namespace.

    Example:
        >>> get_logger("fiscal_qr.pipeline.pipeline").name
        'fiscal_qr.pipeline.pipeline'
        >>> get_logger("main").name
        'fiscal_qr.main'
    """
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def setup_logger_from_config(quiet: bool = False) -> logging.Logger:
    """Configure logging from the ``logging`` section of settings.yaml."""
    from config import get_config

    log_file = None
    if get_config("logging.file.enabled", False):
        log_file = get_config("logging.file.path")

    return setup_logger(
        level=get_config("logging.level", "INFO"),
        log_format=get_config("logging.format"),
        date_format=get_config("logging.date_format"),
        log_file=log_file,
        max_bytes=int(get_config("logging.file.max_bytes", DEFAULT_MAX_BYTES)),
        backup_count=int(get_config("logging.file.backup_count", DEFAULT_BACKUP_COUNT)),
        colorize=bool(get_config("logging.console.colorize", True)),
        quiet=quiet
    )
