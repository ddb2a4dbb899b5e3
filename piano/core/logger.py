"""
Logging configuration for piano-client.

The library itself only ever calls get_logger(); it attaches no handlers
and stays silent until the application opts in with setup_logging().

setup_logging() configures the 'piano' logger with:
    - Console: colored, compact records at the requested level
    - log_full_{timestamp}.log: every record (DEBUG and above)
    - log_errors_{timestamp}.log: only ERROR and CRITICAL records

The two files are only created when a log directory is given.

Usage:
    from piano.core.logger import setup_logging, get_logger

    setup_logging("DEBUG", Path("~/.piano").expanduser())  # once, at startup
    logger = get_logger(__name__)

    logger.debug("POST getStations")
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import TextIO


LIBRARY_LOGGER_NAME = "piano"

LOG_FULL_FILENAME = "log_full"
LOG_ERRORS_FILENAME = "log_errors"

# Log format for file output (detailed with timestamp)
FILE_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


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
    Formatter that prefixes each console record with a colored level name.

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
        colored_levelname = f"{color}{record.levelname}{Colors.RESET}"
        message = f"{colored_levelname}: {record.getMessage()}"
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return message


class ErrorOnlyFilter(logging.Filter):
    """
    Filter that only allows ERROR and CRITICAL level records.

    Used by the error log file handler to exclude DEBUG, INFO, and WARNING.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= logging.ERROR


def setup_logging(
    level: str = "INFO",
    log_dir: Path | None = None,
    stream: TextIO = sys.stderr
) -> logging.Logger:
    """
    Configure the 'piano' logger.

    Calling it again replaces the handlers installed by the previous call.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_dir: Directory for the full and error-only log files. Created
                 if missing. None disables file logging.
        stream: Console stream. Defaults to stderr.

    Returns:
        The configured 'piano' logger.

    Thread Safety:
        This function is NOT thread-safe. Call it once from the main
        thread before using any client.
    """
    logger = logging.getLogger(LIBRARY_LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    _remove_handlers(logger)

    console_handler = logging.StreamHandler(stream)
    console_handler.setLevel(getattr(logging, level.upper()))
    console_handler.setFormatter(ColoredConsoleFormatter())
    logger.addHandler(console_handler)

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")

        full_handler = logging.FileHandler(
            log_dir / f"{LOG_FULL_FILENAME}_{timestamp}.log", mode="w", encoding="utf-8"
        )
        full_handler.setLevel(logging.DEBUG)
        full_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, FILE_DATE_FORMAT))
        logger.addHandler(full_handler)

        error_handler = logging.FileHandler(
            log_dir / f"{LOG_ERRORS_FILENAME}_{timestamp}.log", mode="w", encoding="utf-8"
        )
        error_handler.setLevel(logging.DEBUG)  # Filter handles the level restriction
        error_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, FILE_DATE_FORMAT))
        error_handler.addFilter(ErrorOnlyFilter())
        logger.addHandler(error_handler)

    # Records stop here instead of reaching the application's root handlers twice
    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: The logger name, typically __name__ of the calling module.
              This creates a hierarchy like 'piano.radio.client'.

    Returns:
        logging.Logger: A logger instance, configured by setup_logging()
        if the application called it.
    """
    return logging.getLogger(name)


def shutdown_logging() -> None:
    """
    Flush, close and detach every handler installed by setup_logging().

    Safe to call when setup_logging() was never called.
    """
    logger = logging.getLogger(LIBRARY_LOGGER_NAME)
    _remove_handlers(logger)
    logger.propagate = True


def _remove_handlers(logger: logging.Logger) -> None:
    for handler in logger.handlers[:]:
        try:
            handler.flush()
            handler.close()
        except (OSError, ValueError):
            pass
        logger.removeHandler(handler)
