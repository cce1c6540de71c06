"""Logging configuration for mcmeta-mojang.

Our own `mcmeta_mojang` logger and httpx's request logging share one set of
handlers. httpx request lines reach the console only in verbose mode,
httpcore connection traces only reach the log file, and warnings from either
library are always shown.
"""

import logging
import sys
from pathlib import Path


LOGGER_NAME = "mcmeta_mojang"

HTTP_LOGGERS = ("httpx", "httpcore")

CONSOLE_LEVELS = {-1: logging.WARNING, 0: logging.INFO, 1: logging.DEBUG}


class HttpConsoleFilter(logging.Filter):
    """Keep HTTP library chatter below WARNING off the console."""

    def __init__(self, verbose: bool):
        super().__init__()
        self.verbose = verbose

    def filter(self, record: logging.LogRecord) -> bool:
        library = record.name.split(".", 1)[0]
        if library not in HTTP_LOGGERS or record.levelno >= logging.WARNING:
            return True
        return self.verbose and library == "httpx"


def _reset(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def setup_logging(
    verbosity: int = 0,
    log_file: Path | None = None,
) -> logging.Logger:
    """Configure the mcmeta_mojang logger and route httpx logging beside it.

    Args:
        verbosity: -1 for quiet (WARNING+), 0 for normal (INFO), 1 for verbose (DEBUG)
        log_file: Optional path to write logs to file, always at DEBUG

    Returns:
        The mcmeta_mojang logger
    """
    verbosity = max(-1, min(1, verbosity))

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(CONSOLE_LEVELS[verbosity])
    if verbosity > 0:
        console_handler.setFormatter(logging.Formatter("%(levelname)s [%(name)s] %(message)s"))
    else:
        console_handler.setFormatter(logging.Formatter("%(message)s"))
    console_handler.addFilter(HttpConsoleFilter(verbose=verbosity > 0))
    handlers: list[logging.Handler] = [console_handler]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s [%(name)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
        handlers.append(file_handler)

    logger = logging.getLogger(LOGGER_NAME)
    _reset(logger)
    logger.setLevel(logging.DEBUG)
    for handler in handlers:
        logger.addHandler(handler)

    # Library records below WARNING are only worth creating when someone sees them
    http_level = logging.DEBUG if (verbosity > 0 or log_file) else logging.WARNING
    for name in HTTP_LOGGERS:
        http_logger = logging.getLogger(name)
        _reset(http_logger)
        http_logger.setLevel(http_level)
        http_logger.propagate = False
        for handler in handlers:
            http_logger.addHandler(handler)

    return logger


def get_logger() -> logging.Logger:
    """Get the mcmeta_mojang logger instance."""
    return logging.getLogger(LOGGER_NAME)
