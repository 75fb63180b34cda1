"""
Logging Configuration

One stderr handler for the package loggers and the running script, so
stdout stays free for the stage summaries. A run log file can be added
for long keyword research sessions.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

LOGGER_NAME = "listing_refresh"
SCRIPT_LOGGER_NAME = "__main__"
LOG_FORMAT = "%(levelname)-8s %(name)s: %(message)s"
FILE_LOG_FORMAT = "%(asctime)s " + LOG_FORMAT

# Chatty dependencies kept at WARNING unless --verbose
_NOISY_LOGGERS = ("urllib3", "asyncio")


def setup_logging(
    verbose: bool = False,
    quiet: bool = False,
    log_file: Optional[str | Path] = None,
) -> None:
    """
    Configure the package and script loggers.

    Args:
        verbose: DEBUG level, including HTTP connection logs
        quiet: WARNING level
        log_file: Also append records (with timestamps) to this file
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    handlers = []

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(logging.Formatter(LOG_FORMAT))
    handlers.append(console)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
        handlers.append(file_handler)

    for name in (LOGGER_NAME, SCRIPT_LOGGER_NAME):
        logger = logging.getLogger(name)
        logger.setLevel(level)
        # Repeated calls replace handlers instead of stacking them
        for old in list(logger.handlers):
            logger.removeHandler(old)
            old.close()
        for handler in handlers:
            logger.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if verbose else logging.WARNING)
