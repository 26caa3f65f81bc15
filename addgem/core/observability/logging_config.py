"""
Logging configuration for the add-gem CLI.

Only the ``addgem`` logger tree is configured; the root logger and any
host application's handlers are left alone. What the user is meant to
read goes through click; these diagnostics go to stderr.

Level precedence:
    --debug  >  --verbose  >  --quiet  >  ADDGEM_LOG_LEVEL  >  WARNING

ADDGEM_LOG_FILE adds a file handler at ADDGEM_LOG_FILE_LEVEL (default DEBUG).
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping

LOGGER_NAME = "addgem"

_CONSOLE_HANDLER = "addgem-console"
_FILE_HANDLER = "addgem-file"

_FORMATS = {
    logging.DEBUG: "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s",
    logging.INFO: "%(asctime)s [%(name)s] %(message)s",
}
_FILE_FORMAT = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"


def configure_logging(
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    env: Mapping[str, str] | None = None,
) -> int:
    """Set up ``addgem`` logging from the CLI flags and environment.

    Safe to call more than once: handlers from an earlier call are replaced.

    Returns:
        The console level that was applied.
    """
    environ = os.environ if env is None else env

    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    elif quiet:
        level = logging.ERROR
    else:
        level = level_from_name(environ.get("ADDGEM_LOG_LEVEL"))

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if handler.get_name() in (_CONSOLE_HANDLER, _FILE_HANDLER):
            logger.removeHandler(handler)
            handler.close()

    console = logging.StreamHandler()
    console.set_name(_CONSOLE_HANDLER)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(_FORMATS.get(level, "%(message)s"), datefmt="%H:%M:%S"))
    logger.addHandler(console)

    logger_level = level
    log_file = environ.get("ADDGEM_LOG_FILE")
    if log_file:
        file_level = level_from_name(environ.get("ADDGEM_LOG_FILE_LEVEL"), default=logging.DEBUG)
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.set_name(_FILE_HANDLER)
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(fh)
        logger_level = min(level, file_level)

    logger.setLevel(logger_level)
    # Our handlers already cover it; don't double-print through root.
    logger.propagate = False
    return level


def level_from_name(name: str | None, default: int = logging.WARNING) -> int:
    """Level name → numeric constant; unknown or empty names give ``default``."""
    if not name:
        return default
    numeric = logging.getLevelName(name.strip().upper())
    return numeric if isinstance(numeric, int) else default
