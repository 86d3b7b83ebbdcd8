# MIT License (see LICENSE)
"""
Logging configuration.

The library only creates module loggers under the ``cloth_sim`` namespace;
applications (examples, benchmarks) call setup_logging() to see them.

Quad contacts log a DEBUG line every time new pins are created, which at
DEBUG level drowns everything else once a cloth lands on a table. Those
records stay off unless ``contacts=True``.
"""
from __future__ import annotations
import logging
import sys

from .constants import LOGGER_NAME, LOG_FORMAT, LOG_DATEFMT

_CONTACT_LOGGER = f"{LOGGER_NAME}.collision.contact"


def setup_logging(
    level: int = logging.INFO,
    log_file: str | None = None,
    contacts: bool = False,
) -> logging.Logger:
    """
    Attach handlers to the ``cloth_sim`` logger.

    Calling it again replaces the previous handlers.

    Args:
        level: Level for the package logger and its handlers.
        log_file: Optional path that also receives every record.
        contacts: Keep per-step quad contact messages at ``level``.

    Returns:
        The package logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))
    for h in handlers:
        h.setLevel(level)
        h.setFormatter(formatter)
        logger.addHandler(h)

    contact_logger = logging.getLogger(_CONTACT_LOGGER)
    contact_logger.setLevel(logging.NOTSET if contacts else max(level, logging.INFO))

    logger.debug("Logging initialized (level=%s, file=%s)", logging.getLevelName(level), log_file)
    return logger
