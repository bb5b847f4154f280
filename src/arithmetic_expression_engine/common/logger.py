"""Shared logger for the arithmetic expression engine."""
import logging
import sys

LOGGER_NAME = "arithmetic_expression_engine"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"

logger: logging.Logger = logging.getLogger(LOGGER_NAME)


def configure_logging(level: str = "INFO") -> None:
    """
    Attach a single stream handler to the engine logger.

    Calling it again only updates the level, so handlers are never duplicated.

    :param str level: Logging level name (DEBUG, INFO, WARNING, ERROR)
    """
    logger.setLevel(level.upper())
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
