"""Logging setup for the ax namespace."""

import logging
import sys

ROOT_LOGGER_NAME = "ax"


def setup_logging(level: str = "WARNING") -> logging.Logger:
    """Configure and return the root ax logger.

    Calling this more than once adjusts the level and rebinds the existing
    handler to the current stderr.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    if logger.handlers:
        for existing in logger.handlers:
            if isinstance(existing, logging.StreamHandler):
                existing.setStream(sys.stderr)
        return logger

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(
        "%(asctime)s [%(levelname)-8s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    ))
    logger.addHandler(handler)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a child logger under the ax namespace."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
