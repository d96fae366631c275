"""Logging setup for registry commands."""

from __future__ import annotations

import logging

_LOGGER_NAME = "scripts.registry"


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Attach a console handler to the package logger.

    Handlers are replaced on every call so repeated CLI invocations in one
    process (tests) do not duplicate output.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("[registry] %(levelname)s %(message)s"))
    logger.addHandler(handler)

    return logger
