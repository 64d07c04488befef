"""Logging configuration driven by the --verbosity option."""

import logging
import os
import sys

LOG_ENV_VAR = "GISS_LOG"
LOG_FORMAT = "%(levelname)s: %(message)s"

# 0 disables logging entirely
VERBOSITY_LEVELS = {
    0: logging.CRITICAL + 1,
    1: logging.ERROR,
    2: logging.WARNING,
    3: logging.INFO,
    4: logging.DEBUG,
    5: logging.DEBUG,
}

_HANDLER_NAME = "giss-stderr"


def level_for_verbosity(verbosity: int) -> int:
    """Map a verbosity of 0-5 to a logging level.

    Raises:
        ValueError: If verbosity is outside 0-5
    """
    if verbosity not in VERBOSITY_LEVELS:
        raise ValueError(f"Unsupported verbosity level '{verbosity}'")
    return VERBOSITY_LEVELS[verbosity]


def level_from_env() -> int | None:
    """Level named by GISS_LOG (e.g. ``debug``), or None when unset or unknown."""
    value = os.getenv(LOG_ENV_VAR)
    if not value:
        return None
    level = logging.getLevelName(value.strip().upper())
    return level if isinstance(level, int) else None


def _get_handler(logger: logging.Logger) -> logging.Handler:
    for handler in logger.handlers:
        if handler.get_name() == _HANDLER_NAME:
            return handler
    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return handler


def setup_logging(verbosity: int = 1) -> int:
    """Send giss logs to stderr at the level chosen by ``verbosity``.

    GISS_LOG, when set to a level name, overrides the verbosity. Verbosity 5
    also turns on debug output from httpx and httpcore. Calling this again
    only adjusts the level.

    Returns:
        The effective logging level
    """
    env_level = level_from_env()
    level = env_level if env_level is not None else level_for_verbosity(verbosity)

    logger = logging.getLogger("giss")
    handler = _get_handler(logger)
    logger.setLevel(level)

    for name in ("httpx", "httpcore"):
        http_logger = logging.getLogger(name)
        if verbosity >= 5:
            http_logger.setLevel(logging.DEBUG)
            if handler not in http_logger.handlers:
                http_logger.addHandler(handler)
        else:
            http_logger.setLevel(logging.WARNING)

    return level
