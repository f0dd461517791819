"""Logging setup for the lolstats API: one stdout handler, level from LOG_LEVEL."""

import logging
import sys
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# aiohttp/asyncio : bruit de connexion ; uvicorn.access : doublon du middleware
QUIET_LOGGERS = ("aiohttp", "asyncio", "uvicorn.access")


def resolve_level(level: Union[str, int, None]) -> int:
    """Map "debug", "WARNING", 10... to a logging level; unknown values fall back to INFO."""
    if isinstance(level, int):
        return level
    if not level:
        return logging.INFO
    value = getattr(logging, level.strip().upper(), None)
    return value if isinstance(value, int) else logging.INFO


def setup_logging(level: Union[str, int, None] = None) -> int:
    """
    Configure logging for the whole process and return the effective level.

    Safe to call twice: the bootstrap runs it with the default level so that a
    configuration error can be reported, then again once Settings.LOG_LEVEL is
    known. Only the first call installs the handler.
    """
    log_level = resolve_level(level)

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger().setLevel(log_level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(logging.WARNING, log_level))
    logging.getLogger("lolstats").setLevel(log_level)

    logging.getLogger("lolstats.logging_config").debug(
        f"Logging at level {logging.getLevelName(log_level)}"
    )
    return log_level


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name or "lolstats")
