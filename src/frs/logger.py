"""
Logging setup for frs.

All log output goes to stderr so that stdout can be consumed by the shell
(``eval "$(frs run ...)"``, ``PS1='$(frs prompt)'``).
"""

import os
import sys

from loguru import logger as _logger

from frs.config import Config

_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan> - <level>{message}</level>"
)


def setup_logging(level: str | None = None) -> None:
    """Replace loguru's default sink with a stderr sink at the given level."""
    level = (level or os.getenv(Config.LOG_LEVEL_ENV) or "WARNING").upper()
    _logger.remove()
    _logger.configure(extra={"name": "frs"})
    # Look up sys.stderr per message; test runners swap it out
    _logger.add(
        lambda message: sys.stderr.write(message),
        level=level,
        format=_FORMAT,
        colorize=False,
    )


def get_logger(name: str):
    """Return a logger bound to the given module name."""
    return _logger.bind(name=name)
