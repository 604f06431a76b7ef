"""Logging setup for command line entry points."""

import logging
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_handler: Optional[logging.Handler] = None


def configure_logging(level: Union[int, str] = logging.INFO, fmt: Optional[str] = None) -> None:
    """Install a stream handler on the root logger.

    Library modules only create module-level loggers; applications decide
    where the records go. Calling this twice replaces the level but does not
    stack handlers.

    Args:
        level: Logging level name or number.
        fmt: Optional format string, defaults to LOG_FORMAT.
    """
    global _handler

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    if _handler is None:
        _handler = logging.StreamHandler()
    _handler.setFormatter(logging.Formatter(fmt or LOG_FORMAT))
    if _handler not in root_logger.handlers:
        root_logger.addHandler(_handler)
