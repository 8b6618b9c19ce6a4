"""Logging helpers shared by every postboard module."""

import logging
import sys
from typing import Union

ROOT_LOGGER_NAME = "postboard"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_HANDLER_MARKER = "_postboard_handler"


def get_logger(name: str) -> logging.Logger:
    """Return a module logger under the ``postboard`` namespace."""
    if name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(level: Union[str, int] = "WARNING") -> logging.Logger:
    """
    Install a single stderr handler on the package logger.
    
    Calling this more than once only updates the level.
    
    Args:
        level: Level name (e.g. "INFO") or numeric level
        
    Returns:
        The configured package logger
    """
    if isinstance(level, str):
        level = level.upper()
    
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(level)
    
    if not any(getattr(h, _HANDLER_MARKER, False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        setattr(handler, _HANDLER_MARKER, True)
        root.addHandler(handler)
    
    return root
