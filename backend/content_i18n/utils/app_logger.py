"""
Logging setup for the content translation service.

Modules log through ``logging.getLogger(__name__)``; the app factory calls
``configure_logging`` once.
"""

import logging
import sys
from typing import Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Chatty third-party loggers and the lowest level they may log at
_NOISY_LOGGERS = {
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "aiosqlite": logging.INFO,
}


def _resolve_level(level: Union[str, int, None]) -> int:
    if isinstance(level, int):
        return level
    if not level:
        return logging.INFO
    return getattr(logging, str(level).upper(), logging.INFO)


def _stdout_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    return handler


def configure_logging(level: str = "INFO") -> None:
    """Set the root level and attach a stdout handler if none exists."""
    log_level = _resolve_level(level)
    logging.root.setLevel(log_level)
    if not logging.root.handlers:
        logging.root.addHandler(_stdout_handler(log_level))

    # One httpx INFO line per translated string is noise
    for name, floor in _NOISY_LOGGERS.items():
        logging.getLogger(name).setLevel(max(log_level, floor))
