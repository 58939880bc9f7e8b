"""Central logging configuration for the email builder."""
from __future__ import annotations

import logging
from typing import Optional, Union

_DEFAULT_LEVEL = logging.INFO
_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_PACKAGE_LOGGER = "email_builder"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-level logger with default configuration applied."""
    logger = logging.getLogger(name)
    if not logging.getLogger().handlers:
        logging.basicConfig(level=_DEFAULT_LEVEL, format=_LOG_FORMAT)
    return logger


def set_level(level: Union[int, str]) -> None:
    """Adjust verbosity for every logger under the package namespace."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logging.getLogger(_PACKAGE_LOGGER).setLevel(level)
