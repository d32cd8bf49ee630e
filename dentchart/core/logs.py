from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_HANDLER_NAME = "dentchart"


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """Attach a single stderr handler to the ``dentchart`` logger.

    Safe to call more than once; later calls only change the level.
    """
    logger = logging.getLogger("dentchart")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)
    if not any(handler.get_name() == _HANDLER_NAME for handler in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger


__all__ = ["LOG_FORMAT", "configure_logging"]
