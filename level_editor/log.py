from __future__ import annotations

import logging

from colorlog import ColoredFormatter

LOG_FORMAT = "%(log_color)s%(levelname)s%(reset)s %(name)s: %(message)s"

LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """
    Attach a coloured console handler to the root logger.
    Calling it again only updates the level.
    """
    logger = logging.getLogger()
    logger.setLevel(level)

    for handler in logger.handlers:
        if isinstance(handler.formatter, ColoredFormatter):
            return logger

    handler = logging.StreamHandler()
    handler.setFormatter(ColoredFormatter(LOG_FORMAT, log_colors=LOG_COLORS))
    logger.addHandler(handler)
    return logger
