"""Logging configuration helpers."""

import logging
from typing import Union


def configure_logging(level: Union[str, int] = logging.INFO) -> logging.Logger:
    """Configure package logging with a single stream handler."""
    logger = logging.getLogger("food_glucose_dashboard")
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    if logger.handlers:
        return logger
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s: %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
