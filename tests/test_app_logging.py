"""Tests for logging configuration."""

import logging

from food_glucose_dashboard.app_logging import configure_logging


def test_configure_logging_idempotent() -> None:
    logger = logging.getLogger("food_glucose_dashboard")
    logger.handlers.clear()

    configure_logging()
    first_count = len(logger.handlers)

    configure_logging()
    second_count = len(logger.handlers)

    assert first_count == 1
    assert second_count == 1


def test_configure_logging_accepts_level_names() -> None:
    logger = logging.getLogger("food_glucose_dashboard")
    logger.handlers.clear()

    configured = configure_logging("debug")

    assert configured is logger
    assert logger.level == logging.DEBUG
    assert logger.propagate is False

    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
