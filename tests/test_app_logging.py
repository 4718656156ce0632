"""Tests for logging configuration."""

import logging

from gym_attendance.app_logging import configure_logging


def test_configure_logging_idempotent() -> None:
    logger = logging.getLogger("gym_attendance")
    logger.handlers.clear()

    configure_logging()
    first_count = len(logger.handlers)

    configure_logging()
    second_count = len(logger.handlers)

    assert first_count == 1
    assert second_count == 1
    assert logger.propagate is False


def test_configure_logging_applies_level_name() -> None:
    logger = logging.getLogger("gym_attendance")

    configure_logging("debug")

    assert logger.level == logging.DEBUG
    configure_logging()
    assert logger.level == logging.INFO
