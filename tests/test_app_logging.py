"""Tests for logging configuration."""

import logging

import pytest

from peptide_tracker.api.app import create_app
from peptide_tracker.app_logging import LOG_FORMAT, configure_logging


@pytest.fixture
def package_logger():
    logger = logging.getLogger("peptide_tracker")
    saved = (list(logger.handlers), logger.level, logger.propagate)
    logger.handlers.clear()
    yield logger
    logger.handlers[:], logger.level, logger.propagate = saved


def test_configure_logging_adds_one_handler(package_logger) -> None:
    configure_logging()
    configure_logging()

    assert len(package_logger.handlers) == 1
    assert package_logger.handlers[0].formatter._fmt == LOG_FORMAT
    assert package_logger.propagate is False


def test_configure_logging_updates_level(package_logger) -> None:
    configure_logging("WARNING")
    assert package_logger.level == logging.WARNING

    configure_logging("DEBUG")
    assert package_logger.level == logging.DEBUG
    assert len(package_logger.handlers) == 1


def test_app_uses_configured_level(package_logger, container) -> None:
    container.settings.log_level = "ERROR"
    create_app(container)

    assert package_logger.level == logging.ERROR
