"""Tests for logging setup."""

import logging

import pytest

from vector_scene_renderer.logging_config import setup_logging, PACKAGE_LOGGER


@pytest.fixture
def package_logger():
    return logging.getLogger(PACKAGE_LOGGER)


def test_repeated_setup_does_not_duplicate_handlers(package_logger):
    setup_logging(logging.DEBUG)
    setup_logging(logging.DEBUG)
    assert len(package_logger.handlers) == 1
    assert package_logger.level == logging.DEBUG


def test_file_handler(package_logger, tmp_path):
    log_file = tmp_path / 'render.log'
    setup_logging(logging.INFO, str(log_file))
    logging.getLogger('vector_scene_renderer.renderer').info('hello frame')
    for handler in package_logger.handlers:
        handler.flush()
    assert len(package_logger.handlers) == 2
    assert 'hello frame' in log_file.read_text()
