import logging

import pytest

from vector_scene_renderer.logging_config import PACKAGE_LOGGER


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by setup_logging so tests stay isolated."""
    yield
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
