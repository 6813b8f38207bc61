"""Global pytest configuration."""

import logging

import pytest


@pytest.fixture(autouse=True)
def reset_textmatch_logging():
    """Drop handlers installed by configure_logging() between tests."""
    yield
    logger = logging.getLogger("textmatch")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
