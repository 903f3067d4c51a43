"""Pytest configuration for note_markdown tests."""

import logging

import pytest

from note_markdown.domain.document import ConversionState
from note_markdown.domain.registry import LinkRegistry


@pytest.fixture
def state():
    """Fresh conversion state with an empty registry."""
    return ConversionState(registry=LinkRegistry())


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers the CLI attaches so each test starts unconfigured."""
    yield
    logger = logging.getLogger("note_markdown")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
