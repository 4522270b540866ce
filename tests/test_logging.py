"""Tests for logging configuration."""

import io
import logging

import pytest

from tasmee._logging import configure_logging, disable_logging
from tasmee.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def restore_logger():
    yield
    disable_logging()
    logging.getLogger("tasmee").setLevel(logging.NOTSET)


def test_configure_logging_accepts_level_name():
    stream = io.StringIO()
    logger = configure_logging("debug", stream=stream)

    assert logger.level == logging.DEBUG
    logger.debug("hello")
    assert "hello" in stream.getvalue()


def test_configure_logging_rejects_unknown_level_name():
    with pytest.raises(ConfigurationError) as excinfo:
        configure_logging("VERBOSE")

    assert excinfo.value.setting_name == "log_level"
