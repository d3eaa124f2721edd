"""Tests for logging configuration."""

import json
import logging
from unittest.mock import patch

import pytest

from hdrlang.logging import JSONFormatter, get_logger, setup_logging


@pytest.fixture(autouse=True)
def reset_logger():
    """Leave the hdrlang logger as we found it."""
    yield
    logger = logging.getLogger("hdrlang")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


class TestJSONFormatter:
    """Tests for structured log output."""

    def test_includes_extra_fields(self):
        """Test extra fields end up in the JSON object."""
        record = logging.makeLogRecord(
            {
                "name": "hdrlang.classifier.engine",
                "levelname": "DEBUG",
                "msg": "Most likely language: %s",
                "args": ("C++",),
                "language": "c++",
                "confidence": 0.6,
            }
        )
        data = json.loads(JSONFormatter().format(record))
        assert data["message"] == "Most likely language: C++"
        assert data["logger"] == "hdrlang.classifier.engine"
        assert data["language"] == "c++"
        assert data["confidence"] == 0.6
        assert "args" not in data
        assert "msg" not in data


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_default_is_quiet(self):
        """Test only warnings reach the console by default."""
        logger = setup_logging()
        assert len(logger.handlers) == 1
        assert logger.handlers[0].level == logging.WARNING

    def test_verbose(self):
        """Test verbose mode logs debug output."""
        logger = setup_logging(verbose=True)
        assert logger.level == logging.DEBUG
        assert logger.handlers[0].level == logging.DEBUG

    def test_json_format(self):
        """Test JSON formatting on the console handler."""
        logger = setup_logging(json_format=True)
        assert isinstance(logger.handlers[0].formatter, JSONFormatter)

    def test_reconfigure_replaces_handlers(self):
        """Test calling setup twice does not duplicate handlers."""
        setup_logging()
        logger = setup_logging()
        assert len(logger.handlers) == 1

    def test_log_to_file(self, tmp_path):
        """Test a file handler is added under the config dir."""
        with patch("hdrlang.logging.get_config_dir", return_value=tmp_path):
            logger = setup_logging(log_to_file=True)
        assert len(logger.handlers) == 2
        assert (tmp_path / "logs").is_dir()

    def test_get_logger(self):
        """Test child logger naming."""
        assert get_logger().name == "hdrlang"
        assert get_logger("resolver").name == "hdrlang.resolver"
