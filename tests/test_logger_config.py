"""Tests for logger configuration functionality."""

import sys
from io import StringIO
from unittest.mock import patch

import pytest
from loguru import logger

from ctrf_reporter.logger_config import format_path_for_log, get_logger, setup_logger


class TestLoggerConfig:
    """Test cases for logger configuration."""

    def setup_method(self):
        logger.remove()
        logger.configure(patcher=None)

    def teardown_method(self):
        # Remove all handlers and restore default
        logger.remove()
        logger.add(sys.stderr)
        logger.configure(patcher=None)

    def test_setup_logger_writes_to_stream(self):
        stream = StringIO()
        with patch("ctrf_reporter.logger_config.settings") as mock_settings:
            mock_settings.log_level = "INFO"
            mock_settings.log_file = None

            setup_logger(stream=stream)
            get_logger(__name__).info("report written")
            get_logger(__name__).debug("hidden")

        output = stream.getvalue()
        assert "report written" in output
        assert "hidden" not in output
        assert "test_logger_config.py" in output

    def test_setup_logger_with_file_output(self, tmp_path):
        log_file = tmp_path / "logs" / "ctrf.log"
        with patch("ctrf_reporter.logger_config.settings") as mock_settings:
            mock_settings.log_level = "INFO"
            mock_settings.log_file = None

            setup_logger(log_level="DEBUG", log_file=str(log_file), stream=StringIO())
            get_logger(__name__).debug("to file")
            logger.remove()

        assert log_file.exists()
        assert "to file" in log_file.read_text()

    def test_setup_logger_invalid_level(self):
        with pytest.raises(ValueError, match="Invalid log level 'LOUD'"):
            setup_logger(log_level="LOUD", stream=StringIO())

    def test_setup_logger_without_file_info(self):
        stream = StringIO()
        with patch("ctrf_reporter.logger_config.settings") as mock_settings:
            mock_settings.log_level = "INFO"
            mock_settings.log_file = None

            setup_logger(include_file_info=False, stream=stream)
            get_logger("ctrf").warning("plain")

        assert "plain" in stream.getvalue()


def test_format_path_for_log_trims_package_root():
    import ctrf_reporter.reporter as reporter_module

    assert format_path_for_log(reporter_module.__file__) == "ctrf_reporter/reporter.py"


def test_format_path_for_log_keeps_foreign_paths(tmp_path):
    foreign = tmp_path / "elsewhere.py"
    assert format_path_for_log(str(foreign)) == str(foreign.resolve())
