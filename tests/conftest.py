"""
Pytest configuration and fixtures for ctrf-reporter tests.
"""

import sys
from pathlib import Path

# Ensure 'src' directory is on sys.path so 'ctrf_reporter' package is importable everywhere
_repo_root = Path(__file__).resolve().parents[1]
_src_path = _repo_root / "src"
if str(_src_path) not in sys.path:
    sys.path.insert(0, str(_src_path))

from unittest.mock import Mock

import pytest
from loguru import logger

from ctrf_reporter.filesystem import LocalFilesystem
from ctrf_reporter.reporter import GenerateCtrfReport
from ctrf_reporter.reporter_config import RunConfiguration


@pytest.fixture
def mock_on():
    """Stand-in for the runner's ``on(event_name, handler)`` function."""
    return Mock()


@pytest.fixture
def mock_fs():
    """Filesystem double: the output directory exists, reads return fixed bytes."""
    fs = Mock(spec=LocalFilesystem)
    fs.exists.return_value = True
    fs.read_binary.side_effect = lambda path: f"image-bytes:{path}".encode()
    return fs


@pytest.fixture
def make_reporter(mock_on, mock_fs):
    """Factory building a reporter over the mock subscription and filesystem."""

    def _make(**options):
        return GenerateCtrfReport(mock_on, RunConfiguration(**options), filesystem=mock_fs)

    return _make


@pytest.fixture
def registered_handlers(mock_on):
    """Map event name -> handler from the calls recorded on ``mock_on``."""

    def _handlers():
        return {c.args[0]: c.args[1] for c in mock_on.call_args_list}

    return _handlers


@pytest.fixture
def log_messages():
    """Collect loguru output emitted during the test."""
    messages = []
    handler_id = logger.add(lambda msg: messages.append(str(msg)), level="DEBUG")
    yield messages
    logger.remove(handler_id)
