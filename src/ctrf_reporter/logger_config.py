"""Logger configuration using loguru.

This module centralizes logging configuration for ctrf-reporter.  The reporter
usually runs inside a host test-runner process, so nothing is configured at
import time: loguru's default stderr sink stays in place until
:func:`setup_logger` is called (the CLI does this on start-up).

File paths in log records are reported relative to the package root instead
of the absolute site-packages location.
"""

import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

from loguru import logger

if TYPE_CHECKING:
    from loguru import Logger

from .config import settings

# Base directory removed from log paths.  Installed, this resolves to
# ``.../site-packages``; from a checkout it resolves to ``.../src``.
_PACKAGE_DIR = Path(__file__).resolve().parent
_PATH_TRIM_BASES = (_PACKAGE_DIR.parent.resolve(),)

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def format_path_for_log(file_path: str) -> str:
    """Return a concise, project-relative path for logging purposes.

    Args:
        file_path: Original absolute file path reported by loguru.

    Returns:
        A trimmed path relative to :data:`_PATH_TRIM_BASES` when possible.  If
        the path is outside our project roots the original path is returned.
    """

    path = Path(file_path)
    try:
        resolved = path.resolve()
    except OSError:
        resolved = path

    for base in _PATH_TRIM_BASES:
        try:
            trimmed = resolved.relative_to(base)
        except ValueError:
            continue
        else:
            return trimmed.as_posix()

    return str(resolved)


def _patch_record(record: Any) -> None:
    """Enrich log records with shortened file paths."""

    record["extra"]["short_path"] = format_path_for_log(record["file"].path)


def setup_logger(
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
    include_file_info: bool = True,
    stream: Any = sys.stderr,
) -> None:
    """
    Setup loguru logger with file and line information.

    Args:
        log_level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file path
        include_file_info: Whether to include file and line information in logs
        stream: Stream to write console logs to (default: sys.stderr, so the
            report path printed by the CLI stays alone on stdout)

    Raises:
        ValueError: If an invalid log level is provided
    """
    level = log_level or settings.log_level
    if level.upper() not in VALID_LOG_LEVELS:
        raise ValueError(f"Invalid log level '{level}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}")
    level = level.upper()

    # Remove existing handlers and reset any previous patchers
    logger.remove()
    logger.configure(patcher=None)

    if include_file_info:
        logger.configure(patcher=_patch_record)
        format_string = "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | " "<level>{level: <8}</level> | " "{extra[short_path]}:{line} in <cyan>{function}</cyan> - " "<level>{message}</level>"
    else:
        format_string = "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | " "<level>{level: <8}</level> | " "<cyan>{name}</cyan> - " "<level>{message}</level>"

    # Use non-enqueue mode during pytest to avoid background queue growth
    use_enqueue = False if os.environ.get("PYTEST_CURRENT_TEST") else True

    logger.add(
        stream,
        format=format_string,
        level=level,
        colorize=True,
        enqueue=use_enqueue,
    )

    log_file = log_file or settings.log_file
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        if include_file_info:
            file_format = "{time:YYYY-MM-DD HH:mm:ss.SSS} | " "{level: <8} | " "{extra[short_path]}:{line} in {function} - " "{message}"
        else:
            file_format = "{time:YYYY-MM-DD HH:mm:ss.SSS} | " "{level: <8} | " "{name} - " "{message}"

        logger.add(
            log_file,
            format=file_format,
            level=level,
            rotation="10 MB",
            retention="7 days",
            compression="zip",
            enqueue=use_enqueue,
        )


def get_logger(name: str) -> "Logger":
    """
    Get a logger instance with the specified name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logger.bind(name=name)
