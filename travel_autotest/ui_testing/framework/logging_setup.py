"""
================================================================================
Logging Setup
================================================================================

loguru configuration shared by the framework, page objects and the runner.

Usage:
    from travel_autotest.ui_testing.framework.logging_setup import init_logger

    init_logger()                                   # INFO to stderr
    init_logger(level="DEBUG", log_file="logs/run.log")

================================================================================
"""

import os
import sys
from typing import Optional

from loguru import logger

from .config_manager import ConfigManager


DEFAULT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

_logger_initialized = False


def init_logger(
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    config: Optional[ConfigManager] = None,
    format_string: str = DEFAULT_FORMAT,
    force: bool = False,
) -> None:
    """
    Initializes the loguru logger with standard settings.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to config value.
        log_file: Optional file path to write logs to. Defaults to config value.
        config: Configuration to read the ``logging`` section from.
        format_string: Log format string.
        force: Re-initialize even if already done in this process.
    """
    global _logger_initialized

    if _logger_initialized and not force:
        return

    settings = config.get_section("logging") if config is not None else {}
    level = level or settings.get("level") or "INFO"
    log_file = log_file or settings.get("file") or None

    # Remove default handler
    logger.remove()

    logger.add(
        sys.stderr,
        format=format_string,
        level=level,
        colorize=True,
    )

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        logger.add(
            log_file,
            format=format_string,
            level=level,
            rotation=settings.get("rotation", "10 MB"),
            retention=settings.get("retention", "7 days"),
        )

    _logger_initialized = True
    logger.debug("Logger initialized successfully")


__all__ = ["init_logger", "DEFAULT_FORMAT"]
