"""
----------------------------------------------------------------
# Logging configuration and utilities.
----------------------------------------------------------------
#
# Sets up the root logger for the webhook and provides a helper
# returning named loggers.
#
# Usage:
# from app.utils.logging import setup_logging, get_logger
# setup_logging(level="DEBUG")
# logger = get_logger(__name__)
#
# Tokens and webhook secrets are never passed to a logger.
#
----------------------------------------------------------------
"""


import logging
import sys
from typing import Optional

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = "INFO", format_string: Optional[str] = None) -> None:
    """
    Setup logging configuration for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_string: Custom format string for log messages
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format=format_string or DEFAULT_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )

    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("fastapi").setLevel(logging.INFO)
    # httpx logs every request URL at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("app").setLevel(log_level)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the specified name."""
    return logging.getLogger(name)
