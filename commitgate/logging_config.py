"""Logging configuration for commitgate.

Log level comes from the --debug flag or the COMMITGATE_LOG_LEVEL
environment variable (DEBUG, INFO, WARNING, ERROR, CRITICAL).
"""

import logging
import os
import sys
from typing import Optional

VALID_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def configure_logging(debug: bool = False, level: Optional[str] = None) -> None:
    """Configure the root logger with a single stderr handler.

    Args:
        debug: Force DEBUG level.
        level: Explicit level name. Defaults to COMMITGATE_LOG_LEVEL or WARNING.
    """
    if debug:
        log_level = "DEBUG"
    else:
        log_level = (level or os.getenv("COMMITGATE_LOG_LEVEL", "WARNING")).upper()

    if log_level not in VALID_LEVELS:
        sys.stderr.write(f"Warning: Invalid log level '{log_level}', defaulting to WARNING\n")
        log_level = "WARNING"

    numeric_level = getattr(logging, log_level)

    if numeric_level <= logging.DEBUG:
        formatter = logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%H:%M:%S",
        )
    else:
        formatter = logging.Formatter(fmt="%(levelname)s - %(message)s")

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    # Quiet noisy transport libraries
    for name in ("httpx", "httpcore", "openai"):
        logging.getLogger(name).setLevel(logging.WARNING)
