"""Logging setup: JSON or plain-text stream handler chosen by argument or env var."""

from __future__ import annotations

import logging
import os
from typing import Optional

from pythonjsonlogger.json import JsonFormatter

LOG_FORMAT_ENV = "ADVANCED_DATATABLE_LOG_FORMAT"
_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(
        level: int = logging.INFO,
        force_format: Optional[str] = None,
        logger_name: Optional[str] = None,
) -> logging.Logger:
    """
    Configure a logger for the table (root logger by default)

    Modes:
    - JSON (default), one object per line for log shippers
    - plain text (dev mode)

    Selection Order:
        1) force_format argument ("json" or "plain") if provided
        2) env var ADVANCED_DATATABLE_LOG_FORMAT
        3) default = "json"
    """

    if force_format is not None:
        format_mode = force_format.lower()
    else:
        format_mode = os.getenv(LOG_FORMAT_ENV, "json").lower()

    logger = logging.getLogger(logger_name)
    logger.setLevel(level)

    handler = logging.StreamHandler()

    if format_mode == "plain":
        formatter = logging.Formatter(_FORMAT)
    else:
        formatter = JsonFormatter(_FORMAT)

    handler.setFormatter(formatter)

    # Replace any existing handlers to avoid duplicate logs
    logger.handlers.clear()
    logger.addHandler(handler)
    return logger
