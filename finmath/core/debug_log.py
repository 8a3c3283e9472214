# finmath/core/debug_log.py
"""
Logging helpers.

finmath is a library: it only ever attaches a NullHandler to the "finmath"
logger, so nothing is printed unless the host application configures logging.
For local troubleshooting, set FINMATH_DEBUG=1 and call get_debug_logger()
to get a rotating file log under logs/finmath_debug.log.
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler

LOGGER_NAME = "finmath"
DEFAULT_LOG_PATH = os.path.join("logs", "finmath_debug.log")

logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())


def debug_enabled() -> bool:
    return os.getenv("FINMATH_DEBUG", "").strip().lower() in {"1", "true", "yes", "on"}


def get_debug_logger(log_path: str = DEFAULT_LOG_PATH) -> logging.Logger:
    """
    Return the package logger, attaching a rotating file handler when
    FINMATH_DEBUG is on. Idempotent: repeated calls never stack handlers.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if not debug_enabled():
        return logger

    logger.setLevel(logging.DEBUG)
    if any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
        return logger

    directory = os.path.dirname(log_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
            datefmt="(%Y-%m-%d %H:%M:%S)",
        )
    )
    logger.addHandler(handler)
    return logger


__all__ = ["LOGGER_NAME", "debug_enabled", "get_debug_logger"]
