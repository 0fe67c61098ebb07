"""Logging infrastructure for crossnegatives."""

from crossnegatives.logging.config import setup_logging
from crossnegatives.logging.formatters import JSONFormatter
from crossnegatives.logging.handlers import RunLogHandler, capture_run_log

__all__ = [
    "setup_logging",
    "JSONFormatter",
    "RunLogHandler",
    "capture_run_log",
]
