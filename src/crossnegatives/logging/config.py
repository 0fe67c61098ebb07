"""Logging configuration and setup."""

import logging
import sys

from crossnegatives.core.config import LogFormat, Settings
from crossnegatives.logging.formatters import JSONFormatter

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Third-party loggers that are noisy at INFO
QUIET_LOGGERS = ("google.ads.googleads", "urllib3", "grpc")


def setup_logging(settings: Settings) -> None:
    """Configure logging based on settings.

    Args:
        settings: Application settings
    """
    log_level = getattr(logging, settings.logging.level.upper())

    if settings.logging.format == LogFormat.JSON:
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(TEXT_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Replace console handlers from a previous call
    for handler in list(root_logger.handlers):
        if getattr(handler, "_crossnegatives_console", False):
            root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    # Run log capture may lower package logger levels below the configured one
    console_handler.setLevel(log_level)
    console_handler._crossnegatives_console = True  # type: ignore[attr-defined]
    root_logger.addHandler(console_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

