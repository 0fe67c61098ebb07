"""Handlers that collect the per-run log."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

RUN_LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"


class RunLogHandler(logging.Handler):
    """Buffer formatted log lines for the run summary email.

    The buffer belongs to a single run; it is read back with ``lines`` once
    the run finishes.
    """

    def __init__(self, level: int = logging.INFO):
        super().__init__(level)
        self.setFormatter(logging.Formatter(RUN_LOG_FORMAT, "%Y-%m-%d %H:%M:%S"))
        self._lines: list[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        """Append the formatted record to the buffer."""
        try:
            self._lines.append(self.format(record))
        except Exception:
            self.handleError(record)

    @property
    def lines(self) -> list[str]:
        """Buffered log lines in emission order."""
        return list(self._lines)


@contextmanager
def capture_run_log(
    lines: list[str], logger_name: str = "crossnegatives", level: int = logging.INFO
) -> Iterator[RunLogHandler]:
    """Attach a RunLogHandler for the duration of a run.

    Captured lines are appended to ``lines`` when the block exits, including
    when it exits with an exception.

    Args:
        lines: List that receives the captured log lines
        logger_name: Logger to capture (package root by default)
        level: Minimum level captured
    """
    handler = RunLogHandler(level)
    logger = logging.getLogger(logger_name)
    previous_level = logger.level
    if logger.getEffectiveLevel() > level:
        logger.setLevel(level)
    logger.addHandler(handler)
    try:
        yield handler
    finally:
        logger.removeHandler(handler)
        logger.setLevel(previous_level)
        lines.extend(handler.lines)
