"""Tests for run log capture and log formatting."""

import json
import logging
import sys

import pytest

from crossnegatives.core.config import LoggingConfig, Settings
from crossnegatives.logging import (
    JSONFormatter,
    RunLogHandler,
    capture_run_log,
    setup_logging,
)
from crossnegatives.propagation.engine import CrossNegativePropagator


class TestRunLogHandler:
    def test_lines_buffered_in_order(self):
        handler = RunLogHandler()
        logger = logging.getLogger("crossnegatives.tests.handler")
        logger.setLevel(logging.INFO)
        logger.addHandler(handler)
        try:
            logger.info("first")
            logger.debug("hidden")
            logger.warning("second")
        finally:
            logger.removeHandler(handler)

        lines = handler.lines
        assert len(lines) == 2
        assert lines[0].endswith("INFO first")
        assert lines[1].endswith("WARNING second")


class TestCaptureRunLog:
    def test_captures_package_loggers(self):
        lines: list[str] = []
        with capture_run_log(lines):
            logging.getLogger("crossnegatives.propagation.writer").info("added x")
            logging.getLogger("other.library").info("not ours")

        assert len(lines) == 1
        assert "added x" in lines[0]

    def test_handler_removed_and_level_restored(self):
        logger = logging.getLogger("crossnegatives")
        previous = logger.level
        with capture_run_log([]) as handler:
            assert handler in logger.handlers
        assert handler not in logger.handlers
        assert logger.level == previous

    def test_lines_kept_when_run_fails(self):
        lines: list[str] = []
        with pytest.raises(RuntimeError):
            with capture_run_log(lines):
                logging.getLogger("crossnegatives.engine").info("before failure")
                raise RuntimeError("boom")
        assert any("before failure" in line for line in lines)

    def test_separate_runs_do_not_share_lines(self):
        first: list[str] = []
        second: list[str] = []
        with capture_run_log(first):
            logging.getLogger("crossnegatives").info("run one")
        with capture_run_log(second):
            logging.getLogger("crossnegatives").info("run two")
        assert len(first) == 1 and "run one" in first[0]
        assert len(second) == 1 and "run two" in second[0]


class TestJSONFormatter:
    def test_context_fields(self):
        record = logging.LogRecord(
            "crossnegatives", logging.INFO, __file__, 10, "added %s", ("[x]",), None
        )
        record.entity = "Campaign: Brand"
        record.run_id = "abc"

        data = json.loads(JSONFormatter().format(record))

        assert data["message"] == "added [x]"
        assert data["level"] == "INFO"
        assert data["entity"] == "Campaign: Brand"
        assert data["run_id"] == "abc"
        assert "customer_id" not in data

    def test_exception_info(self):
        try:
            raise ValueError("bad")
        except ValueError:
            exc_info = sys.exc_info()
        record = logging.LogRecord(
            "crossnegatives", logging.ERROR, __file__, 10, "failed", (), exc_info
        )
        data = json.loads(JSONFormatter().format(record))
        assert data["exception"]["type"] == "ValueError"
        assert data["exception"]["message"] == "bad"


class TestSetupLogging:
    @pytest.fixture(autouse=True)
    def restore_root(self):
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_single_console_handler(self):
        settings = Settings(logging=LoggingConfig(level="DEBUG", format="json"))
        setup_logging(settings)
        setup_logging(settings)

        root = logging.getLogger()
        ours = [h for h in root.handlers if getattr(h, "_crossnegatives_console", False)]
        assert len(ours) == 1
        assert isinstance(ours[0].formatter, JSONFormatter)
        assert root.level == logging.DEBUG
        assert logging.getLogger("urllib3").level == logging.WARNING

    def test_console_keeps_configured_level_during_run(
        self, capsys, platform, settings_factory
    ):
        setup_logging(Settings(logging=LoggingConfig(level="WARNING")))

        context = CrossNegativePropagator(
            platform, settings_factory(operation_warning_threshold=1)
        ).run()

        err = capsys.readouterr().err
        assert " - INFO - " not in err
        assert "exceed the threshold of 1" in err
        assert any("Starting cross negatives run" in line for line in context.log_lines)
