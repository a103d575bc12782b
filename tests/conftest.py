"""
Shared pytest fixtures.

Logging is configured once per session with a throwaway stream so that
engine and service traces are formatted (and therefore exercised) in
every test.  ``captured_logs`` attaches an extra in-memory handler when
a test needs to assert on what was logged.
"""

import json
import logging
from io import StringIO

import pytest

from payroll_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)


class _JsonCapture(logging.Handler):
    """Keeps every formatted record as a parsed JSON dict."""

    def __init__(self):
        super().__init__(level=logging.DEBUG)
        self.setFormatter(StructuredFormatter())
        self.records: list[dict] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(json.loads(self.format(record)))


@pytest.fixture(autouse=True, scope="session")
def _session_logging():
    reset_logging()
    configure_logging(level=logging.DEBUG, stream=StringIO())
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _fresh_log_context():
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """Callable returning the payroll log records emitted so far in the test.

    ::

        def test_run_logs_totals(captured_logs):
            service.run(...)
            assert any(r["message"] == "payroll_run_completed" for r in captured_logs())
    """
    capture = _JsonCapture()
    namespace = logging.getLogger("payroll_kernel")
    saved_level = namespace.level
    namespace.setLevel(logging.DEBUG)
    namespace.addHandler(capture)
    try:
        yield lambda: list(capture.records)
    finally:
        namespace.removeHandler(capture)
        namespace.setLevel(saved_level)
