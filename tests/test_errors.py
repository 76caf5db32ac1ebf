"""
Tests for error records and run summaries
"""
import threading
from pathlib import Path

from swfmeta.core.errors import (
    DestinationUnwritableError,
    ErrorCategory,
    ErrorContext,
    ErrorSeverity,
    FileIOError,
    ParseError,
    error_info_from_exception,
)
from swfmeta.models.summary import RunSummary


class TestErrorInfo:
    def test_from_package_error(self):
        error = ParseError("bad header", ErrorContext("extract", "a.swf"))

        info = error_info_from_exception(error)

        assert info.error_type == "ParseError"
        assert info.category == ErrorCategory.PARSING
        assert info.context.file_path == "a.swf"
        assert info.timestamp > 0
        assert info.user_message == "parsing: bad header"

    def test_from_foreign_exception(self):
        info = error_info_from_exception(KeyError("k"), ErrorContext("unexpected", "b.swf"))

        assert info.error_type == "KeyError"
        assert info.category == ErrorCategory.SYSTEM
        assert info.severity == ErrorSeverity.HIGH

    def test_context_override(self):
        error = FileIOError("denied")
        info = error_info_from_exception(error, ErrorContext("write", "c.swf"))
        assert info.context.operation == "write"

    def test_destination_error_is_critical_file_io(self):
        error = DestinationUnwritableError("read-only")
        assert isinstance(error, FileIOError)
        assert error.category == ErrorCategory.FILE_IO
        assert error.severity == ErrorSeverity.CRITICAL

    def test_to_dict(self):
        info = ParseError("x", ErrorContext("extract", "d.swf")).to_error_info()
        data = info.to_dict()
        assert data["severity"] == "medium"
        assert data["file_path"] == "d.swf"


class TestRunSummary:
    def test_empty_summary(self):
        summary = RunSummary()
        assert summary.is_empty
        assert summary.ok
        assert summary.exit_code() == 0

    def test_failure_makes_exit_nonzero(self):
        summary = RunSummary()
        summary.record_success(Path("a.swf.json"))
        summary.record_failure("b.swf", "extract", ParseError("x").to_error_info())

        assert summary.processed == 2
        assert not summary.ok
        assert summary.exit_code() == 1

    def test_abort_makes_exit_nonzero(self):
        summary = RunSummary()
        summary.mark_aborted("read-only")
        assert summary.exit_code() == 1
        assert summary.to_dict()["abort_reason"] == "read-only"

    def test_concurrent_updates(self):
        summary = RunSummary()

        def work():
            for _ in range(500):
                summary.record_success(Path("x"))

        threads = [threading.Thread(target=work) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert summary.successes == 4000
        assert len(summary.written) == 4000
