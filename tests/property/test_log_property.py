"""Property tests for log entry completeness.

Property 12: Log Entry Completeness
For any log entry created for a tool call, the entry SHALL contain:
timestamp, tool name, duration, status, and relevant metrics
(output_chars for successes, error_class for failures).
"""
import threading
from datetime import datetime
from hypothesis import given, strategies as st, settings

from dns_mcp.services.logger_service import LoggerService, LogEntry


tool_strategy = st.sampled_from(['analyze_zone', 'validate_config'])

duration_strategy = st.floats(min_value=0, max_value=60000, allow_nan=False)

output_chars_strategy = st.integers(min_value=0, max_value=1000000)


class TestLogEntryCompleteness:
    """Property 12: Log Entry Completeness"""

    @given(tool=tool_strategy, duration=duration_strategy, output_chars=output_chars_strategy)
    @settings(max_examples=100)
    def test_tool_call_log_contains_required_fields(self, tool, duration, output_chars):
        """Tool call entries SHALL contain timestamp, tool, duration, status, output_chars.

        Feature: dns-mcp-server, Property 12: Log Entry Completeness
        """
        logger_service = LoggerService()

        entry = logger_service.log_tool_call(tool, duration, output_chars)

        assert isinstance(entry.timestamp, datetime), "timestamp is required"
        assert entry.level == "INFO"
        assert entry.tool == tool
        assert entry.duration_ms == duration
        assert entry.status == "success"
        assert entry.context["output_chars"] == output_chars

    @given(tool=tool_strategy, message=st.text(min_size=1, max_size=50))
    @settings(max_examples=100)
    def test_failure_log_contains_error_details(self, tool, message):
        """Failure entries SHALL contain status failed, error message and error class.

        Feature: dns-mcp-server, Property 12: Log Entry Completeness
        """
        logger_service = LoggerService()

        try:
            raise ValueError(message)
        except ValueError as e:
            entry = logger_service.log_tool_failure(tool, e, duration_ms=1.5)

        assert entry.level == "ERROR"
        assert entry.status == "failed"
        assert entry.error_message == message
        assert entry.context["error_class"] == "ValueError"
        assert "ValueError" in entry.context["stack_trace"]

    def test_to_dict_serializes_timestamp(self):
        """to_dict() SHALL render the timestamp as ISO text."""
        entry = LogEntry(timestamp=datetime(2024, 1, 17, 12, 0, 0), level="INFO", message="ok")

        data = entry.to_dict()

        assert data["timestamp"] == "2024-01-17T12:00:00"
        assert data["tool"] is None
        assert data["context"] == {}


class TestLogBuffer:
    """In-memory log buffer limits"""

    @given(
        max_entries=st.integers(min_value=1, max_value=20),
        count=st.integers(min_value=0, max_value=60),
    )
    @settings(max_examples=100)
    def test_buffer_keeps_most_recent_entries(self, max_entries, count):
        """The buffer SHALL keep at most max_entries, newest last.

        Feature: dns-mcp-server, Property 12: Log Entry Completeness
        """
        logger_service = LoggerService(max_entries=max_entries)
        for i in range(count):
            logger_service.log("INFO", f"message {i}")

        entries = logger_service.get_recent_logs(limit=1000)

        assert len(entries) == min(count, max_entries)
        expected = [f"message {i}" for i in range(max(0, count - max_entries), count)]
        assert [entry.message for entry in entries] == expected

    def test_limit_and_clear(self):
        """get_recent_logs() SHALL honour the limit; clear_logs() SHALL empty the buffer."""
        logger_service = LoggerService()
        for i in range(5):
            logger_service.log("DEBUG", f"message {i}")

        assert [e.message for e in logger_service.get_recent_logs(2)] == ["message 3", "message 4"]
        assert logger_service.get_recent_logs(0) == []
        assert len(logger_service.get_logs_as_dicts()) == 5

        logger_service.clear_logs()

        assert logger_service.get_recent_logs() == []

    @given(
        max_entries=st.integers(min_value=1, max_value=50),
        threads=st.integers(min_value=2, max_value=8),
    )
    @settings(max_examples=20, deadline=None)
    def test_concurrent_logging_respects_bound(self, max_entries, threads):
        """Logging and reading from many threads SHALL keep exactly max_entries without errors.

        Feature: dns-mcp-server, Property 12: Log Entry Completeness
        """
        logger_service = LoggerService(max_entries=max_entries)
        per_thread = 50
        start = threading.Event()
        errors = []

        def worker(index):
            start.wait()
            try:
                for i in range(per_thread):
                    logger_service.log_tool_call(f"tool-{index}", float(i), i)
                    logger_service.get_recent_logs(max_entries)
            except Exception as e:
                errors.append(e)

        workers = [threading.Thread(target=worker, args=(n,)) for n in range(threads)]
        for t in workers:
            t.start()
        start.set()
        for t in workers:
            t.join()

        entries = logger_service.get_recent_logs(limit=1000)

        assert errors == []
        assert len(entries) == max_entries
        assert all(entry.status == "success" for entry in entries)
