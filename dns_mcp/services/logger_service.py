"""Logger Service for tool invocation logging."""
import logging
import threading
import traceback
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Deque, List, Optional


logger = logging.getLogger(__name__)


@dataclass
class LogEntry:
    """A single log entry."""
    timestamp: datetime
    level: str
    message: str
    tool: Optional[str] = None
    duration_ms: Optional[float] = None
    status: Optional[str] = None
    error_message: Optional[str] = None
    context: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "level": self.level,
            "message": self.message,
            "tool": self.tool,
            "duration_ms": self.duration_ms,
            "status": self.status,
            "error_message": self.error_message,
            "context": self.context,
        }


class LoggerService:
    """Keeps recent tool-call log entries in memory and forwards them to logging."""

    def __init__(self, max_entries: int = 100):
        """Initialize logger service.

        Args:
            max_entries: Maximum number of log entries to keep in memory
        """
        self.max_entries = max_entries
        self._entries: Deque[LogEntry] = deque(maxlen=max_entries)
        self._lock = threading.Lock()

    def log(
        self,
        level: str,
        message: str,
        tool: Optional[str] = None,
        duration_ms: Optional[float] = None,
        status: Optional[str] = None,
        error_message: Optional[str] = None,
        context: Optional[dict] = None
    ) -> LogEntry:
        """Record a log entry.

        Args:
            level: Log level (INFO, WARNING, ERROR, DEBUG)
            message: Log message
            tool: Tool name the entry relates to
            duration_ms: Call duration in milliseconds
            status: Status (success, failed)
            error_message: Error message if applicable
            context: Additional context information

        Returns:
            Created LogEntry
        """
        entry = LogEntry(
            timestamp=datetime.now(),
            level=level.upper(),
            message=message,
            tool=tool,
            duration_ms=duration_ms,
            status=status,
            error_message=error_message,
            context=context or {},
        )

        # Oldest entries fall off the bounded deque
        with self._lock:
            self._entries.append(entry)

        log_func = getattr(logger, level.lower(), logger.info)
        log_func(f"[{tool or 'SYSTEM'}] {message}")

        return entry

    def log_tool_call(self, tool: str, duration_ms: float, output_chars: int) -> LogEntry:
        """Log a completed tool call.

        Args:
            tool: Tool name
            duration_ms: Call duration in milliseconds
            output_chars: Length of the returned report

        Returns:
            Created LogEntry
        """
        return self.log(
            level="INFO",
            message=f"Tool call completed in {duration_ms:.1f} ms ({output_chars} chars)",
            tool=tool,
            duration_ms=duration_ms,
            status="success",
            context={"output_chars": output_chars},
        )

    def log_tool_failure(
        self,
        tool: str,
        error: Exception,
        duration_ms: Optional[float] = None
    ) -> LogEntry:
        """Log a failed tool call with stack trace.

        Args:
            tool: Tool name
            error: Exception raised by the call
            duration_ms: Call duration in milliseconds

        Returns:
            Created LogEntry
        """
        return self.log(
            level="ERROR",
            message=f"Tool call failed: {error}",
            tool=tool,
            duration_ms=duration_ms,
            status="failed",
            error_message=str(error),
            context={
                "error_class": type(error).__name__,
                "stack_trace": traceback.format_exc(),
            },
        )

    def get_recent_logs(self, limit: int = 100) -> List[LogEntry]:
        """Get recent log entries.

        Args:
            limit: Maximum number of entries to return

        Returns:
            List of recent LogEntry objects
        """
        if limit <= 0:
            return []
        with self._lock:
            entries = list(self._entries)
        return entries[-limit:]

    def get_logs_as_dicts(self, limit: int = 100) -> List[dict]:
        """Get recent logs as dictionaries."""
        return [entry.to_dict() for entry in self.get_recent_logs(limit)]

    def clear_logs(self) -> None:
        """Clear all log entries from memory."""
        with self._lock:
            self._entries.clear()
