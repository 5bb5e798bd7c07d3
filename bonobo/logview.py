"""A fixed-size ring buffer of log lines, with text filtering and colours."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from bonobo.log import Logger, LogType

BUFFER_WIDTH = 512
BUFFER_ROWS = 64

Color = tuple[float, float, float, float]

_DEFAULT_COLOR: Color = (1.0, 1.0, 1.0, 1.0)
_TYPE_COLORS: dict[LogType, Color] = {
    LogType.WARNING: (0.7, 0.4, 0.0, 1.0),
    LogType.ERROR: (0.7, 0.0, 0.0, 1.0),
    LogType.ASSERT: (0.7, 0.0, 0.0, 1.0),
    LogType.PARAM: (0.7, 0.0, 0.0, 1.0),
    LogType.TRIVIA: (0.8, 0.8, 0.8, 1.0),
}


def pass_filter(pattern: str, text: str) -> bool:
    """Match ``text`` against a comma-separated "incl,-excl" filter, ignoring case."""
    terms = [t.strip() for t in pattern.split(",")]
    terms = [t for t in terms if t and t != "-"]
    if not terms:
        return True
    haystack = text.lower()
    includes = 0
    for term in terms:
        if term.startswith("-"):
            if term[1:].lower() in haystack:
                return False
        else:
            includes += 1
            if term.lower() in haystack:
                return True
    return includes == 0


@dataclass(frozen=True)
class LogEntry:
    log_type: LogType
    text: str
    length: int


class LogView:
    """Keeps the most recent log lines for display."""

    def __init__(self, logger: Optional[Logger] = None) -> None:
        self._rows: list[Optional[LogEntry]] = [None] * BUFFER_ROWS
        self._ptr = 0
        self.auto_scroll = True
        self._scroll_to_bottom = True
        if logger is not None:
            logger.set_custom_output(self.feed)

    def feed(self, log_type: LogType, message: str) -> None:
        """Store a message, overwriting the oldest row once the buffer is full."""
        self._rows[self._ptr] = LogEntry(
            LogType(log_type), message[: BUFFER_WIDTH - 1], len(message)
        )
        self._ptr = (self._ptr + 1) % BUFFER_ROWS
        self._scroll_to_bottom = True

    def clear(self) -> None:
        self._rows = [None] * BUFFER_ROWS
        self._ptr = 0
        self._scroll_to_bottom = True

    def entries(self, pattern: str = "") -> list[LogEntry]:
        """Stored entries from oldest to newest that pass ``pattern``."""
        ordered = (
            self._rows[(self._ptr + i) % BUFFER_ROWS] for i in range(BUFFER_ROWS)
        )
        return [
            entry
            for entry in ordered
            if entry is not None and entry.length and pass_filter(pattern, entry.text)
        ]

    def color_for(self, log_type: LogType) -> Color:
        return _TYPE_COLORS.get(LogType(log_type), _DEFAULT_COLOR)

    def consume_scroll_request(self) -> bool:
        """Return whether a scroll to the bottom is pending, and reset it."""
        requested = self._scroll_to_bottom
        self._scroll_to_bottom = False
        return requested