"""Error and warning reporting to standard streams, a log file and custom sinks."""

from __future__ import annotations

import datetime
import enum
import sys
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, TextIO

# Build settings.
DEBUG_LEVEL = 3
ENABLE_ASSERT = True
ENABLE_PARAM_CHECK = True
ENABLE_PROFILING = True
ENABLE_GL_STATE_INSPECTION = True

MESSAGE_ONCE_FLAG = 1
LOCATION_ONCE_FLAG = 2

RESULT_MAX_STRING_LENGTH = 16384


class LogType(enum.IntEnum):
    SUCCESS = 0
    INFO = 1
    NEUTRAL = 2
    WARNING = 3
    ERROR = 4
    FILE = 5
    ASSERT = 6
    PARAM = 7
    TRIVIA = 8


class Severity(enum.IntEnum):
    OK = 0
    BAD = 1
    TERMINAL = 2


class Verbosity(enum.IntEnum):
    WHISPER = 0  # Disregard message
    LOUD_UNSITUATED = 1  # Display message
    LOUD = 2  # Display message with file, function and line prepended


class OutputTarget(enum.IntFlag):
    NONE = 0
    STD = 1 << 0
    FILE = 1 << 1
    CUSTOM = 1 << 15


@dataclass
class _Setting:
    prefix: str
    verbosity: Verbosity
    severity: Severity


def _default_settings() -> dict[LogType, _Setting]:
    return {
        LogType.SUCCESS: _Setting("Success: ", Verbosity.LOUD_UNSITUATED, Severity.OK),
        LogType.INFO: _Setting("", Verbosity.LOUD_UNSITUATED, Severity.OK),
        LogType.NEUTRAL: _Setting("", Verbosity.LOUD_UNSITUATED, Severity.OK),
        LogType.WARNING: _Setting("Warning: ", Verbosity.LOUD, Severity.OK),
        LogType.ERROR: _Setting("Error: ", Verbosity.LOUD, Severity.BAD),
        LogType.FILE: _Setting("", Verbosity.LOUD_UNSITUATED, Severity.OK),
        LogType.ASSERT: _Setting("Assert: ", Verbosity.LOUD, Severity.BAD),
        LogType.PARAM: _Setting("Parameter error: ", Verbosity.LOUD, Severity.BAD),
        LogType.TRIVIA: _Setting("", Verbosity.LOUD_UNSITUATED, Severity.OK),
    }


CustomOutput = Callable[[LogType, str], None]


class Logger:
    """Routes formatted reports to stdout/stderr, a log file and a custom sink."""

    def __init__(
        self,
        log_path: str | Path = "log.txt",
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
    ) -> None:
        self.log_path = Path(log_path)
        self._stdout = stdout
        self._stderr = stderr
        self._file: Optional[TextIO] = None
        self._file_lock = threading.Lock()
        self._custom: Optional[CustomOutput] = None
        self._once: dict[str, int] = {}
        self._targets = OutputTarget.STD | OutputTarget.CUSTOM | OutputTarget.FILE
        self._settings = _default_settings()
        self._include_thread_id = False

    @property
    def output_targets(self) -> OutputTarget:
        return self._targets

    @property
    def out(self) -> TextIO:
        return self._stdout if self._stdout is not None else sys.stdout

    @property
    def err(self) -> TextIO:
        return self._stderr if self._stderr is not None else sys.stderr

    def __enter__(self) -> "Logger":
        self.init()
        return self

    def __exit__(self, *exc_info) -> None:
        self.destroy()

    def init(self) -> None:
        """Apply the current output targets, opening the log file if needed."""
        self.set_output_targets(self._targets)

    def destroy(self) -> None:
        """Write the log footer and close the log file, if one is open."""
        with self._file_lock:
            if self._file is None:
                return
            self._file.write("\n === End of log === \n\n")
            self._file.flush()
            self._file.close()
            self._file = None

    def set_custom_output(self, func: Optional[CustomOutput]) -> None:
        self._custom = func

    def set_output_targets(self, flags: int) -> None:
        self._targets = OutputTarget(flags)
        if not self._targets & OutputTarget.FILE:
            return
        with self._file_lock:
            if self._file is not None:
                return
            try:
                self._file = open(self.log_path, "w", encoding="utf-8")
            except OSError as exc:
                self.err.write(
                    f'Failed to open "{self.log_path}" for writing: {exc.strerror}\n'
                )
                self.err.write("Disabling logging of messages to file.\n")
                self._targets &= ~OutputTarget.FILE
                return
            now = datetime.datetime.now()
            self._file.write(
                f"\n === Log ({now:%b %d %Y}, {now:%H:%M:%S}) === \n\n"
            )
            self._file.flush()

    def set_verbosity(self, log_type: LogType, verbosity: Verbosity) -> None:
        self._settings[LogType(log_type)].verbosity = Verbosity(verbosity)

    def set_include_thread_id(self, include: bool) -> None:
        self._include_thread_id = bool(include)

    @staticmethod
    def _once_key(flags: int, file: str, function: str, line: int, text: str) -> str:
        key = ""
        if flags & MESSAGE_ONCE_FLAG:
            key += f"{file}{function}{line}{text}"
        if flags & LOCATION_ONCE_FLAG:
            key += f"_Loc{file}{function}{line}"
        return key

    def report(
        self,
        flags: int,
        file: str,
        function: str,
        line: int,
        log_type: LogType,
        message: str,
        *args,
    ) -> None:
        """Format a printf-style message and send it to every enabled target."""
        if not self._targets:
            return
        log_type = LogType(log_type)
        setting = self._settings[log_type]
        if setting.verbosity is Verbosity.WHISPER:
            return

        text = message % args if args else message
        limit = RESULT_MAX_STRING_LENGTH - 2
        if len(text) > limit:
            text = text[: limit - 3] + "..."

        if flags:
            key = self._once_key(flags, file, function, line, text)
            if key in self._once:
                self._once[key] += 1
                return
            self._once[key] = 1

        parts = []
        if self._include_thread_id:
            parts.append(f"{{{threading.get_ident()}}} ")
        if setting.verbosity is Verbosity.LOUD:
            if line == -1:
                parts.append("[Unknown location]\n")
            else:
                parts.append(f"[{file}, {function} ({line})]\n")
        parts.append(f"{setting.prefix}{text}\n")
        output = "".join(parts)

        if self._targets & OutputTarget.STD:
            stream = self.err if setting.severity is not Severity.OK else self.out
            stream.write(output)
        if self._targets & OutputTarget.FILE:
            with self._file_lock:
                if self._file is not None:
                    self._file.write(output)
                    self._file.flush()
        if self._targets & OutputTarget.CUSTOM and self._custom is not None:
            self._custom(log_type, output)
        if setting.severity is Severity.TERMINAL:
            self.destroy()
            raise SystemExit(1)

    def report_param(self, test, file: str, function: str, line: int) -> bool:
        """Report a bad parameter when ``test`` is falsy; return its truth value."""
        ok = bool(test)
        if not ok:
            self.report(0, file, function, line, LogType.PARAM, "Bad parameter!")
        return ok

    def hit_count(self, key: str) -> int:
        """Number of times a once-only report with this key was issued."""
        return self._once.get(key, 0)