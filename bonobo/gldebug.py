"""Names for OpenGL debug-output enums and routing of debug messages to a logger."""

from __future__ import annotations

import enum

from bonobo.log import Logger, LogType


class DebugType(enum.IntEnum):
    ERROR = 0x824C
    DEPRECATED_BEHAVIOR = 0x824D
    UNDEFINED_BEHAVIOR = 0x824E
    PORTABILITY = 0x824F
    PERFORMANCE = 0x8250
    OTHER = 0x8251
    MARKER = 0x8268
    PUSH_GROUP = 0x8269
    POP_GROUP = 0x826A


class DebugSource(enum.IntEnum):
    API = 0x8246
    WINDOW_SYSTEM = 0x8247
    SHADER_COMPILER = 0x8248
    THIRD_PARTY = 0x8249
    APPLICATION = 0x824A
    OTHER = 0x824B


class DebugSeverity(enum.IntEnum):
    HIGH = 0x9146
    MEDIUM = 0x9147
    LOW = 0x9148
    NOTIFICATION = 0x826B


_TYPE_NAMES = {
    DebugType.ERROR: "Error",
    DebugType.DEPRECATED_BEHAVIOR: "Deprecated Behavior",
    DebugType.UNDEFINED_BEHAVIOR: "Undefined Behavior",
    DebugType.PORTABILITY: "Portability Issue",
    DebugType.PERFORMANCE: "Performance Issue",
    DebugType.MARKER: "Stream Annotation",
    DebugType.PUSH_GROUP: "Push group",
    DebugType.POP_GROUP: "Pop group",
    DebugType.OTHER: "Other",
}

_SOURCE_NAMES = {
    DebugSource.API: "API",
    DebugSource.WINDOW_SYSTEM: "Window System",
    DebugSource.SHADER_COMPILER: "Shader Compiler",
    DebugSource.THIRD_PARTY: "Third Party",
    DebugSource.APPLICATION: "Application",
    DebugSource.OTHER: "Other",
}

_SEVERITY_NAMES = {
    DebugSeverity.HIGH: "High",
    DebugSeverity.MEDIUM: "Medium",
    DebugSeverity.LOW: "Low",
    DebugSeverity.NOTIFICATION: "Notification",
}

_SEVERITY_LOG_TYPES = {
    DebugSeverity.NOTIFICATION: LogType.INFO,
    DebugSeverity.LOW: LogType.INFO,
    DebugSeverity.MEDIUM: LogType.WARNING,
    DebugSeverity.HIGH: LogType.ERROR,
}


def type_name(debug_type: int) -> str:
    """Readable name of a debug message type; ValueError if unknown."""
    return _TYPE_NAMES[DebugType(debug_type)]


def source_name(source: int) -> str:
    """Readable name of a debug message source; ValueError if unknown."""
    return _SOURCE_NAMES[DebugSource(source)]


def severity_name(severity: int) -> str:
    """Readable name of a debug message severity; ValueError if unknown."""
    return _SEVERITY_NAMES[DebugSeverity(severity)]


def format_debug_message(source: int, debug_type: int, message_id: int, message: str) -> str:
    return (
        f"[id: {message_id}] of type {type_name(debug_type)}, "
        f"from {source_name(source)}:\n\t{message}\n"
    )


def handle_debug_message(
    logger: Logger,
    source: int,
    debug_type: int,
    message_id: int,
    severity: int,
    message: str,
) -> None:
    """Log a driver debug message at a level matching its severity."""
    here = (0, __file__, "handle_debug_message", -1)
    if debug_type == DebugType.PUSH_GROUP:
        logger.report(*here, LogType.INFO, "%s\n{", message)
        return
    if debug_type == DebugType.POP_GROUP:
        logger.report(*here, LogType.INFO, "}")
        return

    text = format_debug_message(source, debug_type, message_id, message)
    try:
        log_type = _SEVERITY_LOG_TYPES[DebugSeverity(severity)]
    except ValueError:
        return
    logger.report(*here, log_type, text)