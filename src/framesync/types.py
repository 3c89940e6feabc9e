"""Value types shared across framesync."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum


class ReadinessToken(str, Enum):
    """Tri-state value reported by the rendered content.

    PENDING is the falsy value that keeps the remote poll running, so it
    never reaches Python. READY is checked before CANCELLED on the page.
    """

    PENDING = "pending"
    READY = "ready"
    CANCELLED = "cancelled"

    @classmethod
    def parse(cls, raw: object) -> ReadinessToken | None:
        if isinstance(raw, cls):
            return None if raw is cls.PENDING else raw
        text = str(raw)
        for token in (cls.READY, cls.CANCELLED):
            if text == token.value:
                return token
        return None


class LogLevel(IntEnum):
    VERBOSE = 10
    INFO = 20
    WARN = 30
    ERROR = 40

    @classmethod
    def parse(cls, value: str | LogLevel) -> LogLevel:
        if isinstance(value, LogLevel):
            return value
        key = value.strip().upper()
        if key == "WARNING":
            key = "WARN"
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"unknown log level: {value!r}") from None


@dataclass(frozen=True)
class LogOptions:
    indent: bool = False
    log_level: LogLevel = LogLevel.INFO


@dataclass(frozen=True)
class FrameSeekRequest:
    """One frame to seek to, consumed by a single seek_to_frame call."""

    frame: int | None
    composition: str
    timeout_ms: int
    indent: bool = False
    log_level: LogLevel = LogLevel.INFO

    @property
    def log_options(self) -> LogOptions:
        return LogOptions(indent=self.indent, log_level=self.log_level)


@dataclass(frozen=True)
class DelayedOperationEntry:
    """A pending delayRender() call registered by the page."""

    id: str
    label: str | None = None


@dataclass(frozen=True)
class StackFrame:
    file: str
    line: int | None = None
    column: int | None = None
    function: str | None = None
