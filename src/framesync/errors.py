"""Exception types raised while waiting for a frame to become ready."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from framesync.types import StackFrame


class FrameSyncError(Exception):
    """Base exception for framesync."""


class SymbolicatedError(FrameSyncError):
    """An error reported by the page, enriched with its parsed stack trace.

    Instances are frozen once constructed.
    """

    _frozen = False

    def __init__(
        self,
        *,
        name: str,
        message: str,
        raw_stack: str,
        frames: Sequence[StackFrame] = (),
        frame: int | None = None,
    ) -> None:
        super().__init__(message)
        self.name = name
        self.message = message
        self.raw_stack = raw_stack
        self.frames: tuple[StackFrame, ...] = tuple(frames)
        self.frame = frame
        self._frozen = True

    def __setattr__(self, key: str, value: Any) -> None:
        # Exception machinery assigns dunder attributes while raising.
        if self._frozen and not key.startswith("__"):
            raise AttributeError(f"{type(self).__name__} is immutable")
        super().__setattr__(key, value)

    def __str__(self) -> str:
        return f"{self.name}: {self.message}"

    def __reduce__(self) -> tuple[Any, ...]:
        fields = {
            "name": self.name,
            "message": self.message,
            "raw_stack": self.raw_stack,
            "frames": self.frames,
            "frame": self.frame,
        }
        return _rebuild_symbolicated, (type(self), fields)


def _rebuild_symbolicated(cls: type[SymbolicatedError], fields: dict[str, Any]) -> SymbolicatedError:
    error = cls.__new__(cls)
    SymbolicatedError.__init__(error, **fields)
    return error


class RenderCancelledError(SymbolicatedError):
    """Raised when the rendered content cancels the render."""

    def __init__(
        self,
        *,
        message: str,
        raw_stack: str,
        frames: Sequence[StackFrame] = (),
        frame: int | None = None,
    ) -> None:
        super().__init__(name="CancelledError", message=message, raw_stack=raw_stack, frames=frames, frame=frame)


class CancellationPayloadError(FrameSyncError):
    """Raised when the page cancels with a payload that is not a string."""

    def __init__(self, payload: Any) -> None:
        super().__init__(f"Render cancelled with a non-string payload: {payload!r}")
        self.payload = payload

    def __reduce__(self) -> tuple[Any, ...]:
        return type(self), (self.payload,)


class PollTimeoutError(FrameSyncError, TimeoutError):
    """Raised by a remote poll whose bound elapsed without a truthy value."""


class EvaluationTimeoutError(FrameSyncError, TimeoutError):
    """Raised when a bounded remote evaluation does not settle in time."""


class RenderTimeoutError(FrameSyncError, TimeoutError):
    """Raised when the page never signalled readiness, with open delayRender() handles."""

    def __init__(self, message: str, *, frame: int | None = None, handles: str = "") -> None:
        super().__init__(message)
        self.frame = frame
        self.handles = handles


class TargetClosedError(FrameSyncError):
    """Raised when the page is disposed while waiting on it."""


class SessionClosedError(TargetClosedError):
    """Raised when the browser owning the page goes away while waiting."""


class ProtocolViolationError(FrameSyncError):
    """Raised when the page reports a readiness token framesync does not know."""

    def __init__(self, token: Any) -> None:
        super().__init__(f"Unexpected token {token}")
        self.token = token

    def __reduce__(self) -> tuple[Any, ...]:
        return type(self), (self.token,)
