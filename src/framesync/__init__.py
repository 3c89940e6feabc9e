"""framesync - know when a rendered frame is ready to capture."""

from .errors import (
    CancellationPayloadError,
    EvaluationTimeoutError,
    FrameSyncError,
    ProtocolViolationError,
    RenderCancelledError,
    RenderTimeoutError,
    SessionClosedError,
    SymbolicatedError,
    TargetClosedError,
)
from .race import wait_for_ready
from .remote import RemoteContract, RemoteTarget, Session
from .seek import seek_to_frame
from .types import FrameSeekRequest, LogLevel, LogOptions, ReadinessToken

__version__ = "0.1.0"

__all__ = [
    "CancellationPayloadError",
    "EvaluationTimeoutError",
    "FrameSeekRequest",
    "FrameSyncError",
    "LogLevel",
    "LogOptions",
    "ProtocolViolationError",
    "ReadinessToken",
    "RemoteContract",
    "RemoteTarget",
    "RenderCancelledError",
    "RenderTimeoutError",
    "Session",
    "SessionClosedError",
    "SymbolicatedError",
    "TargetClosedError",
    "seek_to_frame",
    "wait_for_ready",
]
