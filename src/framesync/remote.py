"""Contracts framesync expects from the browser page and its session."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from framesync.types import ReadinessToken

Unsubscribe = Callable[[], None]
Listener = Callable[[], None]


class PollRegistration(Protocol):
    """One remote poll: an awaitable result plus a way to stop polling."""

    @property
    def result(self) -> Awaitable[Any]: ...

    def terminate(self) -> None: ...


class RemoteTarget(Protocol):
    """Execution context running the rendered content (a browser page)."""

    async def evaluate(self, expression: str, args: Sequence[Any] = ()) -> Any: ...

    def register_poll(self, expression: str, timeout_ms: int, title: str) -> PollRegistration: ...

    def on_disposed(self, listener: Listener) -> Unsubscribe: ...


class Session(Protocol):
    """Connection owning one or more targets (a browser)."""

    def on_closed(self, listener: Listener) -> Unsubscribe: ...


@dataclass(frozen=True)
class RemoteContract:
    """Globals the rendered content exposes on ``window``.

    These four names are the only remote state framesync reads or calls.
    """

    version: int = 1
    ready_flag: str = "remotion_renderReady"
    cancelled_error: str = "remotion_cancelledError"
    delay_registry: str = "remotion_delayRenderTimeouts"
    set_frame: str = "remotion_setFrame"

    def readiness_expression(self) -> str:
        return (
            f'window.{self.ready_flag} === true ? "{ReadinessToken.READY.value}" : '
            f'window.{self.cancelled_error} !== undefined ? "{ReadinessToken.CANCELLED.value}" : false'
        )

    def cancelled_error_expression(self) -> str:
        return f"() => window.{self.cancelled_error}"

    def delayed_operations_expression(self) -> str:
        return (
            f"() => Object.entries(window.{self.delay_registry} || {{}})"
            ".map(([id, entry]) => ({id: String(id), label: entry && entry.label != null ? String(entry.label) : null}))"
        )

    def set_frame_expression(self) -> str:
        return f"([frame, composition]) => {{ window.{self.set_frame}(frame, composition); }}"


FONTS_READY_EXPRESSION = "() => document.fonts.ready.then(() => true)"

DEFAULT_CONTRACT = RemoteContract()
