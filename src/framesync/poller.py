"""Remote readiness polling."""

from __future__ import annotations

import asyncio
from typing import Any

from loguru import logger

from framesync.errors import PollTimeoutError
from framesync.remote import PollRegistration, RemoteTarget

# Added to the caller's bound so the page's own delayRender() deadline fires first.
POLL_GRACE_MS = 3000


class WaitTaskHandle:
    """Owns one in-flight remote poll."""

    def __init__(self, registration: PollRegistration, title: str) -> None:
        self._registration = registration
        self.title = title
        self._terminated = False

    @property
    def terminated(self) -> bool:
        return self._terminated

    def terminate(self) -> None:
        if self._terminated:
            return
        self._terminated = True
        try:
            self._registration.terminate()
        except Exception:
            # The page may already be gone; stopping the poll is best-effort.
            logger.opt(exception=True).debug("poll.terminate_failed title={}", self.title)


def poll_title(frame: int | None) -> str:
    if frame is None:
        return "the page to render the React component"
    return f"the page to render the React component at frame {frame}"


def begin_wait(
    target: RemoteTarget,
    predicate: str,
    timeout_ms: int,
    title: str,
) -> tuple[WaitTaskHandle, asyncio.Future[Any]]:
    """Start polling ``predicate`` on the page until it is truthy.

    Returns the handle that stops the poll and a future with the raw value.
    """
    registration = target.register_poll(predicate, timeout_ms + POLL_GRACE_MS, title)
    handle = WaitTaskHandle(registration, title)
    try:
        future = asyncio.ensure_future(registration.result)
    except BaseException:
        handle.terminate()
        raise
    return handle, future


def is_timeout_error(error: BaseException) -> bool:
    """Tell whether a poll failure means the bound elapsed."""
    if isinstance(error, PollTimeoutError):
        return True
    message = str(error).lower()
    return "timeout" in message and "exceeded" in message
