"""Playwright-backed remote target and session."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from contextlib import suppress
from typing import Any

from blinker import Signal
from loguru import logger
from playwright.async_api import Browser, Page
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from framesync.errors import PollTimeoutError
from framesync.remote import Listener, Unsubscribe


def _subscribe(signal: Signal, listener: Listener) -> Unsubscribe:
    def _receiver(sender: Any) -> None:
        listener()

    signal.connect(_receiver, weak=False)
    return lambda: signal.disconnect(_receiver)


class _TaskPoll:
    """A ``page.wait_for_function`` call running as a task."""

    def __init__(self, task: asyncio.Task[Any]) -> None:
        self._task = task

    @property
    def result(self) -> asyncio.Task[Any]:
        return self._task

    def terminate(self) -> None:
        if not self._task.done():
            self._task.cancel()


class PlaywrightTarget:
    """Remote target over a Playwright page."""

    def __init__(self, page: Page) -> None:
        self.page = page
        self._disposed = Signal("framesync.page.disposed")
        page.on("close", self._on_close)

    def _on_close(self, _page: Page) -> None:
        logger.debug("page.disposed url={}", self.page.url)
        self._disposed.send(self)

    async def evaluate(self, expression: str, args: Sequence[Any] = ()) -> Any:
        if args:
            return await self.page.evaluate(expression, list(args))
        return await self.page.evaluate(expression)

    def register_poll(self, expression: str, timeout_ms: int, title: str) -> _TaskPoll:
        return _TaskPoll(asyncio.ensure_future(self._poll(expression, timeout_ms, title)))

    async def _poll(self, expression: str, timeout_ms: int, title: str) -> Any:
        try:
            handle = await self.page.wait_for_function(expression, timeout=timeout_ms, polling="raf")
        except PlaywrightTimeoutError as exc:
            raise PollTimeoutError(f"Waiting for {title} failed: timeout {timeout_ms}ms exceeded") from exc
        try:
            return await handle.json_value()
        finally:
            with suppress(PlaywrightError):
                await handle.dispose()

    def on_disposed(self, listener: Listener) -> Unsubscribe:
        return _subscribe(self._disposed, listener)

    def detach(self) -> None:
        """Stop listening to the page's close event."""
        self.page.remove_listener("close", self._on_close)


class PlaywrightSession:
    """Session over a Playwright browser."""

    def __init__(self, browser: Browser) -> None:
        self.browser = browser
        self._closed = Signal("framesync.browser.closed")
        browser.on("disconnected", self._on_disconnected)

    def _on_disconnected(self, _browser: Browser) -> None:
        logger.debug("browser.disconnected")
        self._closed.send(self)

    def on_closed(self, listener: Listener) -> Unsubscribe:
        return _subscribe(self._closed, listener)

    def detach(self) -> None:
        """Stop listening to the browser's disconnected event."""
        self.browser.remove_listener("disconnected", self._on_disconnected)
