from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterator, Sequence
from typing import Any

import pytest
from loguru import logger

from framesync.remote import DEFAULT_CONTRACT


class FakePoll:
    def __init__(self, expression: str, timeout_ms: int, title: str) -> None:
        self.expression = expression
        self.timeout_ms = timeout_ms
        self.title = title
        self.future: asyncio.Future[Any] = asyncio.get_running_loop().create_future()
        self.terminate_calls = 0

    @property
    def result(self) -> asyncio.Future[Any]:
        return self.future

    def terminate(self) -> None:
        self.terminate_calls += 1
        if not self.future.done():
            self.future.cancel()

    def resolve(self, value: Any) -> None:
        self.future.set_result(value)

    def fail(self, error: BaseException) -> None:
        self.future.set_exception(error)


class FakeTarget:
    """In-memory page: scripted evaluations and manually settled polls."""

    def __init__(self, *, auto_token: str | None = None) -> None:
        self.auto_token = auto_token
        self.responses: dict[str, Any] = {}
        self.calls: list[tuple[Any, ...]] = []
        self.polls: list[FakePoll] = []
        self.listeners: list[Callable[[], None]] = []

    @property
    def poll(self) -> FakePoll:
        return self.polls[-1]

    async def evaluate(self, expression: str, args: Sequence[Any] = ()) -> Any:
        self.calls.append(("evaluate", expression, tuple(args)))
        response = self.responses.get(expression)
        if callable(response):
            response = response(*args)
            if asyncio.iscoroutine(response):
                response = await response
        if isinstance(response, BaseException):
            raise response
        return response

    def register_poll(self, expression: str, timeout_ms: int, title: str) -> FakePoll:
        poll = FakePoll(expression, timeout_ms, title)
        self.polls.append(poll)
        self.calls.append(("poll", title, timeout_ms))
        if self.auto_token is not None:
            poll.resolve(self.auto_token)
        return poll

    def on_disposed(self, listener: Callable[[], None]) -> Callable[[], None]:
        self.listeners.append(listener)
        return lambda: self.listeners.remove(listener)

    def dispose(self) -> None:
        for listener in list(self.listeners):
            listener()


class FakeSession:
    def __init__(self) -> None:
        self.listeners: list[Callable[[], None]] = []

    def on_closed(self, listener: Callable[[], None]) -> Callable[[], None]:
        self.listeners.append(listener)
        return lambda: self.listeners.remove(listener)

    def close(self) -> None:
        for listener in list(self.listeners):
            listener()


@pytest.fixture
def target() -> FakeTarget:
    return FakeTarget()


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def contract():
    return DEFAULT_CONTRACT


@pytest.fixture
def log_records() -> Iterator[list[Any]]:
    records: list[Any] = []
    sink_id = logger.add(lambda message: records.append(message.record), level="DEBUG", format="{message}")
    yield records
    logger.remove(sink_id)


@pytest.fixture
def make_target() -> Callable[..., FakeTarget]:
    return FakeTarget
