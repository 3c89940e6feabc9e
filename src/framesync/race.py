"""Wait until the page reports that the current frame is ready."""

from __future__ import annotations

import asyncio
from typing import Any

from loguru import logger

from framesync.diagnostics import enrich_timeout
from framesync.errors import ProtocolViolationError, SessionClosedError, TargetClosedError
from framesync.poller import WaitTaskHandle, begin_wait, is_timeout_error, poll_title
from framesync.remote import DEFAULT_CONTRACT, RemoteContract, RemoteTarget, Session
from framesync.symbolicate import retrieve_cancellation
from framesync.types import LogOptions, ReadinessToken


async def _settle_poll(
    target: RemoteTarget,
    poll: asyncio.Future[Any],
    *,
    frame: int | None,
    log_options: LogOptions,
    evaluate_timeout_seconds: float | None,
    contract: RemoteContract,
) -> Any:
    """Map the poll's outcome onto a return value or the exception to raise."""
    try:
        raw = await poll
    except Exception as error:
        if not is_timeout_error(error):
            raise
        raise await enrich_timeout(
            target,
            error,
            frame=frame,
            log_options=log_options,
            timeout_seconds=evaluate_timeout_seconds,
            contract=contract,
        )

    token = ReadinessToken.parse(raw)
    if token is ReadinessToken.READY:
        return raw
    if token is ReadinessToken.CANCELLED:
        raise await retrieve_cancellation(target, contract=contract)
    raise ProtocolViolationError(raw)


def _release(handle: WaitTaskHandle, *futures: asyncio.Future[Any]) -> list[asyncio.Future[Any]]:
    handle.terminate()
    pending = []
    for future in futures:
        if not future.done():
            future.cancel()
            pending.append(future)
        elif not future.cancelled():
            # Mark the losing branch's exception as retrieved.
            future.exception()
    return pending


async def wait_for_ready(
    target: RemoteTarget,
    session: Session,
    *,
    timeout_ms: int,
    frame: int | None = None,
    log_options: LogOptions | None = None,
    evaluate_timeout_seconds: float | None = None,
    contract: RemoteContract = DEFAULT_CONTRACT,
) -> Any:
    """Wait until the page is ready to be captured.

    Races the readiness poll against the page being disposed and the
    session closing. Whichever settles first decides the outcome; the poll
    is terminated and both listeners removed before anything is returned
    or raised.

    Returns:
        The raw value the readiness poll resolved with.

    Raises:
        RenderCancelledError: the page cancelled the render.
        RenderTimeoutError: the page never became ready; lists open handles.
        TargetClosedError: the page was disposed while waiting.
        SessionClosedError: the browser went away while waiting.
        ProtocolViolationError: the page reported an unknown token.
    """
    log_options = log_options or LogOptions()
    loop = asyncio.get_running_loop()
    closed: asyncio.Future[Any] = loop.create_future()

    def _reject(error: BaseException) -> None:
        if not closed.done():
            closed.set_exception(error)

    handle, poll = begin_wait(target, contract.readiness_expression(), timeout_ms, poll_title(frame))
    unsubscribers = []
    resolver: asyncio.Future[Any] | None = None
    try:
        unsubscribers.append(target.on_disposed(lambda: _reject(TargetClosedError("Target closed (page disposed)"))))
        unsubscribers.append(session.on_closed(lambda: _reject(SessionClosedError("Target closed"))))
        resolver = asyncio.ensure_future(
            _settle_poll(
                target,
                poll,
                frame=frame,
                log_options=log_options,
                evaluate_timeout_seconds=evaluate_timeout_seconds,
                contract=contract,
            )
        )
        done, _ = await asyncio.wait({resolver, closed}, return_when=asyncio.FIRST_COMPLETED)
        winner = closed if closed in done else resolver
        return winner.result()
    finally:
        for unsubscribe in unsubscribers:
            unsubscribe()
        futures = [poll, closed] if resolver is None else [resolver, poll, closed]
        pending = _release(handle, *futures)
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        logger.debug("ready.settled title={}", handle.title)
