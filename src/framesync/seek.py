"""Seek the rendered composition to one frame and wait until it can be captured."""

from __future__ import annotations

from framesync.evaluate import evaluate_with_timeout, resolve_evaluate_timeout
from framesync.logging_utils import log_verbose
from framesync.race import wait_for_ready
from framesync.remote import DEFAULT_CONTRACT, FONTS_READY_EXPRESSION, RemoteContract, RemoteTarget, Session
from framesync.types import FrameSeekRequest


async def seek_to_frame(
    target: RemoteTarget,
    session: Session,
    request: FrameSeekRequest,
    *,
    evaluate_timeout_seconds: float | None = None,
    contract: RemoteContract = DEFAULT_CONTRACT,
) -> None:
    """Move the page to ``request.frame`` and return once it is settled.

    Each step starts only after the previous one succeeded; the first
    failure propagates unchanged. Setting the frame and waiting for fonts
    are not raced against the page or browser closing.
    """
    if request.frame is None:
        raise ValueError("seek_to_frame needs a frame number")
    frame = request.frame
    log_options = request.log_options
    evaluate_timeout_seconds = resolve_evaluate_timeout(evaluate_timeout_seconds)

    log_verbose(log_options, "seek.step frame={} step=baseline", frame)
    await wait_for_ready(
        target,
        session,
        timeout_ms=request.timeout_ms,
        frame=None,
        log_options=log_options,
        evaluate_timeout_seconds=evaluate_timeout_seconds,
        contract=contract,
    )

    log_verbose(log_options, "seek.step frame={} step=set_frame composition={}", frame, request.composition)
    await evaluate_with_timeout(
        target,
        contract.set_frame_expression(),
        [frame, request.composition],
        timeout_seconds=evaluate_timeout_seconds,
        frame=frame,
        purpose="setting the frame",
    )

    log_verbose(log_options, "seek.step frame={} step=ready", frame)
    await wait_for_ready(
        target,
        session,
        timeout_ms=request.timeout_ms,
        frame=frame,
        log_options=log_options,
        evaluate_timeout_seconds=evaluate_timeout_seconds,
        contract=contract,
    )

    log_verbose(log_options, "seek.step frame={} step=fonts", frame)
    await target.evaluate(FONTS_READY_EXPRESSION)
