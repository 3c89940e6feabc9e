"""Remote evaluation with a local time bound."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import Any

from framesync.config import get_settings
from framesync.errors import EvaluationTimeoutError
from framesync.remote import RemoteTarget


def resolve_evaluate_timeout(timeout_seconds: float | None) -> float:
    """Use the caller's bound, or ``FRAMESYNC_EVALUATE_TIMEOUT_SECONDS`` when none is given."""
    if timeout_seconds is not None:
        return timeout_seconds
    return get_settings().evaluate_timeout_seconds


async def evaluate_with_timeout(
    target: RemoteTarget,
    expression: str,
    args: Sequence[Any] = (),
    *,
    timeout_seconds: float | None = None,
    frame: int | None = None,
    purpose: str = "evaluate",
) -> Any:
    """Evaluate on the target, failing if the page does not answer in time.

    Errors raised by the target itself, timeouts included, pass through.
    """
    bound = resolve_evaluate_timeout(timeout_seconds)
    scope = asyncio.timeout(bound)
    try:
        async with scope:
            return await target.evaluate(expression, args)
    except TimeoutError as exc:
        if not scope.expired():
            raise
        where = "" if frame is None else f" at frame {frame}"
        raise EvaluationTimeoutError(
            f"Timed out after {bound:g}s waiting for {purpose}{where} to return from the page"
        ) from exc
