"""Turn a cancellation reported by the page into a Python exception."""

from __future__ import annotations

from framesync.errors import CancellationPayloadError, RenderCancelledError
from framesync.remote import DEFAULT_CONTRACT, RemoteContract, RemoteTarget
from framesync.stack import parse_stack


def symbolicate_cancellation(payload: object) -> BaseException:
    """Build the exception for a cancellation payload.

    A string is split into a message line and stack lines. Anything else is
    handed back untouched: exceptions as they are, other values wrapped.
    """
    if isinstance(payload, BaseException):
        return payload
    if not isinstance(payload, str):
        return CancellationPayloadError(payload)
    lines = payload.split("\n")
    return RenderCancelledError(
        message=lines[0],
        raw_stack=payload,
        frames=parse_stack(lines[1:]),
    )


async def retrieve_cancellation(
    target: RemoteTarget,
    *,
    contract: RemoteContract = DEFAULT_CONTRACT,
) -> BaseException:
    """Read the page's cancellation error and return the exception to raise."""
    payload = await target.evaluate(contract.cancelled_error_expression())
    return symbolicate_cancellation(payload)
