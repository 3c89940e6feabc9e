"""Timeout diagnostics: list the delayRender() handles still open on the page."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from framesync.errors import RenderTimeoutError
from framesync.evaluate import evaluate_with_timeout
from framesync.logging_utils import log_warn
from framesync.remote import DEFAULT_CONTRACT, RemoteContract, RemoteTarget
from framesync.types import DelayedOperationEntry, LogOptions


def format_entries(entries: Iterable[DelayedOperationEntry]) -> str:
    parts = []
    for index, entry in enumerate(entries, start=1):
        if entry.label is None:
            parts.append(f"{index}. (no label)")
        else:
            parts.append(f'{index}. "{entry.label}"')
    return ", ".join(parts)


def _coerce_entries(raw: Any) -> list[DelayedOperationEntry]:
    entries = []
    for item in raw or ():
        if isinstance(item, DelayedOperationEntry):
            entries.append(item)
        elif isinstance(item, dict):
            label = item.get("label")
            entries.append(DelayedOperationEntry(id=str(item.get("id")), label=None if label is None else str(label)))
        else:
            raise TypeError(f"unexpected delayed operation entry: {item!r}")
    return entries


async def collect_delayed_operations(
    target: RemoteTarget,
    *,
    frame: int | None = None,
    timeout_seconds: float | None = None,
    contract: RemoteContract = DEFAULT_CONTRACT,
) -> str:
    """Return the open handles as ``1. "label", 2. (no label)``; empty when none."""
    raw = await evaluate_with_timeout(
        target,
        contract.delayed_operations_expression(),
        timeout_seconds=timeout_seconds,
        frame=frame,
        purpose="delayRender() handles",
    )
    if isinstance(raw, str):
        return raw
    return format_entries(_coerce_entries(raw))


def timeout_message(frame: int | None, handles: str) -> str:
    message = "Timeout exceeded rendering the component"
    if frame is not None:
        message += f" at frame {frame}"
    message += "."
    if handles:
        message += f" Open delayRender() handles: {handles}"
    return message


async def enrich_timeout(
    target: RemoteTarget,
    error: BaseException,
    *,
    frame: int | None,
    log_options: LogOptions,
    timeout_seconds: float | None = None,
    contract: RemoteContract = DEFAULT_CONTRACT,
) -> BaseException:
    """Return the error to raise for a poll timeout.

    Falls back to ``error`` itself if the page cannot be probed.
    """
    try:
        handles = await collect_delayed_operations(
            target,
            frame=frame,
            timeout_seconds=timeout_seconds,
            contract=contract,
        )
    except Exception as probe_error:
        log_warn(
            log_options,
            "Tried to get delayRender() handles for timeout, but could not do so because of",
            probe_error,
        )
        return error
    enriched = RenderTimeoutError(timeout_message(frame, handles), frame=frame, handles=handles)
    enriched.__cause__ = error
    return enriched
