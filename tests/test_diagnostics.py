import asyncio

import pytest

from framesync.diagnostics import collect_delayed_operations, enrich_timeout, format_entries, timeout_message
from framesync.errors import RenderTimeoutError
from framesync.types import DelayedOperationEntry, LogLevel, LogOptions


def test_format_entries_numbers_from_one() -> None:
    entries = [DelayedOperationEntry(id="a", label="fetch"), DelayedOperationEntry(id="b")]
    assert format_entries(entries) == '1. "fetch", 2. (no label)'


def test_timeout_message_without_handles_or_frame() -> None:
    assert timeout_message(None, "") == "Timeout exceeded rendering the component."


def test_timeout_message_names_frame_zero() -> None:
    assert timeout_message(0, "") == "Timeout exceeded rendering the component at frame 0."


@pytest.mark.asyncio
async def test_collect_accepts_empty_registry(target, contract) -> None:
    target.responses[contract.delayed_operations_expression()] = []
    assert await collect_delayed_operations(target) == ""


@pytest.mark.asyncio
async def test_collect_is_bounded(target, contract) -> None:
    async def _never() -> None:
        await asyncio.Event().wait()

    target.responses[contract.delayed_operations_expression()] = _never
    original = TimeoutError("timeout 10ms exceeded")

    result = await enrich_timeout(target, original, frame=2, log_options=LogOptions(), timeout_seconds=0.01)

    assert result is original


@pytest.mark.asyncio
async def test_enrich_without_handles(target, contract) -> None:
    target.responses[contract.delayed_operations_expression()] = []

    result = await enrich_timeout(target, Exception("timeout exceeded"), frame=3, log_options=LogOptions())

    assert isinstance(result, RenderTimeoutError)
    assert str(result) == "Timeout exceeded rendering the component at frame 3."
    assert result.frame == 3
    assert result.handles == ""


@pytest.mark.asyncio
async def test_probe_failure_warning_respects_log_level(target, contract, log_records) -> None:
    target.responses[contract.delayed_operations_expression()] = RuntimeError("gone")
    original = Exception("timeout exceeded")

    result = await enrich_timeout(target, original, frame=None, log_options=LogOptions(log_level=LogLevel.ERROR))

    assert result is original
    assert [r for r in log_records if r["level"].name == "WARNING"] == []


@pytest.mark.asyncio
async def test_probe_failure_warning_is_indented(target, contract, log_records) -> None:
    target.responses[contract.delayed_operations_expression()] = RuntimeError("gone")

    await enrich_timeout(target, Exception("timeout exceeded"), frame=None, log_options=LogOptions(indent=True))

    warnings = [r for r in log_records if r["level"].name == "WARNING"]
    assert len(warnings) == 1
    assert warnings[0]["message"].startswith("│ Tried to get delayRender() handles")
    assert warnings[0]["exception"] is not None


@pytest.mark.asyncio
async def test_probe_bound_comes_from_environment(target, contract, monkeypatch: pytest.MonkeyPatch) -> None:
    async def _never() -> None:
        await asyncio.Event().wait()

    monkeypatch.setenv("FRAMESYNC_EVALUATE_TIMEOUT_SECONDS", "0.01")
    target.responses[contract.delayed_operations_expression()] = _never
    original = Exception("timeout exceeded")

    result = await asyncio.wait_for(enrich_timeout(target, original, frame=None, log_options=LogOptions()), 1.0)

    assert result is original
