import pytest
from loguru import logger

from framesync import logging_utils
from framesync.logging_utils import configure_logging, log_verbose, log_warn
from framesync.types import LogLevel, LogOptions


def test_verbose_is_hidden_at_info(log_records) -> None:
    log_verbose(LogOptions(log_level=LogLevel.INFO), "seek.step frame={}", 1)
    assert log_records == []


def test_verbose_is_formatted_and_indented(log_records) -> None:
    log_verbose(LogOptions(indent=True, log_level=LogLevel.VERBOSE), "seek.step frame={}", 1)
    assert [r["message"] for r in log_records] == ["│ seek.step frame=1"]


def test_warn_without_error(log_records) -> None:
    log_warn(LogOptions(), "handles {not} formatted")
    assert [r["message"] for r in log_records] == ["handles {not} formatted"]


def test_configure_logging_runs_once_per_profile(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(logging_utils, "_CONFIGURED_PROFILE", None)
    monkeypatch.setenv("FRAMESYNC_LOG_LEVEL", "warn")
    messages: list[str] = []

    configure_logging()
    sink_id = logger.add(messages.append, format="{message}")
    configure_logging()
    logger.warning("still captured")

    assert messages == ["still captured\n"]
    logger.remove(sink_id)
    configure_logging(profile="pretty")
    assert logging_utils._CONFIGURED_PROFILE == "pretty"
