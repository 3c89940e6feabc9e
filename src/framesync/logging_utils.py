"""Runtime logging helpers."""

from __future__ import annotations

import os
import sys
from logging import Handler
from typing import Literal

from loguru import logger
from rich import get_console
from rich.logging import RichHandler

from framesync.types import LogLevel, LogOptions

LogProfile = Literal["default", "pretty"]

INDENT_TOKEN = "│"

_PROFILE_FORMATS: dict[LogProfile, str] = {
    "pretty": "{message}",
    "default": "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<7} | {name}:{function}:{line} | {message}",
}
_CONFIGURED_PROFILE: LogProfile | None = None


def _build_pretty_handler() -> Handler:
    return RichHandler(
        console=get_console(),
        show_level=True,
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )


def configure_logging(*, profile: LogProfile = "default") -> None:
    """Configure process-level logging once."""

    global _CONFIGURED_PROFILE
    if profile == _CONFIGURED_PROFILE:
        return

    level = os.getenv("FRAMESYNC_LOG_LEVEL", "INFO").upper()
    if level == "WARN":
        level = "WARNING"
    elif level == "VERBOSE":
        level = "DEBUG"
    logger.remove()
    if profile == "pretty":
        logger.add(
            _build_pretty_handler(),
            level=level,
            format=_PROFILE_FORMATS[profile],
            backtrace=False,
            diagnose=False,
        )
    else:
        logger.add(
            sys.stderr,
            level=level,
            format=_PROFILE_FORMATS[profile],
            backtrace=False,
            diagnose=False,
        )
    _CONFIGURED_PROFILE = profile


def _prefix(options: LogOptions, message: str) -> str:
    return f"{INDENT_TOKEN} {message}" if options.indent else message


def is_enabled(options: LogOptions, level: LogLevel) -> bool:
    return level >= options.log_level


def log_warn(options: LogOptions, message: str, error: BaseException | None = None) -> None:
    """Log a warning, optionally with the error that caused it."""
    if not is_enabled(options, LogLevel.WARN):
        return
    text = _prefix(options, message)
    if error is None:
        logger.warning(text)
        return
    logger.opt(exception=error).warning("{} {!r}", text, error)


def log_verbose(options: LogOptions, message: str, *args: object) -> None:
    if not is_enabled(options, LogLevel.VERBOSE):
        return
    logger.debug(_prefix(options, message), *args)
