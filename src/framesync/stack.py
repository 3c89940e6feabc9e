"""Best-effort parsing of browser error stacks."""

from __future__ import annotations

import re
from collections.abc import Iterable

from framesync.types import StackFrame

# at fn (file:1:2) / at file:1:2 / at async fn (file:1:2)
_V8_FRAME = re.compile(
    r"^\s*at\s+(?:(?P<function>.+?)\s+\()?(?P<file>[^()\s][^()]*?):(?P<line>\d+):(?P<column>\d+)\)?\s*$"
)
# fn@file:1:2 (Gecko, WebKit)
_GECKO_FRAME = re.compile(r"^\s*(?P<function>[^@]*)@(?P<file>.+?):(?P<line>\d+)(?::(?P<column>\d+))?\s*$")


def parse_stack_line(line: str) -> StackFrame | None:
    match = _V8_FRAME.match(line) or _GECKO_FRAME.match(line)
    if match is None:
        return None
    function = (match.group("function") or "").strip()
    if function.startswith("async "):
        function = function[len("async ") :]
    column = match.group("column")
    return StackFrame(
        file=match.group("file"),
        line=int(match.group("line")),
        column=int(column) if column is not None else None,
        function=function or None,
    )


def parse_stack(lines: Iterable[str]) -> list[StackFrame]:
    """Parse stack lines into frames, silently skipping lines that do not parse."""
    frames: list[StackFrame] = []
    for line in lines:
        frame = parse_stack_line(line)
        if frame is not None:
            frames.append(frame)
    return frames
