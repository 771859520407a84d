# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Pure text operations on zero-indexed line/character ranges.

Lines are separated by ``\\n``. A position past the end of its line or past
the last line is clamped, which is how editors treat out-of-range positions.
"""

from __future__ import annotations

import difflib
from collections.abc import Iterable

from omnidrift.models import ModelPosition, ModelRange, ModelTextEdit
from omnidrift.quick_fix.exceptions import InvalidEditError


def split_lines(content: str) -> list[str]:
    return content.split("\n")


def offset_at(content: str, position: ModelPosition) -> int:
    """Character offset of ``position`` in ``content``, clamped to the text."""
    lines = split_lines(content)
    line = min(position.line, len(lines) - 1)
    offset = sum(len(text) + 1 for text in lines[:line])
    if position.line > line:
        return offset + len(lines[line])
    return offset + min(position.character, len(lines[line]))


def position_at(content: str, offset: int) -> ModelPosition:
    """Inverse of ``offset_at`` for an offset inside ``content``."""
    offset = max(0, min(offset, len(content)))
    before = content[:offset]
    line = before.count("\n")
    return ModelPosition(line=line, character=offset - (before.rfind("\n") + 1))


def clamp_range(content: str, range_: ModelRange) -> ModelRange:
    return ModelRange(
        start=position_at(content, offset_at(content, range_.start)),
        end=position_at(content, offset_at(content, range_.end)),
    )


def text_in_range(content: str, range_: ModelRange) -> str:
    return content[offset_at(content, range_.start) : offset_at(content, range_.end)]


def end_position(content: str) -> ModelPosition:
    lines = split_lines(content)
    return ModelPosition(line=len(lines) - 1, character=len(lines[-1]))


def full_line_range(content: str, range_: ModelRange) -> ModelRange:
    """Range covering the whole lines touched by ``range_`` (without the
    trailing newline of the last line)."""
    lines = split_lines(content)
    last = min(range_.end.line, len(lines) - 1)
    first = min(range_.start.line, last)
    return ModelRange.from_coords(first, 0, last, len(lines[last]))


def line_indent(content: str, line: int) -> str:
    lines = split_lines(content)
    if line >= len(lines):
        return ""
    text = lines[line]
    return text[: len(text) - len(text.lstrip())]


def is_range_in_bounds(content: str, range_: ModelRange) -> bool:
    lines = split_lines(content)
    for position in (range_.start, range_.end):
        if position.line >= len(lines) or position.character > len(lines[position.line]):
            return False
    return True


def apply_text_edits(content: str, edits: Iterable[ModelTextEdit]) -> str:
    """Apply non-overlapping edits to ``content``.

    Raises:
        InvalidEditError: If two edits overlap.
    """
    ordered = sorted(edits, key=lambda e: e.range.sort_key())
    for previous, current in zip(ordered, ordered[1:]):
        if previous.range.overlaps(current.range):
            raise InvalidEditError("Cannot apply overlapping edits")

    result = content
    # back to front so earlier offsets stay valid
    for edit in reversed(ordered):
        start = offset_at(content, edit.range.start)
        end = offset_at(content, edit.range.end)
        result = result[:start] + edit.new_text + result[end:]
    return result


def unified_diff(file: str, before: str, after: str) -> str:
    """Unified diff of a single file, empty when nothing changes."""
    return "".join(
        difflib.unified_diff(
            before.splitlines(keepends=True),
            after.splitlines(keepends=True),
            fromfile=f"a/{file}",
            tofile=f"b/{file}",
        )
    )


__all__ = [
    "apply_text_edits",
    "clamp_range",
    "end_position",
    "full_line_range",
    "is_range_in_bounds",
    "line_indent",
    "offset_at",
    "position_at",
    "split_lines",
    "text_in_range",
    "unified_diff",
]
