# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Unit tests for text edit helpers."""

from __future__ import annotations

import pytest

from omnidrift.models import ModelPosition, ModelRange, ModelTextEdit
from omnidrift.quick_fix import InvalidEditError, apply_text_edits, unified_diff
from omnidrift.quick_fix.handler_text_edits import (
    clamp_range,
    offset_at,
    position_at,
    text_in_range,
)

CONTENT = "first line\nsecond\nthird"


@pytest.mark.unit
class TestOffsets:
    """Tests for offset and position conversion."""

    def test_roundtrip(self) -> None:
        """Offsets and positions convert both ways inside the text."""
        position = ModelPosition(line=1, character=3)

        assert position_at(CONTENT, offset_at(CONTENT, position)) == position

    def test_clamped(self) -> None:
        """Out-of-range positions clamp to the text."""
        assert offset_at(CONTENT, ModelPosition(line=0, character=99)) == 10
        assert offset_at(CONTENT, ModelPosition(line=9, character=0)) == len(CONTENT)
        assert clamp_range(CONTENT, ModelRange.from_coords(2, 0, 7, 7)).end == ModelPosition(
            line=2, character=5
        )

    def test_text_in_range(self) -> None:
        """Multi-line ranges include the newline."""
        assert text_in_range(CONTENT, ModelRange.from_coords(0, 6, 1, 3)) == "line\nsec"


@pytest.mark.unit
class TestApplyTextEdits:
    """Tests for apply_text_edits."""

    def test_multiple_edits(self) -> None:
        """Edits apply against the original offsets."""
        edits = [
            ModelTextEdit(range=ModelRange.from_coords(0, 0, 0, 5), new_text="1st"),
            ModelTextEdit(range=ModelRange.from_coords(2, 0, 2, 5), new_text="3rd"),
            ModelTextEdit.insert(ModelPosition(line=1, character=0), "> "),
        ]

        assert apply_text_edits(CONTENT, edits) == "1st line\n> second\n3rd"

    def test_overlap_rejected(self) -> None:
        """Overlapping edits cannot be applied."""
        edits = [
            ModelTextEdit(range=ModelRange.from_coords(0, 0, 0, 5), new_text="a"),
            ModelTextEdit(range=ModelRange.from_coords(0, 3, 0, 8), new_text="b"),
        ]

        with pytest.raises(InvalidEditError):
            apply_text_edits(CONTENT, edits)

    def test_delete(self) -> None:
        """An empty replacement deletes the range."""
        edit = ModelTextEdit.delete(ModelRange.from_coords(0, 5, 1, 0))

        assert apply_text_edits(CONTENT, [edit]) == "firstsecond\nthird"

    def test_no_edits(self) -> None:
        """No edits return the content unchanged."""
        assert apply_text_edits(CONTENT, []) == CONTENT

    def test_shrinking_replace(self) -> None:
        """A replacement that is a prefix of the replaced text still applies."""
        edit = ModelTextEdit(range=ModelRange.from_coords(0, 0, 0, 6), new_text="foo()")

        assert apply_text_edits("foo();\n", [edit]) == "foo()\n"

    def test_insert_before_identical_text(self) -> None:
        """Inserting text equal to what follows still inserts it."""
        edit = ModelTextEdit.insert(ModelPosition(line=0, character=1), "}")

        assert apply_text_edits("{}", [edit]) == "{}}"

    def test_unchanged_range_is_noop(self) -> None:
        """Replacing a range with its own text leaves the content unchanged."""
        edit = ModelTextEdit(range=ModelRange.from_coords(1, 0, 1, 6), new_text="second")

        assert apply_text_edits(CONTENT, [edit]) == CONTENT



@pytest.mark.unit
class TestUnifiedDiff:
    """Tests for unified_diff."""

    def test_empty_when_unchanged(self) -> None:
        """Identical content has no diff."""
        assert unified_diff("a.ts", CONTENT, CONTENT) == ""

    def test_headers(self) -> None:
        """Diffs use a/ and b/ prefixes."""
        diff = unified_diff("a.ts", "x\n", "y\n")

        assert diff.splitlines()[:2] == ["--- a/a.ts", "+++ b/a.ts"]
        assert "-x" in diff and "+y" in diff
