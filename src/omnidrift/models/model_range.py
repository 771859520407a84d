# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Positions, ranges and text edits.

All coordinates are zero-indexed and follow the editor protocol conventions:
``line`` counts lines, ``character`` counts characters within the line, the
range start is inclusive and the end is exclusive.

Invariants:
    - A range's start never comes after its end.
    - Edits to one file inside a workspace edit never overlap.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ModelPosition(BaseModel):
    """A position in a text document (zero-indexed)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    line: int = Field(..., ge=0, description="Line number (0-indexed)")
    character: int = Field(
        ..., ge=0, description="Character offset on the line (0-indexed)"
    )

    def as_tuple(self) -> tuple[int, int]:
        return (self.line, self.character)


class ModelRange(BaseModel):
    """A range in a text document, start inclusive and end exclusive."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    start: ModelPosition
    end: ModelPosition

    @model_validator(mode="after")
    def _validate_start_before_end(self) -> ModelRange:
        if self.start.as_tuple() > self.end.as_tuple():
            raise ValueError(
                f"Range start {self.start.as_tuple()} is after end {self.end.as_tuple()}"
            )
        return self

    @classmethod
    def from_coords(
        cls, start_line: int, start_character: int, end_line: int, end_character: int
    ) -> ModelRange:
        """Create a range from line/character coordinates."""
        return cls(
            start=ModelPosition(line=start_line, character=start_character),
            end=ModelPosition(line=end_line, character=end_character),
        )

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    def overlaps(self, other: ModelRange) -> bool:
        """Whether two ranges share at least one character.

        Touching ranges (one ends where the other starts) and empty ranges at
        a boundary do not overlap.
        """
        return (
            self.start.as_tuple() < other.end.as_tuple()
            and other.start.as_tuple() < self.end.as_tuple()
        )

    def sort_key(self) -> tuple[int, int, int, int]:
        return (*self.start.as_tuple(), *self.end.as_tuple())


class ModelTextEdit(BaseModel):
    """A change to a single range of a document.

    ``new_text`` replaces the range; an empty string deletes it and an empty
    range inserts at its position.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    range: ModelRange
    new_text: str = Field(default="", description="Replacement text")

    @classmethod
    def insert(cls, position: ModelPosition, new_text: str) -> ModelTextEdit:
        return cls(range=ModelRange(start=position, end=position), new_text=new_text)

    @classmethod
    def delete(cls, range_: ModelRange) -> ModelTextEdit:
        return cls(range=range_, new_text="")


class ModelWorkspaceEdit(BaseModel):
    """Text edits grouped by file (relative path).

    Compatible with the editor protocol's WorkspaceEdit ``changes`` map.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    changes: dict[str, list[ModelTextEdit]] = Field(
        default_factory=dict,
        description="Text edits keyed by file path",
    )

    @model_validator(mode="after")
    def _validate_no_overlap(self) -> ModelWorkspaceEdit:
        for file, edits in self.changes.items():
            ordered = sorted(edits, key=lambda e: e.range.sort_key())
            for previous, current in zip(ordered, ordered[1:]):
                if previous.range.overlaps(current.range):
                    raise ValueError(f"Overlapping text edits for file '{file}'")
        return self

    @classmethod
    def for_file(cls, file: str, edits: list[ModelTextEdit]) -> ModelWorkspaceEdit:
        """Create a workspace edit with changes to a single file."""
        return cls(changes={file: list(edits)})

    @property
    def files(self) -> list[str]:
        return sorted(self.changes)

    def edit_count(self) -> int:
        return sum(len(edits) for edits in self.changes.values())


__all__ = ["ModelPosition", "ModelRange", "ModelTextEdit", "ModelWorkspaceEdit"]
