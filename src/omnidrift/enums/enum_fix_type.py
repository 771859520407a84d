# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Quick-fix enums: the transform a fix performs and its editor action kind."""

from __future__ import annotations

from enum import Enum


class EnumFixType(str, Enum):
    """Kind of code transform a quick fix performs.

    Declaration order is the tie-break priority used when two candidates have
    the same confidence: the least invasive transform wins.

    Attributes:
        REPLACE: Replace text with new text.
        WRAP: Wrap code with additional structure.
        EXTRACT: Extract code into a new location.
        IMPORT: Add an import statement.
        RENAME: Rename a symbol.
        MOVE: Move code to a different location.
        DELETE: Delete code.
    """

    REPLACE = "replace"
    WRAP = "wrap"
    EXTRACT = "extract"
    IMPORT = "import"
    RENAME = "rename"
    MOVE = "move"
    DELETE = "delete"

    @property
    def priority(self) -> int:
        """Tie-break priority, lower sorts first (replace=0 ... delete=6)."""
        return list(EnumFixType).index(self)

    @property
    def description(self) -> str:
        return _FIX_TYPE_DESCRIPTIONS[self]


_FIX_TYPE_DESCRIPTIONS: dict[EnumFixType, str] = {
    EnumFixType.REPLACE: "Replace text with new text",
    EnumFixType.WRAP: "Wrap code with additional structure",
    EnumFixType.EXTRACT: "Extract code into a new location",
    EnumFixType.IMPORT: "Add an import statement",
    EnumFixType.RENAME: "Rename a symbol",
    EnumFixType.MOVE: "Move code to a different location",
    EnumFixType.DELETE: "Delete code",
}


class EnumQuickFixKind(str, Enum):
    """Editor code-action kind of a quick fix.

    Values match the editor protocol's code action kinds so that a fix can be
    converted into a code action without translation.
    """

    QUICKFIX = "quickfix"
    REFACTOR = "refactor"
    SOURCE = "source"


__all__ = ["EnumFixType", "EnumQuickFixKind"]
