# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Fix strategies, one per fix type.

Each strategy decides from the violation text whether it applies
(``can_handle``) and builds a single candidate edit for the violation's own
file (``generate``). Base confidences estimate how safely the transform
preserves program semantics:

    replace 0.90  rename 0.85  import 0.85  wrap 0.75
    delete  0.70  extract 0.65  move  0.60

Strategies are pure. Returning ``None`` means "not applicable to this
content"; raising is tolerated by the generator.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar, Final

from omnidrift.enums import EnumFixType, EnumQuickFixKind
from omnidrift.models import (
    ModelFixCandidate,
    ModelPosition,
    ModelRange,
    ModelTextEdit,
    ModelViolation,
    ModelWorkspaceEdit,
)
from omnidrift.quick_fix.handler_text_edits import (
    clamp_range,
    end_position,
    full_line_range,
    line_indent,
    split_lines,
    text_in_range,
)
from omnidrift.utils import detect_language

MISMATCHED_REPLACE_CONFIDENCE: Final[float] = 0.55
"""Replace confidence when the text at the range is not the reported ``actual``."""

MAX_TITLE_TEXT: Final[int] = 40


@dataclass(frozen=True)
class FixContext:
    """Everything a strategy sees: the violation and its file's content."""

    violation: ModelViolation
    content: str

    @property
    def language(self) -> str:
        return detect_language(self.violation.file)

    @property
    def range(self) -> ModelRange:
        return clamp_range(self.content, self.violation.range)


def _short(text: str) -> str:
    text = " ".join(text.split())
    if len(text) > MAX_TITLE_TEXT:
        return text[: MAX_TITLE_TEXT - 3] + "..."
    return text


def _violation_text(violation: ModelViolation) -> str:
    return " ".join(
        part for part in (violation.message, violation.explanation or "") if part
    ).lower()


class FixStrategyBase(ABC):
    """Base class for fix strategies.

    Subclasses set ``fix_type``, ``kind``, ``base_confidence`` and
    ``keywords``. The default ``can_handle`` matches keywords against the
    violation message and explanation.
    """

    fix_type: ClassVar[EnumFixType]
    kind: ClassVar[EnumQuickFixKind] = EnumQuickFixKind.QUICKFIX
    base_confidence: ClassVar[float]
    keywords: ClassVar[tuple[str, ...]] = ()

    def can_handle(self, violation: ModelViolation) -> bool:
        text = _violation_text(violation)
        return any(keyword in text for keyword in self.keywords)

    @abstractmethod
    def generate(self, context: FixContext) -> ModelFixCandidate | None:
        ...

    def _candidate(
        self,
        context: FixContext,
        title: str,
        edits: list[ModelTextEdit],
        confidence: float | None = None,
    ) -> ModelFixCandidate:
        return ModelFixCandidate(
            title=title,
            fix_type=self.fix_type,
            kind=self.kind,
            edit=ModelWorkspaceEdit.for_file(context.violation.file, edits),
            confidence=self.base_confidence if confidence is None else confidence,
        )


# =============================================================================
# Strategies
# =============================================================================


class ReplaceFixStrategy(FixStrategyBase):
    """Replace the violating range with the expected text."""

    fix_type = EnumFixType.REPLACE
    base_confidence = 0.9

    def can_handle(self, violation: ModelViolation) -> bool:
        return bool(violation.expected) and violation.expected != violation.actual

    def generate(self, context: FixContext) -> ModelFixCandidate | None:
        violation = context.violation
        range_ = context.range
        current = text_in_range(context.content, range_)
        if current == violation.expected:
            return None
        confidence = (
            self.base_confidence
            if not violation.actual or current == violation.actual
            else MISMATCHED_REPLACE_CONFIDENCE
        )
        return self._candidate(
            context,
            f"Replace with '{_short(violation.expected)}'",
            [ModelTextEdit(range=range_, new_text=violation.expected)],
            confidence,
        )


class WrapFixStrategy(FixStrategyBase):
    """Wrap the violating lines in error handling."""

    fix_type = EnumFixType.WRAP
    kind = EnumQuickFixKind.REFACTOR
    base_confidence = 0.75
    keywords = ("wrap", "try-catch", "try/catch", "error handling", "catch")

    def generate(self, context: FixContext) -> ModelFixCandidate | None:
        range_ = full_line_range(context.content, context.range)
        body = text_in_range(context.content, range_)
        if not body.strip():
            return None
        indent = line_indent(context.content, range_.start.line)
        inner = "\n".join(
            f"    {line}" if line.strip() else line for line in body.split("\n")
        )
        if context.language == "python":
            wrapped = f"{indent}try:\n{inner}\n{indent}except Exception:\n{indent}    raise"
            title = "Wrap with try/except"
        else:
            wrapped = (
                f"{indent}try {{\n{inner}\n{indent}}} catch (error) {{\n"
                f"{indent}  throw error;\n{indent}}}"
            )
            title = "Wrap with try/catch"
        return self._candidate(context, title, [ModelTextEdit(range=range_, new_text=wrapped)])


class ExtractFixStrategy(FixStrategyBase):
    """Extract the violating code into a new function at the end of the file."""

    fix_type = EnumFixType.EXTRACT
    kind = EnumQuickFixKind.REFACTOR
    base_confidence = 0.65
    keywords = ("extract", "refactor", "duplicate", "repeated")

    def generate(self, context: FixContext) -> ModelFixCandidate | None:
        range_ = context.range
        code = text_in_range(context.content, range_).strip()
        if not code or range_.is_empty:
            return None
        body = "\n".join(f"    {line}" for line in code.split("\n"))
        if context.language == "python":
            name = "extracted_function"
            definition = f"\n\ndef {name}():\n{body}\n"
        else:
            name = "extractedFunction"
            definition = f"\n\nfunction {name}() {{\n{body}\n}}\n"
        edits = [
            ModelTextEdit(range=range_, new_text=f"{name}()"),
            ModelTextEdit.insert(end_position(context.content), definition),
        ]
        return self._candidate(context, f"Extract to function '{name}'", edits)


class ImportFixStrategy(FixStrategyBase):
    """Add a missing import at the top of the file."""

    fix_type = EnumFixType.IMPORT
    base_confidence = 0.85
    keywords = ("import", "undefined reference", "not defined")

    def generate(self, context: FixContext) -> ModelFixCandidate | None:
        statement = self._import_statement(context)
        if statement is None or statement in context.content:
            return None
        line = self._insert_line(context.content)
        return self._candidate(
            context,
            f"Add import: {_short(statement)}",
            [ModelTextEdit.insert(ModelPosition(line=line, character=0), f"{statement}\n")],
        )

    @staticmethod
    def _import_statement(context: FixContext) -> str | None:
        expected = context.violation.expected.strip()
        if not expected:
            return None
        if expected.startswith(("import ", "from ")):
            return expected
        if " " in expected:
            return None
        if context.language == "python":
            return f"import {expected}"
        alias = re.sub(r"\W", "", expected.rsplit("/", 1)[-1]) or "module"
        return f"import * as {alias} from '{expected}';"

    @staticmethod
    def _insert_line(content: str) -> int:
        lines = split_lines(content)
        if lines and lines[0].startswith("#!"):
            return 1
        return 0


_CONVENTION_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"camel_?case|pascal_?case|snake_?case|kebab-?case|screaming_snake_case",
    re.IGNORECASE,
)


def _split_words(identifier: str) -> list[str]:
    spaced = re.sub(r"([a-z0-9])([A-Z])", r"\1 \2", identifier)
    return [word.lower() for word in re.split(r"[\s_\-]+", spaced) if word]


def convert_case(identifier: str, convention: str) -> str:
    """Convert ``identifier`` to a naming convention.

    Example:
        >>> convert_case("snake_case_name", "camelCase")
        'snakeCaseName'
    """
    words = _split_words(identifier)
    if not words:
        return identifier
    key = convention.lower().replace("_", "").replace("-", "")
    if key == "camelcase":
        return words[0] + "".join(w.capitalize() for w in words[1:])
    if key == "pascalcase":
        return "".join(w.capitalize() for w in words)
    if key == "snakecase":
        return "_".join(words)
    if key == "kebabcase":
        return "-".join(words)
    if key == "screamingsnakecase":
        return "_".join(words).upper()
    return identifier


class RenameFixStrategy(FixStrategyBase):
    """Rename an identifier everywhere it appears in the violation's file."""

    fix_type = EnumFixType.RENAME
    base_confidence = 0.85
    keywords = (
        "rename",
        "naming",
        "camelcase",
        "snake_case",
        "pascalcase",
        "kebab-case",
        "convention",
    )

    def generate(self, context: FixContext) -> ModelFixCandidate | None:
        violation = context.violation
        old_name = self._old_name(context)
        if not old_name:
            return None
        expected = violation.expected.strip()
        convention_match = _CONVENTION_PATTERN.fullmatch(expected)
        if convention_match:
            new_name = convert_case(old_name, expected)
            title = f"Rename to '{new_name}' ({expected})"
        elif re.fullmatch(r"[A-Za-z_$][\w$-]*", expected):
            new_name = expected
            title = f"Rename to '{new_name}'"
        else:
            return None
        if new_name == old_name:
            return None
        edits = [
            ModelTextEdit(range=range_, new_text=new_name)
            for range_ in self._occurrences(context.content, old_name)
        ]
        if not edits:
            return None
        return self._candidate(context, title, edits)

    @staticmethod
    def _old_name(context: FixContext) -> str | None:
        actual = context.violation.actual.strip()
        if re.fullmatch(r"[A-Za-z_$][\w$-]*", actual):
            return actual
        match = re.search(r"[A-Za-z_$][\w$]*", text_in_range(context.content, context.range))
        return match.group(0) if match else None

    @staticmethod
    def _occurrences(content: str, name: str) -> list[ModelRange]:
        pattern = re.compile(rf"(?<![\w$]){re.escape(name)}(?![\w$])")
        ranges = []
        for line_number, line in enumerate(split_lines(content)):
            for match in pattern.finditer(line):
                ranges.append(
                    ModelRange.from_coords(line_number, match.start(), line_number, match.end())
                )
        return ranges


_TARGET_LINE_PATTERN: Final[re.Pattern[str]] = re.compile(r"\bline\s+(\d+)\b", re.IGNORECASE)


class MoveFixStrategy(FixStrategyBase):
    """Move the violating lines to another line of the same file."""

    fix_type = EnumFixType.MOVE
    kind = EnumQuickFixKind.REFACTOR
    base_confidence = 0.6
    keywords = ("move", "location", "organize")

    def generate(self, context: FixContext) -> ModelFixCandidate | None:
        lines = split_lines(context.content)
        source = full_line_range(context.content, context.range)
        match = _TARGET_LINE_PATTERN.search(context.violation.expected)
        target = int(match.group(1)) if match else 0
        target = min(target, len(lines) - 1)
        if source.start.line <= target <= source.end.line:
            return None
        code = text_in_range(context.content, source)
        if source.end.line + 1 < len(lines):
            removal = ModelRange.from_coords(source.start.line, 0, source.end.line + 1, 0)
        elif source.start.line > 0:
            removal = ModelRange.from_coords(
                source.start.line - 1,
                len(lines[source.start.line - 1]),
                source.end.line,
                len(lines[source.end.line]),
            )
        else:
            return None
        insert_at = ModelPosition(line=target, character=0)
        edits = [
            ModelTextEdit.insert(insert_at, f"{code}\n"),
            ModelTextEdit.delete(removal),
        ]
        return self._candidate(context, f"Move code to line {target}", edits)


class DeleteFixStrategy(FixStrategyBase):
    """Delete the violating code, including its lines when nothing else is on them."""

    fix_type = EnumFixType.DELETE
    base_confidence = 0.7
    keywords = ("delete", "unused", "redundant", "dead code", "remove")

    def generate(self, context: FixContext) -> ModelFixCandidate | None:
        range_ = context.range
        if range_.is_empty:
            return None
        lines = split_lines(context.content)
        whole = full_line_range(context.content, range_)
        if text_in_range(context.content, whole).strip() == text_in_range(
            context.content, range_
        ).strip():
            if whole.end.line + 1 < len(lines):
                range_ = ModelRange.from_coords(whole.start.line, 0, whole.end.line + 1, 0)
            else:
                range_ = whole
        return self._candidate(context, "Delete code", [ModelTextEdit.delete(range_)])


DEFAULT_STRATEGIES: Final[tuple[type[FixStrategyBase], ...]] = (
    ReplaceFixStrategy,
    WrapFixStrategy,
    ExtractFixStrategy,
    ImportFixStrategy,
    RenameFixStrategy,
    MoveFixStrategy,
    DeleteFixStrategy,
)
"""One strategy class per fix type, in priority order."""


__all__ = [
    "DEFAULT_STRATEGIES",
    "DeleteFixStrategy",
    "ExtractFixStrategy",
    "FixContext",
    "FixStrategyBase",
    "ImportFixStrategy",
    "MoveFixStrategy",
    "RenameFixStrategy",
    "ReplaceFixStrategy",
    "WrapFixStrategy",
    "convert_case",
]
