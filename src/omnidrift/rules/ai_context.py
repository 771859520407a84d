# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""AI availability flags and request context building.

The engine decides whether an explanation or fix request would be
applicable and, when it is, assembles the request context. It never calls an
AI or network service itself.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Final, Literal

from omnidrift.enums import EnumDetectorCategory
from omnidrift.models import (
    ModelAggregatedPattern,
    ModelAiRequestContext,
    ModelCodeSnippet,
    ModelPatternObservation,
    ModelPatternSummary,
    ModelViolation,
)

SNIPPET_CONTEXT_LINES: Final[int] = 3
"""Lines of context around the violating range in the request snippet."""

MAX_SIMILAR_EXAMPLES: Final[int] = 3


class CategoryAiCapabilities:
    """Availability of AI capabilities from configured category lists."""

    def __init__(
        self,
        explain_categories: Iterable[EnumDetectorCategory] = (),
        fix_categories: Iterable[EnumDetectorCategory] = (),
    ) -> None:
        self._explain = frozenset(explain_categories)
        self._fix = frozenset(fix_categories)

    def can_explain(self, category: EnumDetectorCategory) -> bool:
        return category in self._explain

    def can_fix(self, category: EnumDetectorCategory) -> bool:
        return category in self._fix


def extract_snippet(
    file: str,
    content: str,
    start_line: int,
    end_line: int,
    context_lines: int = SNIPPET_CONTEXT_LINES,
) -> ModelCodeSnippet:
    """Lines ``start_line - context_lines`` to ``end_line + context_lines``, clamped."""
    lines = content.split("\n")
    first = max(0, start_line - context_lines)
    last = min(len(lines) - 1, end_line + context_lines)
    first = min(first, last)
    return ModelCodeSnippet(
        file=file,
        start_line=first,
        end_line=last,
        code="\n".join(lines[first : last + 1]),
    )


def _example_snippets(
    observations: Sequence[ModelPatternObservation], exclude_file: str
) -> list[ModelCodeSnippet]:
    # examples from other files first; observations without a snippet are skipped
    ordered = sorted(observations, key=lambda o: (o.file == exclude_file, o.sort_key()))
    examples: list[ModelCodeSnippet] = []
    for observation in ordered:
        if not observation.snippet:
            continue
        examples.append(
            ModelCodeSnippet(
                file=observation.file,
                start_line=observation.range.start.line,
                end_line=observation.range.end.line,
                code=observation.snippet,
            )
        )
        if len(examples) == MAX_SIMILAR_EXAMPLES:
            break
    return examples


def build_ai_context(
    violation: ModelViolation,
    pattern: ModelAggregatedPattern | None,
    content: str | None,
    similar_examples: Sequence[ModelPatternObservation] | None = None,
    purpose: Literal["explain", "fix"] = "explain",
) -> ModelAiRequestContext | None:
    """Build the request context for an explanation or fix.

    Returns:
        The context, or ``None`` when the matching availability flag on the
        violation is false.
    """
    available = (
        violation.ai_explain_available if purpose == "explain" else violation.ai_fix_available
    )
    if not available:
        return None

    summary = None
    if pattern is not None:
        summary = ModelPatternSummary(
            id=pattern.id,
            dominant_variant=pattern.dominant_variant,
            dominant_label=pattern.dominant_label,
            confidence=pattern.confidence,
            confidence_level=pattern.confidence_level,
            frequency=pattern.frequency,
        )
    snippet = None
    if content is not None:
        snippet = extract_snippet(
            violation.file,
            content,
            violation.range.start.line,
            violation.range.end.line,
        )
    if similar_examples is None:
        similar_examples = pattern.evidence if pattern is not None else []
    return ModelAiRequestContext(
        purpose=purpose,
        violation=violation,
        pattern=summary,
        snippet=snippet,
        similar_examples=_example_snippets(similar_examples, violation.file),
    )


__all__ = [
    "MAX_SIMILAR_EXAMPLES",
    "SNIPPET_CONTEXT_LINES",
    "CategoryAiCapabilities",
    "build_ai_context",
    "extract_snippet",
]
