# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Unit tests for AI availability flags and request context building."""

from __future__ import annotations

import pytest

from omnidrift.aggregation import aggregate_patterns
from omnidrift.enums import EnumDetectorCategory
from omnidrift.models import ModelAggregatedPattern
from omnidrift.rules import CategoryAiCapabilities, build_ai_context, extract_snippet
from tests.fixtures import make_observation, make_violation


@pytest.mark.unit
class TestCategoryAiCapabilities:
    """Tests for CategoryAiCapabilities."""

    def test_categories(self) -> None:
        """Flags are true only for configured categories."""
        capabilities = CategoryAiCapabilities(
            explain_categories=[EnumDetectorCategory.SECURITY],
            fix_categories=[EnumDetectorCategory.STYLING],
        )

        assert capabilities.can_explain(EnumDetectorCategory.SECURITY) is True
        assert capabilities.can_fix(EnumDetectorCategory.SECURITY) is False
        assert capabilities.can_fix(EnumDetectorCategory.STYLING) is True

    def test_nothing_registered(self) -> None:
        """Without configuration no capability is available."""
        capabilities = CategoryAiCapabilities()

        assert not any(capabilities.can_explain(c) for c in EnumDetectorCategory)


@pytest.mark.unit
class TestExtractSnippet:
    """Tests for extract_snippet."""

    def test_clamped_context(self) -> None:
        """Context lines are clamped to the file."""
        content = "\n".join(f"line {i}" for i in range(10))

        snippet = extract_snippet("a.ts", content, 1, 1, context_lines=3)

        assert (snippet.start_line, snippet.end_line) == (0, 4)
        assert snippet.code.splitlines()[0] == "line 0"

    def test_range_past_end(self) -> None:
        """A range past the end still yields the last lines."""
        snippet = extract_snippet("a.ts", "only\nlines", 8, 9)

        assert snippet.end_line == 1
        assert "lines" in snippet.code


def _error_handling_pattern() -> ModelAggregatedPattern:
    observations = [
        make_observation(f"src/{name}.ts", "try-catch", snippet=f"try {{ {name}() }}")
        for name in ("a", "b", "c", "d")
    ] + [make_observation("src/e.ts", "promise-catch")]
    (pattern,) = aggregate_patterns(observations)
    return pattern


@pytest.mark.unit
class TestBuildAiContext:
    """Tests for build_ai_context."""

    def test_unavailable_returns_none(self) -> None:
        """No context is built when the flag is off."""
        violation = make_violation(file="src/e.ts")

        assert build_ai_context(violation, _error_handling_pattern(), "code") is None

    def test_explain_context(self) -> None:
        """The context carries the pattern, the snippet and examples."""
        violation = make_violation(file="src/e.ts", explain=True)

        context = build_ai_context(violation, _error_handling_pattern(), "p.catch(x)\nmore")

        assert context is not None
        assert context.purpose == "explain"
        assert context.pattern is not None
        assert context.pattern.dominant_variant == "try-catch"
        assert context.snippet is not None
        assert context.snippet.code.startswith("p.catch(x)")
        assert len(context.similar_examples) == 3
        assert all(e.file != "src/e.ts" for e in context.similar_examples)

    def test_fix_flag_checked_for_fix(self) -> None:
        """Fix requests depend on the fix flag."""
        violation = make_violation(file="src/e.ts", explain=True)

        assert build_ai_context(violation, None, None, purpose="fix") is None

        fixable = make_violation(file="src/e.ts", fix=True)
        context = build_ai_context(fixable, None, None, purpose="fix")
        assert context is not None
        assert context.pattern is None
        assert context.snippet is None
        assert context.similar_examples == []
