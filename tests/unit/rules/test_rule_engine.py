# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Unit tests for RuleEngine evaluation."""

from __future__ import annotations

import random

import pytest

from omnidrift.aggregation import aggregate_patterns
from omnidrift.enums import (
    EnumDetectorCategory,
    EnumScanErrorType,
    EnumSeverity,
    EnumVariantScope,
    EnumViolationState,
)
from omnidrift.models import (
    ModelAggregatedPattern,
    ModelEscalationConfig,
    ModelEscalationRule,
    ModelScanError,
    ModelSeverityConfig,
)
from omnidrift.quick_fix import QuickFixGenerator
from omnidrift.rules import (
    CategoryAiCapabilities,
    RuleEngine,
    RuleEvaluationAbortedError,
    ViolationTracker,
)
from omnidrift.severity import SeverityManager
from omnidrift.variants import VariantManager
from tests.fixtures import (
    TickingClock,
    error_handling_style_observations,
    make_observation,
    make_raw_violation,
)

STYLE_FILES = [f"src/file{i:02d}.ts" for i in range(10)]


def _style_patterns() -> list[ModelAggregatedPattern]:
    return aggregate_patterns(error_handling_style_observations())


def _scan_error(*, recoverable: bool, detector_id: str | None = "test/raising") -> ModelScanError:
    return ModelScanError(
        path="src/file00.ts",
        message="detector exploded",
        type=EnumScanErrorType.UNKNOWN,
        detector_id=detector_id,
        recoverable=recoverable,
    )


@pytest.mark.unit
class TestRuleEngineEvaluate:
    """Tests for outlier evaluation."""

    def test_outliers_become_warnings(self) -> None:
        """The two .catch() files each get a warning with expected/actual."""
        result = RuleEngine().evaluate(_style_patterns(), files=STYLE_FILES)

        assert [v.file for v in result.violations] == ["src/file08.ts", "src/file09.ts"]
        for violation in result.violations:
            assert violation.severity is EnumSeverity.WARNING
            assert violation.expected == "try/catch"
            assert violation.actual == ".catch() chaining"
            assert "expected try/catch" in violation.message
            assert violation.state is EnumViolationState.NEW
            assert violation.occurrences == 1
            assert violation.explanation is not None

    def test_summary_counts(self) -> None:
        """Rules are counted per pattern and file."""
        result = RuleEngine().evaluate(_style_patterns(), files=STYLE_FILES)

        assert result.summary.rules_evaluated == 10
        assert result.summary.rules_failed == 2
        assert result.summary.rules_passed == 8
        assert result.summary.total_violations == 2
        assert result.summary.violations_by_severity[EnumSeverity.WARNING] == 2
        assert result.summary.files_evaluated == 10

    def test_summary_counts_files_containing_pattern(self) -> None:
        """Files without the pattern add no rules."""
        files = [*STYLE_FILES, "src/readme.ts"]

        result = RuleEngine().evaluate(_style_patterns(), files=files)

        assert result.summary.rules_evaluated == 10
        assert result.summary.rules_passed == 8
        assert result.summary.files_evaluated == 11


    def test_ids_stable_across_engines(self) -> None:
        """Identical input in a fresh engine yields identical ids."""
        patterns = _style_patterns()
        shuffled = list(patterns)
        random.Random(3).shuffle(shuffled)

        first = RuleEngine().evaluate(patterns, files=STYLE_FILES)
        second = RuleEngine().evaluate(shuffled, files=list(reversed(STYLE_FILES)))

        assert [v.id for v in first.violations] == [v.id for v in second.violations]

    def test_insignificant_pattern_produces_nothing(self) -> None:
        """Patterns below the floor are not evaluated."""
        patterns = aggregate_patterns(
            [make_observation("src/a.ts", "x"), make_observation("src/b.ts", "y")]
        )

        result = RuleEngine().evaluate(patterns, files=["src/a.ts", "src/b.ts"])

        assert result.violations == []
        assert result.summary.rules_evaluated == 0

    def test_detector_violation_uses_hint(self) -> None:
        """Raw detector violations surface with their severity hint."""
        raw = make_raw_violation(severity_hint=EnumSeverity.INFO)

        result = RuleEngine().evaluate([], [raw], files=["src/a.ts"])

        (violation,) = result.violations
        assert violation.severity is EnumSeverity.INFO
        assert violation.pattern_id == "api/envelope"
        health = {h.pattern_id: h for h in result.pattern_health}
        assert health["api/envelope"].detector_violations == 1

    def test_ignored_patterns(self) -> None:
        """Configured pattern ids are tracked as ignored, never surfaced."""
        engine = RuleEngine(ignored_pattern_ids=["error-handling-style"])

        result = engine.evaluate(_style_patterns(), files=STYLE_FILES)

        assert result.violations == []
        assert len(result.ignored) == 2
        assert {r.state for r in result.records} == {EnumViolationState.IGNORED}
        assert result.pattern_health[0].ignored == 2

    def test_variant_suppresses_file(self, clock: TickingClock) -> None:
        """An approved file-scoped variant suppresses only that file."""
        variants = VariantManager(clock=clock)
        variants.create(
            pattern_id="error-handling-style",
            name="legacy promise client",
            reason="Third-party wrapper only exposes promises",
            scope=EnumVariantScope.FILE,
            scope_value="src/file08.ts",
        )

        result = RuleEngine(variant_manager=variants).evaluate(
            _style_patterns(), files=STYLE_FILES
        )

        assert [v.file for v in result.violations] == ["src/file09.ts"]
        assert [v.file for v in result.suppressed] == ["src/file08.ts"]
        assert result.suppressed[0].state is EnumViolationState.SUPPRESSED
        health = result.pattern_health[0]
        assert (health.total, health.outliers, health.suppressed, health.surfaced) == (
            10,
            2,
            1,
            1,
        )

    def test_withdrawn_variant_surfaces_uncounted(self, clock: TickingClock) -> None:
        """Deactivating a variant surfaces an unchanged file without counting it."""
        variants = VariantManager(clock=clock)
        variant = variants.create(
            pattern_id="error-handling-style",
            name="legacy promise client",
            reason="Third-party wrapper only exposes promises",
            scope=EnumVariantScope.FILE,
            scope_value="src/file08.ts",
        )
        engine = RuleEngine(variant_manager=variants)
        engine.evaluate(_style_patterns(), files=STYLE_FILES)
        variants.deactivate(variant.id)

        result = engine.evaluate(_style_patterns(), files=STYLE_FILES, counted_files=[])

        restored = {v.file: v for v in result.violations}["src/file08.ts"]
        assert restored.state is EnumViolationState.NEW
        assert restored.occurrences == 1
        assert result.suppressed == []

    def test_ai_flags_follow_capabilities(self) -> None:

        """Availability flags reflect registered categories only."""
        engine = RuleEngine(
            ai_capabilities=CategoryAiCapabilities(
                explain_categories=[EnumDetectorCategory.ERRORS]
            )
        )

        result = engine.evaluate(_style_patterns(), files=STYLE_FILES)

        assert all(v.ai_explain_available for v in result.violations)
        assert not any(v.ai_fix_available for v in result.violations)

    def test_pattern_failure_is_recoverable(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A pattern that fails to evaluate is reported and skipped."""

        def explode(pattern: ModelAggregatedPattern) -> list[object]:
            raise ValueError("bad pattern")

        monkeypatch.setattr("omnidrift.rules.rule_engine.build_outlier_candidates", explode)

        result = RuleEngine().evaluate(
            _style_patterns(), [make_raw_violation()], files=STYLE_FILES
        )

        assert [e.code for e in result.errors] == ["pattern_evaluation_failed"]
        assert result.errors[0].pattern_id == "error-handling-style"
        assert [v.pattern_id for v in result.violations] == ["api/envelope"]


@pytest.mark.unit
class TestRuleEngineDetectorErrors:
    """Tests for detector failure handling."""

    def test_recoverable_error_recorded(self) -> None:
        """Recoverable detector errors are reported and evaluation continues."""
        result = RuleEngine().evaluate(
            _style_patterns(),
            files=STYLE_FILES,
            detector_errors=[_scan_error(recoverable=True)],
        )

        (error,) = result.errors
        assert error.code == "detector_unknown"
        assert error.detector_id == "test/raising"
        assert error.file == "src/file00.ts"
        assert len(result.violations) == 2

    def test_read_errors_without_detector_ignored(self) -> None:
        """Scan errors not tied to a detector are not evaluation errors."""
        result = RuleEngine().evaluate(
            [], files=[], detector_errors=[_scan_error(recoverable=False, detector_id=None)]
        )

        assert result.errors == []

    def test_non_recoverable_error_aborts(self) -> None:
        """A fatal detector error aborts before any tracker state changes."""
        engine = RuleEngine()

        with pytest.raises(RuleEvaluationAbortedError) as exc_info:
            engine.evaluate(
                _style_patterns(),
                files=STYLE_FILES,
                detector_errors=[_scan_error(recoverable=False)],
            )

        assert exc_info.value.errors[-1].recoverable is False
        assert engine.tracker.in_pass is False
        assert engine.tracker.records() == []


@pytest.mark.unit
class TestRuleEngineTracking:
    """Tests for occurrence tracking across passes."""

    def test_escalates_after_prior_occurrences(self, clock: TickingClock) -> None:
        """With afterCount 10 the 10th pass stays a warning and the 11th escalates."""
        config = ModelSeverityConfig(
            escalation=ModelEscalationConfig(
                enabled=True,
                rules=[
                    ModelEscalationRule(
                        from_severity=EnumSeverity.WARNING,
                        to_severity=EnumSeverity.ERROR,
                        after_count=10,
                    )
                ],
            )
        )
        engine = RuleEngine(
            severity_manager=SeverityManager(config), tracker=ViolationTracker(clock=clock)
        )
        patterns = _style_patterns()

        results = [engine.evaluate(patterns, files=STYLE_FILES) for _ in range(11)]

        tenth, eleventh = results[9].violations[0], results[10].violations[0]
        assert (tenth.occurrences, tenth.severity) == (10, EnumSeverity.WARNING)
        assert (eleventh.occurrences, eleventh.severity) == (11, EnumSeverity.ERROR)
        assert eleventh.state is EnumViolationState.ESCALATED
        assert eleventh.first_seen == results[0].violations[0].first_seen

    def test_fixed_outlier_resolves(self, clock: TickingClock) -> None:
        """An outlier that disappears from an evaluated file is resolved."""
        engine = RuleEngine(tracker=ViolationTracker(clock=clock))
        engine.evaluate(_style_patterns(), files=STYLE_FILES)
        fixed = [
            make_observation(f"src/file{i:02d}.ts", "try-catch", label="try/catch")
            for i in range(9)
        ] + [make_observation("src/file09.ts", "promise-catch", label=".catch() chaining")]

        result = engine.evaluate(aggregate_patterns(fixed), files=STYLE_FILES)

        resolved = [r for r in result.records if r.state is EnumViolationState.RESOLVED]
        assert [r.file for r in resolved] == ["src/file08.ts"]

    def test_removed_files_resolve(self, clock: TickingClock) -> None:
        """Violations of removed files are resolved without re-evaluation."""
        engine = RuleEngine(tracker=ViolationTracker(clock=clock))
        engine.evaluate(_style_patterns(), files=STYLE_FILES)

        result = engine.evaluate([], files=[], removed_files=["src/file08.ts"])

        assert [(r.file, r.state) for r in result.records] == [
            ("src/file08.ts", EnumViolationState.RESOLVED)
        ]

    def test_uncounted_files_keep_occurrences(self, clock: TickingClock) -> None:
        """Files outside counted_files do not add occurrences."""
        engine = RuleEngine(tracker=ViolationTracker(clock=clock))
        patterns = _style_patterns()
        engine.evaluate(patterns, files=STYLE_FILES)

        result = engine.evaluate(patterns, files=STYLE_FILES, counted_files=[])

        assert [v.occurrences for v in result.violations] == [1, 1]

    def test_commit_false_discards(self) -> None:
        """An uncommitted pass leaves no history."""
        engine = RuleEngine()

        result = engine.evaluate(_style_patterns(), files=STYLE_FILES, commit=False)

        assert len(result.violations) == 2
        assert result.records == []
        assert engine.tracker.records() == []

    def test_reset_forgets_history(self) -> None:
        """reset() restarts occurrence counting."""
        engine = RuleEngine()
        engine.evaluate(_style_patterns(), files=STYLE_FILES)

        engine.reset()
        result = engine.evaluate(_style_patterns(), files=STYLE_FILES)

        assert [v.occurrences for v in result.violations] == [1, 1]


@pytest.mark.unit
class TestRuleEngineQuickFixes:
    """Tests for quick-fix attachment."""

    def test_preferred_fix_attached(self) -> None:
        """Surfaced violations carry the highest-confidence fix."""
        content = "promise.catch(handler)\n"
        engine = RuleEngine(quick_fix_generator=QuickFixGenerator())

        result = engine.evaluate(
            _style_patterns(), files=STYLE_FILES, content_provider=lambda path: content
        )

        for violation in result.violations:
            fixes = result.fixes[violation.id]
            assert violation.quick_fix is not None
            assert violation.quick_fix == fixes.preferred_fix
            assert violation.quick_fix.confidence == max(f.confidence for f in fixes.fixes)

    def test_unavailable_content_skips_fixes(self) -> None:
        """A failing content provider leaves violations without fixes."""

        def unreadable(path: str) -> str | None:
            raise OSError("gone")

        engine = RuleEngine(quick_fix_generator=QuickFixGenerator())

        result = engine.evaluate(
            _style_patterns(), files=STYLE_FILES, content_provider=unreadable
        )

        assert result.fixes == {}
        assert all(v.quick_fix is None for v in result.violations)
