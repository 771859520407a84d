# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Rule engine: turns aggregated outliers into tracked, scored violations.

Pipeline per pass:
    1. Record detector failures as evaluation errors; abort on a
       non-recoverable one before any state is staged.
    2. Build one candidate per outlier of a significant pattern and per raw
       detector violation, with a deterministic id from (file, pattern, range).
    3. Route each candidate: ignored by configuration, suppressed by an
       approved variant, or surfaced.
    4. Stage occurrences in the tracker and resolve severity from the prior
       occurrence count, so with ``afterCount: 10`` the 10th occurrence keeps
       its base severity and the 11th escalates.
    5. Generate quick fixes for surfaced violations.
    6. Commit the tracker pass (or discard it when ``commit=False``).

Everything is sorted before it is decided, so results do not depend on the
order observations arrived in.
"""

from __future__ import annotations

import logging
import time
from collections import Counter, defaultdict
from collections.abc import Callable, Iterable, Sequence

from omnidrift.enums import EnumViolationState
from omnidrift.models import (
    ModelAggregatedPattern,
    ModelFixCandidate,
    ModelPatternHealth,
    ModelQuickFixResult,
    ModelRawViolation,
    ModelRuleEvaluationError,
    ModelRuleEvaluationResult,
    ModelRuleEvaluationSummary,
    ModelScanError,
    ModelViolation,
    ModelViolationCandidate,
    ModelViolationRecord,
)
from omnidrift.protocols import ProtocolAiCapabilities
from omnidrift.quick_fix import QuickFixGenerator
from omnidrift.rules.ai_context import CategoryAiCapabilities
from omnidrift.rules.exceptions import RuleEvaluationAbortedError
from omnidrift.rules.violation_tracker import ViolationTracker
from omnidrift.severity import SeverityManager, summarize_severities
from omnidrift.utils import generate_violation_id, sanitize_message
from omnidrift.variants import VariantManager

logger = logging.getLogger(__name__)

ContentProvider = Callable[[str], str | None]
"""Returns the current content of a relative path, or ``None`` if unavailable."""

FixCandidateProvider = Callable[[ModelViolation], Iterable[ModelFixCandidate]]
"""Returns explicit transform definitions for a violation."""


# =============================================================================
# Candidate building
# =============================================================================


def build_outlier_candidates(
    pattern: ModelAggregatedPattern,
) -> list[ModelViolationCandidate]:
    """One candidate per outlier, with ``expected``/``actual`` from variant labels."""
    candidates = []
    for outlier in pattern.outliers:
        variant = pattern.variant(outlier.variant)
        share = variant.share if variant is not None else 0.0
        r = outlier.range
        candidates.append(
            ModelViolationCandidate(
                id=generate_violation_id(
                    outlier.file,
                    pattern.id,
                    r.start.line,
                    r.start.character,
                    r.end.line,
                    r.end.character,
                ),
                pattern_id=pattern.id,
                category=pattern.category,
                file=outlier.file,
                range=r,
                message=(
                    f"Inconsistent {pattern.id}: expected {pattern.dominant_label}, "
                    f"found {outlier.label}"
                ),
                expected=pattern.dominant_label,
                actual=outlier.label,
                explanation=(
                    f"{pattern.variants[0].count} of {pattern.frequency} observations "
                    f"across {pattern.file_spread} files use {pattern.dominant_label} "
                    f"(confidence {pattern.confidence:.2f}, {pattern.confidence_level.value}); "
                    f"{outlier.label} accounts for {share:.0%}."
                ),
                source="outlier",
            )
        )
    return candidates


def build_detector_candidate(violation: ModelRawViolation) -> ModelViolationCandidate:
    r = violation.range
    return ModelViolationCandidate(
        id=generate_violation_id(
            violation.file,
            violation.pattern_id,
            r.start.line,
            r.start.character,
            r.end.line,
            r.end.character,
        ),
        pattern_id=violation.pattern_id,
        category=violation.category,
        file=violation.file,
        range=r,
        message=violation.message,
        expected=violation.expected,
        actual=violation.actual,
        explanation=violation.explanation,
        severity_hint=violation.severity_hint,
        source="detector",
    )


def _rule_pairs(
    patterns: Sequence[ModelAggregatedPattern],
    raw_violations: Sequence[ModelRawViolation],
    evaluated_patterns: set[str],
    evaluated_files: Sequence[str],
) -> set[tuple[str, str]]:
    """(pattern, file) pairs for every evaluated pattern present in a file."""
    files = set(evaluated_files)
    rules = {
        (pattern.id, file)
        for pattern in patterns
        if pattern.id in evaluated_patterns
        for variant in pattern.variants
        for file in variant.files
        if file in files
    }
    rules.update((raw.pattern_id, raw.file) for raw in raw_violations if raw.file in files)
    return rules


def _detector_error(error: ModelScanError) -> ModelRuleEvaluationError:

    return ModelRuleEvaluationError(
        message=error.message,
        code=f"detector_{error.type.value}",
        recoverable=error.recoverable,
        detector_id=error.detector_id,
        file=error.path,
    )


class _HealthCounter:
    def __init__(self) -> None:
        self.suppressed: Counter[str] = Counter()
        self.ignored: Counter[str] = Counter()
        self.surfaced: Counter[str] = Counter()
        self.detector: Counter[str] = Counter()

    def build(
        self, patterns: Sequence[ModelAggregatedPattern], pattern_ids: Iterable[str]
    ) -> list[ModelPatternHealth]:
        by_id = {p.id: p for p in patterns}
        health = []
        for pattern_id in sorted(set(pattern_ids) | set(by_id)):
            pattern = by_id.get(pattern_id)
            health.append(
                ModelPatternHealth(
                    pattern_id=pattern_id,
                    total=pattern.frequency if pattern else 0,
                    conforming=len(pattern.evidence) if pattern else 0,
                    outliers=pattern.outlier_count if pattern else 0,
                    suppressed=self.suppressed[pattern_id],
                    ignored=self.ignored[pattern_id],
                    surfaced=self.surfaced[pattern_id],
                    detector_violations=self.detector[pattern_id],
                )
            )
        return health


# =============================================================================
# Rule Engine
# =============================================================================


class RuleEngine:
    """Evaluate aggregated patterns into violations.

    Args:
        severity_manager: Severity resolution; defaults to the global default.
        variant_manager: Approved variants used for suppression.
        tracker: Occurrence tracker; a fresh one is created if omitted.
        quick_fix_generator: Fix generator; ``None`` disables quick fixes.
        ai_capabilities: Registered AI capabilities, for availability flags.
        ignored_pattern_ids: Pattern ids excluded by configuration.
    """

    def __init__(
        self,
        severity_manager: SeverityManager | None = None,
        variant_manager: VariantManager | None = None,
        tracker: ViolationTracker | None = None,
        quick_fix_generator: QuickFixGenerator | None = None,
        ai_capabilities: ProtocolAiCapabilities | None = None,
        ignored_pattern_ids: Iterable[str] = (),
    ) -> None:
        self.severity_manager = severity_manager or SeverityManager()
        self.variant_manager = variant_manager or VariantManager()
        self.tracker = tracker or ViolationTracker()
        self.quick_fix_generator = quick_fix_generator
        self.ai_capabilities = ai_capabilities or CategoryAiCapabilities()
        self.ignored_pattern_ids = frozenset(ignored_pattern_ids)

    def evaluate(
        self,
        patterns: Sequence[ModelAggregatedPattern],
        raw_violations: Sequence[ModelRawViolation] = (),
        *,
        files: Iterable[str],
        detector_errors: Sequence[ModelScanError] = (),
        content_provider: ContentProvider | None = None,
        fix_candidates: FixCandidateProvider | None = None,
        counted_files: Iterable[str] | None = None,
        removed_files: Iterable[str] = (),
        commit: bool = True,
    ) -> ModelRuleEvaluationResult:
        """Evaluate one pass.

        Args:
            patterns: Aggregated patterns of the pass.
            raw_violations: Violations reported directly by detectors.
            files: Files covered by the pass. Tracked violations in these
                files that were not seen again are resolved on commit.
            detector_errors: Per-file scan errors; those with a detector id
                become evaluation errors.
            content_provider: File content for quick fixes.
            fix_candidates: Explicit fix candidates per violation.
            counted_files: Files whose violations count as a new occurrence;
                ``None`` counts every file.
            removed_files: Files that no longer exist; their tracked
                violations are resolved on commit.
            commit: Commit the tracker pass; ``False`` discards it.

        Raises:
            RuleEvaluationAbortedError: On a non-recoverable detector error.
        """
        started = time.perf_counter()
        evaluated_files = sorted(set(files))
        counted = set(counted_files) if counted_files is not None else None

        errors: list[ModelRuleEvaluationError] = []
        for scan_error in sorted(detector_errors, key=lambda e: (e.path, e.detector_id or "")):
            if scan_error.detector_id is None:
                continue
            error = _detector_error(scan_error)
            errors.append(error)
            if not error.recoverable:
                logger.error(
                    "Non-recoverable detector failure, aborting evaluation: %s",
                    error.message,
                    extra={"file_path": error.file},
                )
                raise RuleEvaluationAbortedError(
                    errors,
                    ModelRuleEvaluationSummary(
                        total_duration_ms=(time.perf_counter() - started) * 1000,
                        files_evaluated=len(evaluated_files),
                    ),
                )

        candidates, evaluated_patterns = self._collect_candidates(
            patterns, raw_violations, errors
        )

        self.tracker.begin_pass()
        health = _HealthCounter()
        for raw in raw_violations:
            health.detector[raw.pattern_id] += 1
        surfaced: list[ModelViolation] = []
        suppressed: list[ModelViolation] = []
        ignored: list[ModelViolationCandidate] = []
        try:
            for candidate in candidates:
                count = counted is None or candidate.file in counted
                record = self.tracker.observe(candidate, count=count)
                if candidate.pattern_id in self.ignored_pattern_ids:
                    self.tracker.set_state(candidate.id, EnumViolationState.IGNORED)
                    health.ignored[candidate.pattern_id] += 1
                    ignored.append(candidate)
                    continue
                if self.variant_manager.is_suppressed(candidate):
                    record = self.tracker.set_state(
                        candidate.id, EnumViolationState.SUPPRESSED
                    )
                    health.suppressed[candidate.pattern_id] += 1
                    suppressed.append(self._materialize(candidate, record))
                    continue
                if record.state.is_terminal:
                    # variant withdrawn or pattern no longer ignored
                    record = self.tracker.set_state(candidate.id, EnumViolationState.NEW)
                violation = self._materialize(candidate, record)
                self.tracker.set_state(candidate.id, violation.state, violation.severity)
                health.surfaced[candidate.pattern_id] += 1
                surfaced.append(violation)

            fixes: dict[str, ModelQuickFixResult] = {}
            if self.quick_fix_generator is not None and content_provider is not None:
                surfaced, fixes = self._attach_fixes(
                    self.quick_fix_generator, surfaced, content_provider, fix_candidates
                )

            if commit:
                records = self.tracker.commit_pass([*evaluated_files, *removed_files])
            else:
                self.tracker.abort_pass()
                records = []
        except BaseException:
            self.tracker.abort_pass()
            raise

        rules = _rule_pairs(patterns, raw_violations, evaluated_patterns, evaluated_files)
        summary = self._summarize(surfaced, rules, evaluated_files, started)
        logger.info(
            "Evaluated %d patterns over %d files: %d violations, %d suppressed, %d ignored",
            len(evaluated_patterns),
            len(evaluated_files),
            len(surfaced),
            len(suppressed),
            len(ignored),
        )
        return ModelRuleEvaluationResult(
            violations=surfaced,
            suppressed=suppressed,
            ignored=ignored,
            fixes=fixes,
            records=records,
            pattern_health=health.build(patterns, evaluated_patterns),
            errors=errors,
            summary=summary,
        )

    # =========================================================================
    # Internals
    # =========================================================================

    def _collect_candidates(
        self,
        patterns: Sequence[ModelAggregatedPattern],
        raw_violations: Sequence[ModelRawViolation],
        errors: list[ModelRuleEvaluationError],
    ) -> tuple[list[ModelViolationCandidate], set[str]]:
        candidates: dict[str, ModelViolationCandidate] = {}
        evaluated: set[str] = set()

        for pattern in sorted(patterns, key=lambda p: p.id):
            if not pattern.is_significant:
                continue
            try:
                built = build_outlier_candidates(pattern)
            except Exception as e:
                errors.append(
                    ModelRuleEvaluationError(
                        message=sanitize_message(str(e)),
                        code="pattern_evaluation_failed",
                        recoverable=True,
                        pattern_id=pattern.id,
                    )
                )
                logger.warning(
                    "Skipping pattern %s after evaluation error",
                    pattern.id,
                    extra={"pattern_id": pattern.id},
                )
                continue
            evaluated.add(pattern.id)
            for candidate in built:
                candidates.setdefault(candidate.id, candidate)

        for raw in sorted(raw_violations, key=lambda v: v.sort_key()):
            evaluated.add(raw.pattern_id)
            candidate = build_detector_candidate(raw)
            candidates.setdefault(candidate.id, candidate)

        ordered = sorted(candidates.values(), key=lambda c: (c.sort_key(), c.id))
        return ordered, evaluated

    def _materialize(
        self, candidate: ModelViolationCandidate, record: ModelViolationRecord
    ) -> ModelViolation:
        prior_occurrences = max(0, record.occurrences - 1)
        severity = self.severity_manager.resolve(
            candidate.pattern_id,
            candidate.category,
            prior_occurrences,
            candidate.severity_hint,
        )
        base = self.severity_manager.resolve(
            candidate.pattern_id, candidate.category, 0, candidate.severity_hint
        )
        if record.state.is_terminal:
            state = record.state
        elif severity.is_more_severe_than(base) or record.state == EnumViolationState.ESCALATED:
            state = EnumViolationState.ESCALATED
        else:
            state = EnumViolationState.NEW
        return ModelViolation(
            id=candidate.id,
            pattern_id=candidate.pattern_id,
            category=candidate.category,
            severity=severity,
            file=candidate.file,
            range=candidate.range,
            message=candidate.message,
            explanation=candidate.explanation,
            expected=candidate.expected,
            actual=candidate.actual,
            ai_explain_available=self.ai_capabilities.can_explain(candidate.category),
            ai_fix_available=self.ai_capabilities.can_fix(candidate.category),
            first_seen=record.first_seen,
            occurrences=max(1, record.occurrences),
            state=state,
        )

    @staticmethod
    def _attach_fixes(
        generator: QuickFixGenerator,
        violations: list[ModelViolation],
        content_provider: ContentProvider,
        fix_candidates: FixCandidateProvider | None,
    ) -> tuple[list[ModelViolation], dict[str, ModelQuickFixResult]]:
        by_file: dict[str, list[int]] = defaultdict(list)
        for index, violation in enumerate(violations):
            by_file[violation.file].append(index)

        updated = list(violations)
        fixes: dict[str, ModelQuickFixResult] = {}
        for file in sorted(by_file):
            try:
                content = content_provider(file)
            except Exception as e:
                logger.warning(
                    "No quick fixes for %s, content unavailable: %s",
                    file,
                    sanitize_message(str(e)),
                    extra={"file_path": file},
                )
                continue
            if content is None:
                continue
            for index in by_file[file]:
                violation = violations[index]
                try:
                    explicit = list(fix_candidates(violation)) if fix_candidates else []
                    result = generator.generate_fixes(violation, content, explicit)
                except Exception as e:
                    logger.warning(
                        "Quick fix generation failed for %s: %s",
                        violation.id,
                        sanitize_message(str(e)),
                        extra={"file_path": file, "pattern_id": violation.pattern_id},
                    )
                    continue
                fixes[violation.id] = result
                if result.preferred_fix is not None:
                    updated[index] = violation.model_copy(
                        update={"quick_fix": result.preferred_fix}
                    )
        return updated, fixes

    @staticmethod
    def _summarize(
        violations: Sequence[ModelViolation],
        rules: set[tuple[str, str]],
        evaluated_files: Sequence[str],
        started: float,
    ) -> ModelRuleEvaluationSummary:
        rules_evaluated = len(rules)
        rules_failed = len({(v.pattern_id, v.file) for v in violations} & rules)
        return ModelRuleEvaluationSummary(
            rules_evaluated=rules_evaluated,
            rules_passed=rules_evaluated - rules_failed,
            rules_failed=rules_failed,
            total_violations=len(violations),
            violations_by_severity=summarize_severities(violations),
            total_duration_ms=(time.perf_counter() - started) * 1000,
            files_evaluated=len(evaluated_files),
        )

    def reset(self) -> None:
        """Forget all tracked occurrence history."""
        self.tracker.reset()


__all__ = [
    "ContentProvider",
    "FixCandidateProvider",
    "RuleEngine",
    "build_detector_candidate",
    "build_outlier_candidates",
]
