# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Quick-fix generator: runs strategies, validates, ranks and previews fixes.

Ranking:
    1. confidence, descending
    2. fix type priority (replace < wrap < extract < import < rename < move < delete)
    3. title, for a total order

Candidates below ``min_confidence`` are dropped and at most
``max_fixes_per_violation`` are kept. The first remaining fix is the
preferred one, so at most one fix per violation is preferred and it always
has the highest confidence.

A failing strategy never fails evaluation: the failure is logged and the
violation simply gets no fix of that type.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Final

from omnidrift.enums import EnumFixType
from omnidrift.models import (
    ModelFixCandidate,
    ModelFixImpact,
    ModelFixValidation,
    ModelQuickFix,
    ModelQuickFixResult,
    ModelViolation,
    ModelWorkspaceEdit,
)
from omnidrift.quick_fix.exceptions import InvalidEditError
from omnidrift.quick_fix.handler_text_edits import (
    apply_text_edits,
    is_range_in_bounds,
    unified_diff,
)
from omnidrift.quick_fix.strategies import DEFAULT_STRATEGIES, FixContext, FixStrategyBase
from omnidrift.utils import sanitize_message

logger = logging.getLogger(__name__)

DEFAULT_MIN_FIX_CONFIDENCE: Final[float] = 0.5
"""Candidates below this confidence are never offered."""

DEFAULT_MAX_FIXES_PER_VIOLATION: Final[int] = 5

HIGH_CONFIDENCE_THRESHOLD: Final[float] = 0.8
"""Floor used by ``QuickFixGenerator.high_confidence``."""

_BREAKING_FIX_TYPES: Final[frozenset[EnumFixType]] = frozenset(
    {EnumFixType.RENAME, EnumFixType.MOVE, EnumFixType.DELETE, EnumFixType.EXTRACT}
)


def rank_candidates(
    candidates: Iterable[ModelFixCandidate],
    violation_id: str,
    min_confidence: float = DEFAULT_MIN_FIX_CONFIDENCE,
    max_fixes: int = DEFAULT_MAX_FIXES_PER_VIOLATION,
) -> list[ModelQuickFix]:
    """Rank candidates and mark the top one as preferred.

    Example:
        >>> fixes = rank_candidates([replace_090, wrap_060], "vio_1")
        >>> [f.is_preferred for f in fixes]
        [True, False]
    """
    eligible = sorted(
        (c for c in candidates if c.confidence >= min_confidence),
        key=lambda c: (-c.confidence, c.fix_type.priority, c.title),
    )[:max_fixes]
    return [
        ModelQuickFix(
            title=candidate.title,
            kind=candidate.kind,
            fix_type=candidate.fix_type,
            edit=candidate.edit,
            is_preferred=index == 0,
            confidence=candidate.confidence,
            preview=candidate.preview,
            violation_id=violation_id,
            rank=index,
        )
        for index, candidate in enumerate(eligible)
    ]


def validate_edit(
    edit: ModelWorkspaceEdit, content: str, file: str
) -> ModelFixValidation:
    """Check an edit targets only ``file``, stays in bounds and does not overlap."""
    errors: list[str] = []
    for target in edit.files:
        if target != file:
            errors.append(f"Edit targets '{target}', expected only '{file}'")
    edits = edit.changes.get(file, [])
    for text_edit in edits:
        if not is_range_in_bounds(content, text_edit.range):
            errors.append(
                f"Range {text_edit.range.sort_key()} is outside the file content"
            )
    ordered = sorted(edits, key=lambda e: e.range.sort_key())
    for previous, current in zip(ordered, ordered[1:]):
        if previous.range.overlaps(current.range):
            errors.append("Edits overlap")
    return ModelFixValidation(valid=not errors, errors=errors)


class QuickFixGenerator:
    """Generate ranked quick fixes for violations.

    Args:
        min_confidence: Confidence floor for offered fixes.
        max_fixes_per_violation: Cap on fixes per violation.
        enabled_fix_types: Fix types to run; ``None`` enables all.
        strategies: Strategies to register; defaults to one per fix type.
    """

    def __init__(
        self,
        min_confidence: float = DEFAULT_MIN_FIX_CONFIDENCE,
        max_fixes_per_violation: int = DEFAULT_MAX_FIXES_PER_VIOLATION,
        enabled_fix_types: Iterable[EnumFixType] | None = None,
        strategies: Iterable[FixStrategyBase] | None = None,
    ) -> None:
        self.min_confidence = min_confidence
        self.max_fixes_per_violation = max_fixes_per_violation
        self._enabled = (
            frozenset(enabled_fix_types) if enabled_fix_types is not None else None
        )
        self._strategies: dict[EnumFixType, FixStrategyBase] = {}
        if strategies is None:
            strategies = [strategy_cls() for strategy_cls in DEFAULT_STRATEGIES]
        for strategy in strategies:
            self.register_strategy(strategy)

    @classmethod
    def high_confidence(cls) -> QuickFixGenerator:
        return cls(min_confidence=HIGH_CONFIDENCE_THRESHOLD)

    def register_strategy(self, strategy: FixStrategyBase) -> None:
        """Register a strategy, replacing any existing one of the same type."""
        self._strategies[strategy.fix_type] = strategy

    def get_strategy(self, fix_type: EnumFixType) -> FixStrategyBase | None:
        return self._strategies.get(fix_type)

    def _active_strategies(self) -> list[FixStrategyBase]:
        return [
            self._strategies[fix_type]
            for fix_type in EnumFixType
            if fix_type in self._strategies
            and (self._enabled is None or fix_type in self._enabled)
        ]

    def get_available_fix_types(self, violation: ModelViolation) -> list[EnumFixType]:
        return [s.fix_type for s in self._active_strategies() if s.can_handle(violation)]

    # =========================================================================
    # Generation
    # =========================================================================

    def _run_strategy(
        self, strategy: FixStrategyBase, context: FixContext
    ) -> ModelFixCandidate | None:
        try:
            return strategy.generate(context)
        except Exception as e:
            logger.warning(
                "Fix strategy %s failed for %s: %s",
                strategy.fix_type.value,
                context.violation.id,
                sanitize_message(str(e)),
                extra={
                    "pattern_id": context.violation.pattern_id,
                    "file_path": context.violation.file,
                },
            )
            raise

    def _finalize(
        self, candidate: ModelFixCandidate, violation: ModelViolation, content: str
    ) -> ModelFixCandidate | None:
        validation = validate_edit(candidate.edit, content, violation.file)
        if not validation.valid:
            logger.debug(
                "Dropping invalid %s fix for %s: %s",
                candidate.fix_type.value,
                violation.id,
                "; ".join(validation.errors),
            )
            return None
        if candidate.preview is not None:
            return candidate
        return candidate.model_copy(
            update={"preview": self._diff(candidate.edit, content, violation.file)}
        )

    def generate_fixes(
        self,
        violation: ModelViolation,
        content: str,
        candidates: Iterable[ModelFixCandidate] = (),
    ) -> ModelQuickFixResult:
        """Ranked fixes for one violation.

        Args:
            violation: The violation to fix.
            content: Current content of ``violation.file``.
            candidates: Explicit transform definitions ranked together with
                strategy output.
        """
        context = FixContext(violation=violation, content=content)
        collected: list[ModelFixCandidate] = []
        failed: list[EnumFixType] = []
        for strategy in self._active_strategies():
            if not strategy.can_handle(violation):
                continue
            try:
                candidate = self._run_strategy(strategy, context)
            except Exception:
                failed.append(strategy.fix_type)
                continue
            if candidate is not None:
                collected.append(candidate)
        collected.extend(candidates)

        finalized = [
            final
            for candidate in collected
            if (final := self._finalize(candidate, violation, content)) is not None
        ]
        fixes = rank_candidates(
            finalized, violation.id, self.min_confidence, self.max_fixes_per_violation
        )
        return ModelQuickFixResult(
            violation_id=violation.id, fixes=fixes, failed_strategies=failed
        )

    def generate_fixes_for_all(
        self,
        violations: Iterable[ModelViolation],
        contents: Mapping[str, str],
    ) -> dict[str, ModelQuickFixResult]:
        """Fixes for many violations; violations whose file has no content are skipped."""
        results: dict[str, ModelQuickFixResult] = {}
        for violation in violations:
            content = contents.get(violation.file)
            if content is None:
                continue
            results[violation.id] = self.generate_fixes(violation, content)
        return results

    def generate_fix_of_type(
        self, violation: ModelViolation, content: str, fix_type: EnumFixType
    ) -> ModelQuickFix | None:
        """A single fix of ``fix_type``, ignoring the confidence floor."""
        strategy = self._strategies.get(fix_type)
        if strategy is None or not strategy.can_handle(violation):
            return None
        try:
            candidate = self._run_strategy(
                strategy, FixContext(violation=violation, content=content)
            )
        except Exception:
            return None
        if candidate is None:
            return None
        final = self._finalize(candidate, violation, content)
        if final is None:
            return None
        return rank_candidates([final], violation.id, min_confidence=0.0)[0]

    # =========================================================================
    # Preview, application and validation
    # =========================================================================

    @staticmethod
    def _diff(edit: ModelWorkspaceEdit, content: str, file: str) -> str:
        after = apply_text_edits(content, edit.changes.get(file, []))
        return unified_diff(file, content, after)

    def generate_preview(self, fix: ModelQuickFix, content: str, file: str) -> str:
        """The fix's own preview, or a unified diff computed from ``content``."""
        if fix.preview is not None:
            return fix.preview
        return self._diff(fix.edit, content, file)

    @staticmethod
    def apply_fix(fix: ModelQuickFix, content: str, file: str) -> str:
        """Apply a fix's edits for ``file`` to ``content``.

        Raises:
            InvalidEditError: If the edit targets other files or its edits overlap.
        """
        foreign = [target for target in fix.edit.files if target != file]
        if foreign:
            raise InvalidEditError(f"Fix edits other files: {foreign}")
        return apply_text_edits(content, fix.edit.changes.get(file, []))

    def is_idempotent(self, fix: ModelQuickFix, content: str, file: str) -> bool:
        once = self.apply_fix(fix, content, file)
        return self.apply_fix(fix, once, file) == once

    @staticmethod
    def validate_fix(fix: ModelQuickFix, content: str, file: str) -> ModelFixValidation:
        return validate_edit(fix.edit, content, file)

    @staticmethod
    def calculate_impact(fix: ModelQuickFix) -> ModelFixImpact:
        """Estimate files affected, lines changed, risk and breaking change."""
        lines_changed = 0
        for edits in fix.edit.changes.values():
            for edit in edits:
                removed = edit.range.end.line - edit.range.start.line
                if not edit.range.is_empty:
                    removed += 1
                added = edit.new_text.count("\n") + (1 if edit.new_text else 0)
                lines_changed += max(removed, added)
        files_affected = len(fix.edit.changes)
        breaking = fix.fix_type in _BREAKING_FIX_TYPES
        if files_affected > 1 or lines_changed > 20 or (breaking and fix.confidence < 0.7):
            risk = "high"
        elif breaking or lines_changed > 5 or fix.confidence < HIGH_CONFIDENCE_THRESHOLD:
            risk = "medium"
        else:
            risk = "low"
        return ModelFixImpact(
            files_affected=files_affected,
            lines_changed=lines_changed,
            risk_level=risk,
            breaking_change=breaking,
        )


__all__ = [
    "DEFAULT_MAX_FIXES_PER_VIOLATION",
    "DEFAULT_MIN_FIX_CONFIDENCE",
    "HIGH_CONFIDENCE_THRESHOLD",
    "QuickFixGenerator",
    "rank_candidates",
    "validate_edit",
]
