# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Violation models: candidates, surfaced violations, tracking records, summaries.

Lifecycle:
    A candidate is built for every outlier and raw detector violation. It becomes a
    surfaced ``ModelViolation`` only if no approved variant covers it and its
    pattern is not excluded by configuration. The tracker keeps a
    ``ModelViolationRecord`` per deterministic id across passes.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from omnidrift.enums import EnumDetectorCategory, EnumSeverity, EnumViolationState
from omnidrift.models.model_quick_fix import ModelQuickFix
from omnidrift.models.model_range import ModelRange


class ModelViolationCandidate(BaseModel):
    """An outlier (or raw detector violation) that may become a violation.

    Attributes:
        id: Deterministic id from ``(file, pattern_id, range)``.
        source: ``"outlier"`` for aggregator outliers, ``"detector"`` for
            violations reported directly by a detector.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(..., min_length=1)
    pattern_id: str = Field(..., min_length=1)
    category: EnumDetectorCategory
    file: str = Field(..., min_length=1)
    range: ModelRange
    message: str = Field(..., min_length=1)
    expected: str = ""
    actual: str = ""
    explanation: str | None = None
    severity_hint: EnumSeverity | None = None
    source: Literal["outlier", "detector"] = "outlier"

    def sort_key(self) -> tuple[str, str, tuple[int, int, int, int]]:
        return (self.file, self.pattern_id, self.range.sort_key())


class ModelViolation(BaseModel):
    """A surfaced, severity-scored deviation from a learned pattern.

    Attributes:
        id: Stable hash of file + pattern id + range.
        pattern_id: Pattern that was violated.
        category: Pattern category.
        severity: Resolved (possibly escalated) severity.
        file: Relative file path.
        range: Zero-indexed editor-compatible range.
        message: Human-readable description.
        explanation: Optional longer explanation.
        expected: Description of the dominant variant.
        actual: Description of the observed deviation.
        quick_fix: Preferred quick fix, if any cleared the confidence floor.
        ai_explain_available: An explanation capability is registered for the
            pattern's category. The engine never calls it.
        ai_fix_available: A fix capability is registered for the category.
        first_seen: When the violation was first recorded; immutable.
        occurrences: Number of passes that recorded the deviation.
        state: Lifecycle state (``new`` or ``escalated`` when surfaced).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(..., min_length=1)
    pattern_id: str = Field(..., min_length=1)
    category: EnumDetectorCategory
    severity: EnumSeverity
    file: str = Field(..., min_length=1)
    range: ModelRange
    message: str = Field(..., min_length=1)
    explanation: str | None = None
    expected: str = ""
    actual: str = ""
    quick_fix: ModelQuickFix | None = None
    ai_explain_available: bool = False
    ai_fix_available: bool = False
    first_seen: datetime
    occurrences: int = Field(default=1, ge=1)
    state: EnumViolationState = EnumViolationState.NEW

    def sort_key(self) -> tuple[str, str, tuple[int, int, int, int]]:
        return (self.file, self.pattern_id, self.range.sort_key())


class ModelViolationRecord(BaseModel):
    """Persisted history of one violation id across passes."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(..., min_length=1)
    pattern_id: str = Field(..., min_length=1)
    file: str = Field(..., min_length=1)
    first_seen: datetime
    last_seen: datetime
    occurrences: int = Field(default=1, ge=0)
    state: EnumViolationState = EnumViolationState.NEW
    severity: EnumSeverity | None = None


class ModelViolationSummary(BaseModel):
    """Counts of surfaced violations for reporting."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    total: int = Field(default=0, ge=0)
    by_severity: dict[EnumSeverity, int] = Field(default_factory=dict)
    by_pattern: dict[str, int] = Field(default_factory=dict)
    by_file: dict[str, int] = Field(default_factory=dict)
    auto_fixable: int = Field(default=0, ge=0)


__all__ = [
    "ModelViolation",
    "ModelViolationCandidate",
    "ModelViolationRecord",
    "ModelViolationSummary",
]
