# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Rule evaluation models: errors, summaries, pattern health and results."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from omnidrift.enums import EnumSeverity
from omnidrift.models.model_quick_fix import ModelQuickFixResult
from omnidrift.models.model_violation import (
    ModelViolation,
    ModelViolationCandidate,
    ModelViolationRecord,
)


class ModelRuleEvaluationError(BaseModel):
    """A failure while evaluating one pattern's rule.

    A recoverable error skips the failing pattern (or detector) for the rest
    of the pass; a non-recoverable one aborts the pass.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    message: str
    code: str = Field(default="evaluation_failed")
    recoverable: bool = True
    pattern_id: str | None = None
    detector_id: str | None = None
    file: str | None = None


def _empty_severity_counts() -> dict[EnumSeverity, int]:
    return {severity: 0 for severity in EnumSeverity}


class ModelRuleEvaluationSummary(BaseModel):
    """Counts for one evaluation pass.

    A rule is one pattern evaluated against one file. It fails when it
    surfaces at least one violation. ``violations_by_severity`` always has a
    key for every severity.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    rules_evaluated: int = Field(default=0, ge=0)
    rules_passed: int = Field(default=0, ge=0)
    rules_failed: int = Field(default=0, ge=0)
    total_violations: int = Field(default=0, ge=0)
    violations_by_severity: dict[EnumSeverity, int] = Field(
        default_factory=_empty_severity_counts
    )
    total_duration_ms: float = Field(default=0.0, ge=0.0)
    files_evaluated: int = Field(default=0, ge=0)

    @field_validator("violations_by_severity")
    @classmethod
    def _fill_missing_severities(
        cls, counts: dict[EnumSeverity, int]
    ) -> dict[EnumSeverity, int]:
        return {**_empty_severity_counts(), **counts}


class ModelPatternHealth(BaseModel):
    """Per-pattern statistics, including suppressed deviations.

    ``outliers`` counts every non-dominant observation, whether it surfaced,
    was suppressed by a variant, was ignored by configuration or belongs to
    an insignificant pattern.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    pattern_id: str = Field(..., min_length=1)
    total: int = Field(..., ge=0)
    conforming: int = Field(..., ge=0)
    outliers: int = Field(..., ge=0)
    suppressed: int = Field(default=0, ge=0)
    ignored: int = Field(default=0, ge=0)
    surfaced: int = Field(default=0, ge=0)
    detector_violations: int = Field(default=0, ge=0)

    @property
    def conformance_rate(self) -> float:
        return self.conforming / self.total if self.total else 1.0


class ModelRuleEvaluationResult(BaseModel):
    """Everything one evaluation pass produced.

    Attributes:
        violations: Surfaced violations, sorted by file, pattern and range.
        suppressed: Violations covered by an approved variant.
        ignored: Candidates excluded by configuration.
        fixes: Ranked quick fixes per surfaced violation id.
        records: Tracker records touched by this pass.
        pattern_health: Statistics per pattern id, sorted.
        errors: Recoverable evaluation errors.
        summary: Evaluation counts.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    violations: list[ModelViolation] = Field(default_factory=list)
    suppressed: list[ModelViolation] = Field(default_factory=list)
    ignored: list[ModelViolationCandidate] = Field(default_factory=list)
    fixes: dict[str, ModelQuickFixResult] = Field(default_factory=dict)
    records: list[ModelViolationRecord] = Field(default_factory=list)
    pattern_health: list[ModelPatternHealth] = Field(default_factory=list)
    errors: list[ModelRuleEvaluationError] = Field(default_factory=list)
    summary: ModelRuleEvaluationSummary = Field(
        default_factory=ModelRuleEvaluationSummary
    )


__all__ = [
    "ModelPatternHealth",
    "ModelRuleEvaluationError",
    "ModelRuleEvaluationResult",
    "ModelRuleEvaluationSummary",
]
