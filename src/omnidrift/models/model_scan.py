# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Scanner models: worker tasks and results, scan errors, stats and results.

``ModelScanResults`` is the value exposed to presentation layers. It always
carries whatever was collected, with ``success=False`` (and an itemized
``errors`` list) instead of raising when part of the pass failed.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from omnidrift.enums import EnumScanErrorType, EnumSeverity
from omnidrift.models.model_aggregated_pattern import ModelAggregatedPattern
from omnidrift.models.model_detector_result import DetectorMetadata
from omnidrift.models.model_file_identity import ModelFileIdentity
from omnidrift.models.model_pattern_observation import (
    ModelPatternObservation,
    ModelRawViolation,
)
from omnidrift.models.model_quick_fix import ModelQuickFixResult
from omnidrift.models.model_rule_evaluation import (
    ModelPatternHealth,
    ModelRuleEvaluationError,
    ModelRuleEvaluationSummary,
)
from omnidrift.models.model_violation import ModelViolation, ModelViolationSummary

# =============================================================================
# Worker Messages
# =============================================================================


class ModelScanError(BaseModel):
    """A per-file failure; never aborts the batch.

    Attributes:
        path: Relative path of the file.
        message: Sanitized error text.
        type: Classification of the failure.
        code: Optional OS error code or error class name.
        detector_id: Detector that raised, for detector failures.
        recoverable: Whether the rest of the file's analysis survived the
            failure. A non-recoverable error means the file produced no
            usable results and flips ``ScanResults.success`` to False.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    path: str = Field(..., min_length=1)
    message: str
    type: EnumScanErrorType
    code: str | None = None
    detector_id: str | None = None
    recoverable: bool = False


class ModelDetectorWorkerTask(BaseModel):
    """One unit of work handed to a worker: scan this file."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    file: ModelFileIdentity
    project_root: str = "."
    sequence: int = Field(default=0, ge=0, description="Submission order")


class ModelDetectorWorkerResult(BaseModel):
    """What a worker reports back for one file.

    Attributes:
        file: The scanned file.
        content_hash: SHA-256 of the content that was analysed.
        observations: Observations from every detector that ran, sorted.
        violations: Raw detector violations, sorted.
        metadata: Category metadata from detectors that returned any.
        errors: Per-file errors; detector failures here are recoverable.
        detectors_run: Ids of the detectors that completed successfully.
        duration_ms: Wall time spent on the file.
        worker_id: Worker that processed the file.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    file: ModelFileIdentity
    content_hash: str | None = None
    observations: list[ModelPatternObservation] = Field(default_factory=list)
    violations: list[ModelRawViolation] = Field(default_factory=list)
    metadata: list[DetectorMetadata] = Field(default_factory=list)
    errors: list[ModelScanError] = Field(default_factory=list)
    detectors_run: list[str] = Field(default_factory=list)
    duration_ms: float = Field(default=0.0, ge=0.0)
    worker_id: int = Field(default=0, ge=0)

    @property
    def success(self) -> bool:
        return all(error.recoverable for error in self.errors)


# =============================================================================
# Scan Output
# =============================================================================


class ModelScanStats(BaseModel):
    """Statistics of one scan pass."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    total_files: int = Field(default=0, ge=0)
    files_scanned: int = Field(default=0, ge=0)
    files_skipped: int = Field(default=0, ge=0)
    error_count: int = Field(default=0, ge=0)
    duration_ms: float = Field(default=0.0, ge=0.0)
    files_by_language: dict[str, int] = Field(default_factory=dict)
    started_at: datetime | None = None
    finished_at: datetime | None = None
    cancelled: bool = False


class ModelScanBatch(BaseModel):
    """Raw output of the scanner for one pass, before aggregation.

    Attributes:
        results: One worker result per scanned file, sorted by relative path.
        skipped: Relative paths excluded by ignore rules.
        stats: Scan statistics.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    results: list[ModelDetectorWorkerResult] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)
    stats: ModelScanStats = Field(default_factory=ModelScanStats)

    @property
    def errors(self) -> list[ModelScanError]:
        return [error for result in self.results for error in result.errors]

    @property
    def observations(self) -> list[ModelPatternObservation]:
        return [o for result in self.results for o in result.observations]

    @property
    def violations(self) -> list[ModelRawViolation]:
        return [v for result in self.results for v in result.violations]


class ModelFileScanResult(BaseModel):
    """Per-file result exposed in ``ScanResults.files``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    file: ModelFileIdentity
    content_hash: str | None = None
    observation_count: int = Field(default=0, ge=0)
    violation_count: int = Field(default=0, ge=0)
    errors: list[ModelScanError] = Field(default_factory=list)
    duration_ms: float = Field(default=0.0, ge=0.0)


class ModelScanResults(BaseModel):
    """Outcome of a full or incremental scan pass.

    Attributes:
        files: Per-file results, sorted by relative path.
        patterns: Aggregated patterns, sorted by id.
        violations: Surfaced violations, sorted by file, pattern and range.
        suppressed: Candidates suppressed by an approved variant.
        fixes: Every ranked quick fix, keyed by violation id.
        errors: Per-file scan errors.
        evaluation_errors: Rule evaluation errors.
        summary: Rule evaluation summary.
        violation_summary: Counts of surfaced violations.
        pattern_health: Per-pattern statistics including suppressed counts.
        stats: Scan statistics.
        success: False when any file failed non-recoverably, the pass was
            cancelled or evaluation aborted.
        partial: True when the observation set did not cover every file.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    files: list[ModelFileScanResult] = Field(default_factory=list)
    patterns: list[ModelAggregatedPattern] = Field(default_factory=list)
    violations: list[ModelViolation] = Field(default_factory=list)
    suppressed: list[ModelViolation] = Field(default_factory=list)
    fixes: dict[str, ModelQuickFixResult] = Field(default_factory=dict)
    errors: list[ModelScanError] = Field(default_factory=list)
    evaluation_errors: list[ModelRuleEvaluationError] = Field(default_factory=list)
    summary: ModelRuleEvaluationSummary = Field(
        default_factory=ModelRuleEvaluationSummary
    )
    violation_summary: ModelViolationSummary = Field(
        default_factory=ModelViolationSummary
    )
    pattern_health: list[ModelPatternHealth] = Field(default_factory=list)
    stats: ModelScanStats = Field(default_factory=ModelScanStats)
    success: bool = True
    partial: bool = False

    def violations_for_file(self, file: str) -> list[ModelViolation]:
        return [v for v in self.violations if v.file == file]

    def count_by_severity(self, severity: EnumSeverity) -> int:
        return sum(1 for v in self.violations if v.severity == severity)

    def pattern(self, pattern_id: str) -> ModelAggregatedPattern | None:
        for candidate in self.patterns:
            if candidate.id == pattern_id:
                return candidate
        return None


__all__ = [
    "ModelDetectorWorkerResult",
    "ModelDetectorWorkerTask",
    "ModelFileScanResult",
    "ModelScanBatch",
    "ModelScanError",
    "ModelScanResults",
    "ModelScanStats",
]
