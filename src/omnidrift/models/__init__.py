# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Frozen Pydantic models for every entity the engine produces or consumes."""

from omnidrift.models.model_ai_context import (
    ModelAiRequestContext,
    ModelCodeSnippet,
    ModelPatternSummary,
)
from omnidrift.models.model_aggregated_pattern import (
    ModelAggregatedPattern,
    ModelConfidenceComponents,
    ModelPatternVariant,
)
from omnidrift.models.model_detector_result import (
    DetectorMetadata,
    ModelApiMetadata,
    ModelDetectionContext,
    ModelDetectorResult,
    ModelErrorHandlingMetadata,
    ModelGenericMetadata,
    ModelLoggingMetadata,
    ModelStructuralMetadata,
)
from omnidrift.models.model_file_identity import ModelFileIdentity
from omnidrift.models.model_pattern_observation import (
    ModelPatternObservation,
    ModelRawViolation,
)
from omnidrift.models.model_quick_fix import (
    ModelFixCandidate,
    ModelFixImpact,
    ModelFixValidation,
    ModelQuickFix,
    ModelQuickFixResult,
)
from omnidrift.models.model_range import (
    ModelPosition,
    ModelRange,
    ModelTextEdit,
    ModelWorkspaceEdit,
)
from omnidrift.models.model_rule_evaluation import (
    ModelPatternHealth,
    ModelRuleEvaluationError,
    ModelRuleEvaluationResult,
    ModelRuleEvaluationSummary,
)
from omnidrift.models.model_scan import (
    ModelDetectorWorkerResult,
    ModelDetectorWorkerTask,
    ModelFileScanResult,
    ModelScanBatch,
    ModelScanError,
    ModelScanResults,
    ModelScanStats,
)
from omnidrift.models.model_severity_config import (
    DEFAULT_ESCALATION_RULES,
    DEFAULT_ESCALATION_THRESHOLD,
    DEFAULT_SEVERITY_CONFIG,
    ModelEscalationConfig,
    ModelEscalationRule,
    ModelSeverityConfig,
)
from omnidrift.models.model_variant import (
    ModelVariant,
    ModelVariantLocation,
    ModelVariantQuery,
    ModelVariantStats,
)
from omnidrift.models.model_violation import (
    ModelViolation,
    ModelViolationCandidate,
    ModelViolationRecord,
    ModelViolationSummary,
)

__all__ = [
    "DEFAULT_ESCALATION_RULES",
    "DEFAULT_ESCALATION_THRESHOLD",
    "DEFAULT_SEVERITY_CONFIG",
    "DetectorMetadata",
    "ModelAggregatedPattern",
    "ModelAiRequestContext",
    "ModelApiMetadata",
    "ModelCodeSnippet",
    "ModelConfidenceComponents",
    "ModelDetectionContext",
    "ModelDetectorResult",
    "ModelDetectorWorkerResult",
    "ModelDetectorWorkerTask",
    "ModelErrorHandlingMetadata",
    "ModelEscalationConfig",
    "ModelEscalationRule",
    "ModelFileIdentity",
    "ModelFileScanResult",
    "ModelFixCandidate",
    "ModelFixImpact",
    "ModelFixValidation",
    "ModelGenericMetadata",
    "ModelLoggingMetadata",
    "ModelPatternHealth",
    "ModelPatternObservation",
    "ModelPatternSummary",
    "ModelPatternVariant",
    "ModelPosition",
    "ModelQuickFix",
    "ModelQuickFixResult",
    "ModelRange",
    "ModelRawViolation",
    "ModelRuleEvaluationError",
    "ModelRuleEvaluationResult",
    "ModelRuleEvaluationSummary",
    "ModelScanBatch",
    "ModelScanError",
    "ModelScanResults",
    "ModelScanStats",
    "ModelSeverityConfig",
    "ModelStructuralMetadata",
    "ModelTextEdit",
    "ModelVariant",
    "ModelVariantLocation",
    "ModelVariantQuery",
    "ModelVariantStats",
    "ModelViolation",
    "ModelViolationCandidate",
    "ModelViolationRecord",
    "ModelViolationSummary",
    "ModelWorkspaceEdit",
]
