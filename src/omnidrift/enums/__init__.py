# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Enumerations shared across OmniDrift.

String-based enums (``str, Enum``) so values serialize to JSON and validate in
Pydantic models without custom encoders.
"""

from omnidrift.enums.enum_confidence_level import (
    CONFIDENCE_HIGH_THRESHOLD,
    CONFIDENCE_LOW_THRESHOLD,
    CONFIDENCE_MEDIUM_THRESHOLD,
    EnumConfidenceLevel,
)
from omnidrift.enums.enum_detector_category import EnumDetectorCategory
from omnidrift.enums.enum_fix_type import EnumFixType, EnumQuickFixKind
from omnidrift.enums.enum_log_level import EnumLogLevel
from omnidrift.enums.enum_pattern_status import EnumPatternStatus
from omnidrift.enums.enum_scan_error_type import EnumScanErrorType
from omnidrift.enums.enum_severity import EnumSeverity
from omnidrift.enums.enum_variant_scope import EnumVariantScope
from omnidrift.enums.enum_violation_state import EnumViolationState

__all__ = [
    "CONFIDENCE_HIGH_THRESHOLD",
    "CONFIDENCE_LOW_THRESHOLD",
    "CONFIDENCE_MEDIUM_THRESHOLD",
    "EnumConfidenceLevel",
    "EnumDetectorCategory",
    "EnumFixType",
    "EnumLogLevel",
    "EnumPatternStatus",
    "EnumQuickFixKind",
    "EnumScanErrorType",
    "EnumSeverity",
    "EnumVariantScope",
    "EnumViolationState",
]
