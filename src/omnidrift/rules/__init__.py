# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Rule engine: violation materialization, occurrence tracking and AI context."""

from omnidrift.rules.ai_context import (
    CategoryAiCapabilities,
    build_ai_context,
    extract_snippet,
)
from omnidrift.rules.exceptions import RuleEvaluationAbortedError
from omnidrift.rules.handler_summary import summarize_violations
from omnidrift.rules.rule_engine import (
    ContentProvider,
    FixCandidateProvider,
    RuleEngine,
    build_detector_candidate,
    build_outlier_candidates,
)
from omnidrift.rules.violation_tracker import ViolationTracker

__all__ = [
    "CategoryAiCapabilities",
    "ContentProvider",
    "FixCandidateProvider",
    "RuleEngine",
    "RuleEvaluationAbortedError",
    "ViolationTracker",
    "build_ai_context",
    "build_detector_candidate",
    "build_outlier_candidates",
    "extract_snippet",
    "summarize_violations",
]
