# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Severity manager: override resolution and occurrence-based escalation."""

from omnidrift.severity.handler_severity import (
    DEFAULT_CATEGORY_SEVERITY,
    SEVERITY_ORDER,
    apply_escalation,
    compare_severity,
    filter_by_min_severity,
    get_least_severe,
    get_most_severe,
    group_by_severity,
    is_blocking_severity,
    resolve_base_severity,
    resolve_severity,
    severity_config_with_category_defaults,
    sort_violations_by_severity,
    summarize_severities,
)
from omnidrift.severity.severity_manager import SeverityManager

__all__ = [
    "DEFAULT_CATEGORY_SEVERITY",
    "SEVERITY_ORDER",
    "SeverityManager",
    "apply_escalation",
    "compare_severity",
    "filter_by_min_severity",
    "get_least_severe",
    "get_most_severe",
    "group_by_severity",
    "is_blocking_severity",
    "resolve_base_severity",
    "resolve_severity",
    "severity_config_with_category_defaults",
    "sort_violations_by_severity",
    "summarize_severities",
]
