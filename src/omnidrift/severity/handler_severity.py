# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Severity resolution and ordering helpers.

``resolve_severity`` is a pure function: the caller owns the occurrence
counter, and the same inputs always resolve to the same severity. It never
raises; anything unexpected falls back to the configured (or global) default.

Resolution Order:
    1. Per-pattern override
    2. Per-category override
    3. Detector severity hint (raw detector violations only)
    4. Global default
    then escalation rules, ascending by ``after_count``, when enabled.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable, Sequence
from typing import Final

from omnidrift.enums import EnumDetectorCategory, EnumSeverity
from omnidrift.models import (
    DEFAULT_SEVERITY_CONFIG,
    ModelSeverityConfig,
    ModelViolation,
)

logger = logging.getLogger(__name__)

SEVERITY_ORDER: Final[dict[EnumSeverity, int]] = {
    severity: severity.rank for severity in EnumSeverity
}
"""Numeric severity ranks (error=4, warning=3, info=2, hint=1)."""

DEFAULT_CATEGORY_SEVERITY: Final[dict[EnumDetectorCategory, EnumSeverity]] = {
    EnumDetectorCategory.ACCESSIBILITY: EnumSeverity.WARNING,
    EnumDetectorCategory.API: EnumSeverity.WARNING,
    EnumDetectorCategory.AUTH: EnumSeverity.ERROR,
    EnumDetectorCategory.COMPONENTS: EnumSeverity.WARNING,
    EnumDetectorCategory.CONFIG: EnumSeverity.WARNING,
    EnumDetectorCategory.DATA_ACCESS: EnumSeverity.WARNING,
    EnumDetectorCategory.DOCUMENTATION: EnumSeverity.HINT,
    EnumDetectorCategory.ERRORS: EnumSeverity.WARNING,
    EnumDetectorCategory.LOGGING: EnumSeverity.INFO,
    EnumDetectorCategory.PERFORMANCE: EnumSeverity.HINT,
    EnumDetectorCategory.SECURITY: EnumSeverity.ERROR,
    EnumDetectorCategory.STRUCTURAL: EnumSeverity.WARNING,
    EnumDetectorCategory.STYLING: EnumSeverity.INFO,
    EnumDetectorCategory.TESTING: EnumSeverity.INFO,
    EnumDetectorCategory.TYPES: EnumSeverity.INFO,
}
"""Suggested per-category severities.

Not applied unless seeded into ``category_overrides``, see
``severity_config_with_category_defaults``.
"""


# =============================================================================
# Resolution
# =============================================================================


def _category_key(category: EnumDetectorCategory | str) -> str:
    return category.value if isinstance(category, EnumDetectorCategory) else category


def resolve_base_severity(
    pattern_id: str,
    category: EnumDetectorCategory | str,
    config: ModelSeverityConfig = DEFAULT_SEVERITY_CONFIG,
    severity_hint: EnumSeverity | None = None,
) -> EnumSeverity:
    """Severity before escalation."""
    if pattern_id in config.overrides:
        return config.overrides[pattern_id]
    category_key = _category_key(category)
    if category_key in config.category_overrides:
        return config.category_overrides[category_key]
    if severity_hint is not None:
        return severity_hint
    return config.default


def apply_escalation(
    severity: EnumSeverity,
    occurrence_count: int,
    config: ModelSeverityConfig = DEFAULT_SEVERITY_CONFIG,
) -> EnumSeverity:
    """Apply escalation rules in ascending ``after_count`` order.

    Rules chain within one call: with hint->info and info->warning both
    satisfied, a hint resolves to warning. A rule never lowers severity.
    """
    escalation = config.escalation
    if not escalation.enabled:
        return severity
    for rule in escalation.rules:
        if occurrence_count < escalation.effective_after_count(rule):
            continue
        if severity == rule.from_severity and rule.to_severity.is_more_severe_than(
            severity
        ):
            severity = rule.to_severity
    return severity


def resolve_severity(
    pattern_id: str,
    category: EnumDetectorCategory | str,
    occurrence_count: int,
    config: ModelSeverityConfig = DEFAULT_SEVERITY_CONFIG,
    severity_hint: EnumSeverity | None = None,
) -> EnumSeverity:
    """Resolve the severity of one violation.

    Args:
        pattern_id: Violated pattern.
        category: Pattern category (enum or its string value).
        occurrence_count: Occurrences counted by the caller. Escalation rules
            fire when this is at least their ``after_count``.
        config: Severity configuration.
        severity_hint: Detector-suggested severity, used only when neither
            override applies.

    Returns:
        The resolved severity. Never raises.

    Example:
        >>> resolve_severity("p", EnumDetectorCategory.ERRORS, 1)
        <EnumSeverity.WARNING: 'warning'>
    """
    try:
        base = resolve_base_severity(pattern_id, category, config, severity_hint)
        return apply_escalation(base, occurrence_count, config)
    except Exception:
        logger.exception(
            "Severity resolution failed, falling back to default",
            extra={"pattern_id": pattern_id},
        )
        default = getattr(config, "default", None)
        return default if isinstance(default, EnumSeverity) else EnumSeverity.WARNING


def severity_config_with_category_defaults(
    config: ModelSeverityConfig = DEFAULT_SEVERITY_CONFIG,
) -> ModelSeverityConfig:
    """Copy of ``config`` with ``DEFAULT_CATEGORY_SEVERITY`` seeded underneath.

    Explicit category overrides in ``config`` win.
    """
    seeded = {category.value: sev for category, sev in DEFAULT_CATEGORY_SEVERITY.items()}
    seeded.update(config.category_overrides)
    return config.model_copy(update={"category_overrides": seeded})


# =============================================================================
# Ordering Helpers
# =============================================================================


def compare_severity(a: EnumSeverity, b: EnumSeverity) -> int:
    """Positive if ``a`` is more severe than ``b``, negative if less, else 0."""
    return SEVERITY_ORDER[a] - SEVERITY_ORDER[b]


def is_blocking_severity(severity: EnumSeverity) -> bool:
    """Only errors block commits and merges."""
    return severity == EnumSeverity.ERROR


def get_most_severe(severities: Iterable[EnumSeverity]) -> EnumSeverity:
    """Most severe of ``severities``; ``hint`` for an empty input."""
    return max(severities, key=SEVERITY_ORDER.__getitem__, default=EnumSeverity.HINT)


def get_least_severe(severities: Iterable[EnumSeverity]) -> EnumSeverity:
    """Least severe of ``severities``; ``error`` for an empty input."""
    return min(severities, key=SEVERITY_ORDER.__getitem__, default=EnumSeverity.ERROR)


def sort_violations_by_severity(
    violations: Sequence[ModelViolation],
) -> list[ModelViolation]:
    """New list sorted by severity (most severe first), file, line, pattern id."""
    return sorted(
        violations,
        key=lambda v: (
            -SEVERITY_ORDER[v.severity],
            v.file,
            v.range.start.line,
            v.pattern_id,
        ),
    )


def filter_by_min_severity(
    violations: Iterable[ModelViolation], min_severity: EnumSeverity
) -> list[ModelViolation]:
    return [v for v in violations if compare_severity(v.severity, min_severity) >= 0]


def group_by_severity(
    violations: Iterable[ModelViolation],
) -> dict[EnumSeverity, list[ModelViolation]]:
    """Violations per severity; every severity has a (possibly empty) list."""
    groups: dict[EnumSeverity, list[ModelViolation]] = {s: [] for s in EnumSeverity}
    for violation in violations:
        groups[violation.severity].append(violation)
    return groups


def summarize_severities(
    violations: Iterable[ModelViolation],
) -> dict[EnumSeverity, int]:
    """Count per severity with all four keys present."""
    counts = Counter(v.severity for v in violations)
    return {severity: counts.get(severity, 0) for severity in EnumSeverity}


__all__ = [
    "DEFAULT_CATEGORY_SEVERITY",
    "SEVERITY_ORDER",
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
