# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Reporting summaries of surfaced violations."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from omnidrift.models import ModelViolation, ModelViolationSummary
from omnidrift.severity import summarize_severities


def summarize_violations(violations: Iterable[ModelViolation]) -> ModelViolationSummary:
    """Totals by severity (all four keys), pattern and file, plus auto-fixable count."""
    items = list(violations)
    return ModelViolationSummary(
        total=len(items),
        by_severity=summarize_severities(items),
        by_pattern=dict(sorted(Counter(v.pattern_id for v in items).items())),
        by_file=dict(sorted(Counter(v.file for v in items).items())),
        auto_fixable=sum(1 for v in items if v.quick_fix is not None),
    )


__all__ = ["summarize_violations"]
