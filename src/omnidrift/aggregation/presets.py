# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Default constants for pattern aggregation and confidence scoring.

Confidence Formula:
    dominant_share = dominant_count / total
    sample_factor  = total / (total + SAMPLE_SIZE_PRIOR)
    confidence     = dominant_share * sample_factor

    If total < min_occurrences the score is additionally capped at
    SMALL_SAMPLE_CONFIDENCE_CAP.

Both factors are non-decreasing in their input and bounded by [0, 1], so the
product is monotonic in share (sample size fixed) and in sample size (share
fixed). The cap only lifts as the sample grows, so it preserves monotonicity.
As total grows, sample_factor approaches 1 and confidence approaches the raw
share.
"""

from __future__ import annotations

from typing import Final

SAMPLE_SIZE_PRIOR: Final[float] = 2.0
"""Pseudo-count added to the sample size.

With 2.0, three observations keep 60% of the raw share, ten keep 83% and one
hundred keep 98%.
"""

SMALL_SAMPLE_CONFIDENCE_CAP: Final[float] = 0.5
"""Maximum confidence for patterns below the minimum-occurrences floor."""

DEFAULT_MIN_OCCURRENCES: Final[int] = 3
"""Default significance floor: fewer observations produce no violations."""

DEFAULT_AUTO_APPROVE_THRESHOLD: Final[float] = 0.95
"""Default confidence at which a learned pattern is auto-approved."""

CONFIDENCE_PRECISION: Final[int] = 6
"""Decimal places kept in confidence scores, for stable equality across runs."""


__all__ = [
    "CONFIDENCE_PRECISION",
    "DEFAULT_AUTO_APPROVE_THRESHOLD",
    "DEFAULT_MIN_OCCURRENCES",
    "SAMPLE_SIZE_PRIOR",
    "SMALL_SAMPLE_CONFIDENCE_CAP",
]
