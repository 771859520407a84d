# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Confidence scoring for aggregated patterns.

Confidence scores are DECOMPOSED: the rolled-up ``confidence`` is reported
together with the dominant share and the sample-size factor it was built
from, so a low score can be traced to either a split codebase or a small
sample. See ``presets`` for the formula and constants.

Usage:
    from omnidrift.aggregation.handler_confidence_scoring import compute_confidence

    components = compute_confidence(dominant_count=8, total=10)
    components.confidence  # 0.666667
"""

from __future__ import annotations

from omnidrift.aggregation.exceptions import AggregationValidationError
from omnidrift.aggregation.presets import (
    CONFIDENCE_PRECISION,
    DEFAULT_MIN_OCCURRENCES,
    SAMPLE_SIZE_PRIOR,
    SMALL_SAMPLE_CONFIDENCE_CAP,
)
from omnidrift.models import ModelConfidenceComponents


def compute_sample_factor(total: int) -> float:
    """Sample-size discount in [0, 1), increasing in ``total``."""
    return total / (total + SAMPLE_SIZE_PRIOR)


def compute_confidence(
    dominant_count: int,
    total: int,
    min_occurrences: int = DEFAULT_MIN_OCCURRENCES,
) -> ModelConfidenceComponents:
    """Compute the decomposed confidence of a dominant variant.

    Args:
        dominant_count: Observations using the dominant variant.
        total: All observations of the pattern.
        min_occurrences: Significance floor; below it the score is capped.

    Returns:
        ModelConfidenceComponents with share, sample factor and the final
        score rounded to ``CONFIDENCE_PRECISION`` places.

    Raises:
        AggregationValidationError: If ``total`` or ``min_occurrences`` is not
            positive, or ``dominant_count`` is outside ``[0, total]``.

    Examples:
        >>> compute_confidence(8, 10).confidence
        0.666667
        >>> compute_confidence(2, 2).confidence  # tiny sample, capped
        0.5
    """
    if total <= 0:
        raise AggregationValidationError(f"total must be positive, got {total}")
    if min_occurrences <= 0:
        raise AggregationValidationError(
            f"min_occurrences must be positive, got {min_occurrences}"
        )
    if not 0 <= dominant_count <= total:
        raise AggregationValidationError(
            f"dominant_count must be in [0, {total}], got {dominant_count}"
        )

    dominant_share = dominant_count / total
    sample_factor = compute_sample_factor(total)
    confidence = dominant_share * sample_factor

    below_floor = total < min_occurrences
    if below_floor:
        confidence = min(confidence, SMALL_SAMPLE_CONFIDENCE_CAP)

    return ModelConfidenceComponents(
        dominant_share=round(dominant_share, CONFIDENCE_PRECISION),
        sample_factor=round(sample_factor, CONFIDENCE_PRECISION),
        below_min_occurrences=below_floor,
        confidence=round(confidence, CONFIDENCE_PRECISION),
    )


__all__ = ["compute_confidence", "compute_sample_factor"]
