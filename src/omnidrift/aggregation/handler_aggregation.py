# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Cross-file pattern aggregation.

Merges per-file observations by pattern id, then by variant signature, picks
the dominant variant, scores confidence and splits observations into
evidence (conforming) and outliers.

Determinism:
    Observations are sorted before any decision is made, so the result does
    not depend on the order workers reported them. The dominant variant is
    the one with the highest count; ties go to the lexicographically smallest
    signature, then to the earliest file path. The ordering is total.

Usage:
    from omnidrift.aggregation import aggregate_patterns

    patterns = aggregate_patterns(observations, min_occurrences=3)
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable

from omnidrift.aggregation.exceptions import AggregationValidationError
from omnidrift.aggregation.handler_confidence_scoring import compute_confidence
from omnidrift.aggregation.presets import (
    CONFIDENCE_PRECISION,
    DEFAULT_AUTO_APPROVE_THRESHOLD,
    DEFAULT_MIN_OCCURRENCES,
)
from omnidrift.enums import EnumConfidenceLevel, EnumPatternStatus
from omnidrift.models import (
    ModelAggregatedPattern,
    ModelPatternObservation,
    ModelPatternVariant,
)

logger = logging.getLogger(__name__)


def _variant_sort_key(
    item: tuple[str, list[ModelPatternObservation]],
) -> tuple[int, str, str]:
    signature, members = item
    return (-len(members), signature, members[0].file)


def _deduplicate(
    observations: Iterable[ModelPatternObservation],
) -> list[ModelPatternObservation]:
    """Sort observations and drop exact duplicates."""
    ordered = sorted(observations, key=lambda o: o.sort_key())
    unique: list[ModelPatternObservation] = []
    for observation in ordered:
        if unique and unique[-1] == observation:
            logger.debug(
                "Dropping duplicate observation",
                extra={"pattern_id": observation.pattern_id, "file_path": observation.file},
            )
            continue
        unique.append(observation)
    return unique


def aggregate_pattern(
    pattern_id: str,
    observations: list[ModelPatternObservation],
    *,
    min_occurrences: int = DEFAULT_MIN_OCCURRENCES,
    auto_approve_threshold: float = DEFAULT_AUTO_APPROVE_THRESHOLD,
) -> ModelAggregatedPattern:
    """Aggregate the observations of a single pattern.

    Args:
        pattern_id: Pattern the observations belong to.
        observations: Non-empty observations, all with ``pattern_id``.
        min_occurrences: Significance floor.
        auto_approve_threshold: Confidence at which the pattern is approved.

    Raises:
        AggregationValidationError: If the list is empty, contains another
            pattern id, or mixes categories.
    """
    if not observations:
        raise AggregationValidationError(
            f"Cannot aggregate pattern '{pattern_id}' without observations"
        )
    foreign = {o.pattern_id for o in observations} - {pattern_id}
    if foreign:
        raise AggregationValidationError(
            f"Observations for '{pattern_id}' include other pattern ids: {sorted(foreign)}"
        )
    categories = {o.category for o in observations}
    if len(categories) > 1:
        raise AggregationValidationError(
            f"Pattern '{pattern_id}' reported under multiple categories: "
            f"{sorted(c.value for c in categories)}"
        )

    ordered = sorted(observations, key=lambda o: o.sort_key())
    by_signature: dict[str, list[ModelPatternObservation]] = defaultdict(list)
    for observation in ordered:
        by_signature[observation.variant].append(observation)

    # members keep sorted order, so members[0].file is the earliest file
    ranked = sorted(by_signature.items(), key=_variant_sort_key)
    total = len(ordered)
    dominant_signature, dominant_members = ranked[0]

    variants = [
        ModelPatternVariant(
            signature=signature,
            label=members[0].label,
            count=len(members),
            share=round(len(members) / total, CONFIDENCE_PRECISION),
            files=sorted({m.file for m in members}),
        )
        for signature, members in ranked
    ]

    components = compute_confidence(len(dominant_members), total, min_occurrences)
    outliers = [o for o in ordered if o.variant != dominant_signature]

    return ModelAggregatedPattern(
        id=pattern_id,
        category=next(iter(categories)),
        dominant_variant=dominant_signature,
        dominant_label=dominant_members[0].label,
        confidence=components.confidence,
        confidence_level=EnumConfidenceLevel.from_score(components.confidence),
        components=components,
        frequency=total,
        file_spread=len({o.file for o in ordered}),
        variants=variants,
        evidence=dominant_members,
        outliers=outliers,
        status=(
            EnumPatternStatus.APPROVED
            if components.confidence >= auto_approve_threshold
            else EnumPatternStatus.DISCOVERED
        ),
        is_significant=total >= min_occurrences,
    )


def aggregate_patterns(
    observations: Iterable[ModelPatternObservation],
    *,
    min_occurrences: int = DEFAULT_MIN_OCCURRENCES,
    auto_approve_threshold: float = DEFAULT_AUTO_APPROVE_THRESHOLD,
) -> list[ModelAggregatedPattern]:
    """Aggregate a full observation set into patterns sorted by id.

    Exact duplicate observations are counted once.

    Raises:
        AggregationValidationError: If a pattern id is reported under more
            than one category.
    """
    grouped: dict[str, list[ModelPatternObservation]] = defaultdict(list)
    for observation in _deduplicate(observations):
        grouped[observation.pattern_id].append(observation)

    patterns = [
        aggregate_pattern(
            pattern_id,
            grouped[pattern_id],
            min_occurrences=min_occurrences,
            auto_approve_threshold=auto_approve_threshold,
        )
        for pattern_id in sorted(grouped)
    ]
    logger.debug(
        "Aggregated %d observations into %d patterns",
        sum(p.frequency for p in patterns),
        len(patterns),
    )
    return patterns


__all__ = ["aggregate_pattern", "aggregate_patterns"]
