# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Unit tests for decomposed confidence scoring."""

from __future__ import annotations

import pytest

from omnidrift.aggregation import (
    SMALL_SAMPLE_CONFIDENCE_CAP,
    AggregationValidationError,
    compute_confidence,
    compute_sample_factor,
)
from omnidrift.enums import EnumConfidenceLevel


@pytest.mark.unit
class TestComputeConfidence:
    """Tests for compute_confidence."""

    def test_eight_of_ten(self) -> None:
        """8 of 10 observations scores 0.8 * 10/12."""
        components = compute_confidence(8, 10)

        assert components.dominant_share == 0.8
        assert components.sample_factor == 0.833333
        assert components.confidence == 0.666667
        assert components.below_min_occurrences is False

    def test_unanimous_large_sample_approaches_one(self) -> None:
        """A unanimous pattern approaches but never reaches 1.0."""
        confidence = compute_confidence(1000, 1000).confidence

        assert 0.99 < confidence < 1.0

    def test_small_sample_is_capped(self) -> None:
        """Below min_occurrences the score is capped."""
        components = compute_confidence(2, 2, min_occurrences=3)

        assert components.below_min_occurrences is True
        assert components.confidence <= SMALL_SAMPLE_CONFIDENCE_CAP

    def test_cap_lifts_at_floor(self) -> None:
        """At min_occurrences the raw score is used."""
        components = compute_confidence(3, 3, min_occurrences=3)

        assert components.below_min_occurrences is False
        assert components.confidence == 0.6

    @pytest.mark.parametrize("total", [1, 2, 3, 5, 10, 50])
    def test_monotonic_in_share(self, total: int) -> None:
        """More dominant observations never lower the score."""
        scores = [compute_confidence(k, total).confidence for k in range(total + 1)]

        assert scores == sorted(scores)

    @pytest.mark.parametrize("share", [0.5, 0.75, 1.0])
    def test_monotonic_in_sample_size(self, share: float) -> None:
        """A larger sample at the same share never lowers the score."""
        scores = [
            compute_confidence(int(total * share), total).confidence
            for total in (4, 8, 16, 32, 64, 128)
        ]

        assert scores == sorted(scores)

    def test_deterministic(self) -> None:
        """Identical inputs yield identical components."""
        assert compute_confidence(7, 9) == compute_confidence(7, 9)

    @pytest.mark.parametrize(
        ("dominant", "total", "min_occurrences"),
        [(0, 0, 3), (1, -1, 3), (4, 3, 3), (-1, 3, 3), (1, 3, 0)],
    )
    def test_rejects_invalid_counts(
        self, dominant: int, total: int, min_occurrences: int
    ) -> None:
        """Impossible counts raise AggregationValidationError."""
        with pytest.raises(AggregationValidationError):
            compute_confidence(dominant, total, min_occurrences)


@pytest.mark.unit
class TestSampleFactor:
    """Tests for compute_sample_factor."""

    def test_increasing(self) -> None:
        """The factor grows with the sample and stays below one."""
        factors = [compute_sample_factor(n) for n in (1, 3, 10, 100)]

        assert factors == sorted(factors)
        assert all(0.0 < f < 1.0 for f in factors)


@pytest.mark.unit
class TestConfidenceLevel:
    """Tests for EnumConfidenceLevel.from_score boundaries."""

    @pytest.mark.parametrize(
        ("score", "expected"),
        [
            (0.85, EnumConfidenceLevel.HIGH),
            (0.849, EnumConfidenceLevel.MEDIUM),
            (0.70, EnumConfidenceLevel.MEDIUM),
            (0.50, EnumConfidenceLevel.LOW),
            (0.499, EnumConfidenceLevel.UNCERTAIN),
            (0.0, EnumConfidenceLevel.UNCERTAIN),
        ],
    )
    def test_boundaries(self, score: float, expected: EnumConfidenceLevel) -> None:
        """Thresholds are inclusive lower bounds."""
        assert EnumConfidenceLevel.from_score(score) is expected
