# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Confidence level classification for learned patterns.

Thresholds:
    HIGH      score >= 0.85
    MEDIUM    0.70 <= score < 0.85
    LOW       0.50 <= score < 0.70
    UNCERTAIN score < 0.50
"""

from __future__ import annotations

from enum import Enum
from typing import Final

CONFIDENCE_HIGH_THRESHOLD: Final[float] = 0.85
CONFIDENCE_MEDIUM_THRESHOLD: Final[float] = 0.70
CONFIDENCE_LOW_THRESHOLD: Final[float] = 0.50


class EnumConfidenceLevel(str, Enum):
    """Bucketed confidence of a learned pattern."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    UNCERTAIN = "uncertain"

    @classmethod
    def from_score(cls, score: float) -> EnumConfidenceLevel:
        """Classify a [0, 1] confidence score.

        Example:
            >>> EnumConfidenceLevel.from_score(0.9)
            <EnumConfidenceLevel.HIGH: 'high'>
            >>> EnumConfidenceLevel.from_score(0.5)
            <EnumConfidenceLevel.LOW: 'low'>
        """
        if score >= CONFIDENCE_HIGH_THRESHOLD:
            return cls.HIGH
        if score >= CONFIDENCE_MEDIUM_THRESHOLD:
            return cls.MEDIUM
        if score >= CONFIDENCE_LOW_THRESHOLD:
            return cls.LOW
        return cls.UNCERTAIN


__all__ = [
    "CONFIDENCE_HIGH_THRESHOLD",
    "CONFIDENCE_LOW_THRESHOLD",
    "CONFIDENCE_MEDIUM_THRESHOLD",
    "EnumConfidenceLevel",
]
