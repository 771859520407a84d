# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Cross-file learned pattern produced by the aggregator.

An aggregated pattern has no identity beyond its ``id`` (the pattern id): it
is recomputed from the current observation set on every pass and replaced,
never mutated.

Invariants:
    - sum(variant.count for variant in variants) == frequency
    - 0.0 <= confidence <= 1.0
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from omnidrift.enums import (
    EnumConfidenceLevel,
    EnumDetectorCategory,
    EnumPatternStatus,
)
from omnidrift.models.model_pattern_observation import ModelPatternObservation


class ModelPatternVariant(BaseModel):
    """Statistics for one learned variant of a pattern.

    Attributes:
        signature: Variant signature shared by its observations.
        label: Human-readable description of the variant.
        count: Number of observations with this signature.
        share: ``count / frequency`` of the owning pattern.
        files: Sorted distinct files the variant was observed in.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    signature: str = Field(..., min_length=1)
    label: str = Field(..., min_length=1)
    count: int = Field(..., ge=1)
    share: float = Field(..., ge=0.0, le=1.0)
    files: list[str] = Field(default_factory=list)


class ModelConfidenceComponents(BaseModel):
    """Decomposed confidence score.

    Attributes:
        dominant_share: Fraction of observations using the dominant variant.
        sample_factor: Sample-size discount in [0, 1), approaching 1 as the
            number of observations grows.
        below_min_occurrences: Whether the sample was under the significance
            floor (in which case confidence is capped).
        confidence: Final score in [0, 1].
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    dominant_share: float = Field(..., ge=0.0, le=1.0)
    sample_factor: float = Field(..., ge=0.0, le=1.0)
    below_min_occurrences: bool
    confidence: float = Field(..., ge=0.0, le=1.0)


class ModelAggregatedPattern(BaseModel):
    """A learned convention across all files of a scan pass.

    Attributes:
        id: Pattern id.
        category: Category of the detector(s) that observed it.
        dominant_variant: Signature of the most frequent variant.
        dominant_label: Human-readable description of the dominant variant.
        confidence: Confidence that the dominant variant is the convention.
        confidence_level: Bucketed confidence.
        components: Decomposed confidence score.
        frequency: Total number of observations.
        file_spread: Number of distinct files with observations.
        variants: Variant statistics, dominant first then by count/signature.
        evidence: Conforming observations backing the dominant variant.
        outliers: Observations not matching the dominant variant.
        status: Discovered or auto-approved.
        is_significant: Whether ``frequency`` reached the minimum-occurrences
            floor. Insignificant patterns produce no violations.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(..., min_length=1)
    category: EnumDetectorCategory
    dominant_variant: str = Field(..., min_length=1)
    dominant_label: str = Field(..., min_length=1)
    confidence: float = Field(..., ge=0.0, le=1.0)
    confidence_level: EnumConfidenceLevel
    components: ModelConfidenceComponents
    frequency: int = Field(..., ge=1)
    file_spread: int = Field(..., ge=1)
    variants: list[ModelPatternVariant] = Field(..., min_length=1)
    evidence: list[ModelPatternObservation] = Field(default_factory=list)
    outliers: list[ModelPatternObservation] = Field(default_factory=list)
    status: EnumPatternStatus = EnumPatternStatus.DISCOVERED
    is_significant: bool = True

    @model_validator(mode="after")
    def _validate_counts(self) -> ModelAggregatedPattern:
        variant_total = sum(v.count for v in self.variants)
        if variant_total != self.frequency:
            raise ValueError(
                f"Variant counts ({variant_total}) do not sum to frequency "
                f"({self.frequency}) for pattern '{self.id}'"
            )
        if self.variants[0].signature != self.dominant_variant:
            raise ValueError(
                f"First variant must be the dominant variant for pattern '{self.id}'"
            )
        return self

    @property
    def outlier_count(self) -> int:
        return len(self.outliers)

    def variant(self, signature: str) -> ModelPatternVariant | None:
        for candidate in self.variants:
            if candidate.signature == signature:
                return candidate
        return None


__all__ = [
    "ModelAggregatedPattern",
    "ModelConfidenceComponents",
    "ModelPatternVariant",
]
