# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Raw detector output: pattern observations and direct violations."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from omnidrift.enums import EnumDetectorCategory, EnumSeverity
from omnidrift.models.model_range import ModelRange


class ModelPatternObservation(BaseModel):
    """One detector's sighting of a convention instance in one file.

    Observations of the same ``pattern_id`` across files are merged by the
    aggregator; observations sharing a ``variant`` signature count towards
    the same variant.

    Attributes:
        pattern_id: Identity of the learned convention (e.g. "error-handling-style").
        category: Category of the detector that produced the observation.
        file: Relative path of the file the observation was made in.
        range: Location of the instance (zero-indexed, start <= end).
        variant: Signature identifying how the convention is expressed here.
        variant_label: Human-readable description of the variant; defaults
            to the signature when omitted.
        confidence_hint: The detector's own confidence in this sighting.
        snippet: Optional source excerpt, used as evidence and AI examples.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    pattern_id: str = Field(..., min_length=1)
    category: EnumDetectorCategory
    file: str = Field(..., min_length=1)
    range: ModelRange
    variant: str = Field(..., min_length=1)
    variant_label: str | None = Field(default=None)
    confidence_hint: float = Field(default=1.0, ge=0.0, le=1.0)
    snippet: str | None = Field(default=None)

    @property
    def label(self) -> str:
        return self.variant_label or self.variant

    def sort_key(self) -> tuple[str, str, tuple[int, int, int, int], str]:
        """Deterministic ordering: file, pattern, range, variant."""
        return (self.file, self.pattern_id, self.range.sort_key(), self.variant)


class ModelRawViolation(BaseModel):
    """A violation reported directly by a detector.

    Unlike observations, raw violations do not need cross-file inference: the
    detector already knows the code is wrong. They still go through variant
    suppression, severity resolution and quick-fix generation.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    pattern_id: str = Field(..., min_length=1)
    category: EnumDetectorCategory
    file: str = Field(..., min_length=1)
    range: ModelRange
    message: str = Field(..., min_length=1)
    expected: str = Field(default="")
    actual: str = Field(default="")
    explanation: str | None = Field(default=None)
    severity_hint: EnumSeverity | None = Field(
        default=None,
        description="Detector-suggested severity; used only when no override applies",
    )

    def sort_key(self) -> tuple[str, str, tuple[int, int, int, int]]:
        return (self.file, self.pattern_id, self.range.sort_key())


__all__ = ["ModelPatternObservation", "ModelRawViolation"]
