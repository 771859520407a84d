# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Request context handed to an AI explanation or fix collaborator.

The engine only builds this value; it never calls the collaborator.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from omnidrift.enums import EnumConfidenceLevel
from omnidrift.models.model_violation import ModelViolation


class ModelPatternSummary(BaseModel):
    """The parts of an aggregated pattern an AI prompt needs."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str
    dominant_variant: str
    dominant_label: str
    confidence: float = Field(..., ge=0.0, le=1.0)
    confidence_level: EnumConfidenceLevel
    frequency: int = Field(..., ge=0)


class ModelCodeSnippet(BaseModel):
    """Excerpt of a file; ``start_line`` is zero-indexed."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    file: str
    start_line: int = Field(..., ge=0)
    end_line: int = Field(..., ge=0)
    code: str


class ModelAiRequestContext(BaseModel):
    """Context for one explanation or fix request."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    purpose: Literal["explain", "fix"]
    violation: ModelViolation
    pattern: ModelPatternSummary | None = None
    snippet: ModelCodeSnippet | None = None
    similar_examples: list[ModelCodeSnippet] = Field(default_factory=list)


__all__ = ["ModelAiRequestContext", "ModelCodeSnippet", "ModelPatternSummary"]
