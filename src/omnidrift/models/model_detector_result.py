# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Detector input context and per-file detector result.

Category-specific metadata is a tagged union discriminated by ``kind`` rather
than an untyped dictionary, so consumers get validated, typed fields for the
categories they understand and a generic fallback for everything else.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from omnidrift.enums import EnumDetectorCategory
from omnidrift.models.model_file_identity import ModelFileIdentity
from omnidrift.models.model_pattern_observation import (
    ModelPatternObservation,
    ModelRawViolation,
)

# =============================================================================
# Category Metadata (tagged union)
# =============================================================================


class ModelErrorHandlingMetadata(BaseModel):
    """Metadata from error-handling detectors."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["errors"] = "errors"
    try_catch_blocks: int = Field(default=0, ge=0)
    promise_catch_chains: int = Field(default=0, ge=0)
    custom_error_classes: list[str] = Field(default_factory=list)


class ModelLoggingMetadata(BaseModel):
    """Metadata from logging detectors."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["logging"] = "logging"
    logger_names: list[str] = Field(default_factory=list)
    structured: bool = False
    levels_used: list[str] = Field(default_factory=list)


class ModelApiMetadata(BaseModel):
    """Metadata from API detectors."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["api"] = "api"
    endpoints: list[str] = Field(default_factory=list)
    http_methods: list[str] = Field(default_factory=list)
    response_envelope: str | None = None


class ModelStructuralMetadata(BaseModel):
    """Metadata from structural detectors (naming, layout, exports)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["structural"] = "structural"
    naming_convention: str | None = None
    exports: list[str] = Field(default_factory=list)
    imports: list[str] = Field(default_factory=list)


class ModelGenericMetadata(BaseModel):
    """Fallback metadata for categories without a dedicated shape."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["generic"] = "generic"
    category: EnumDetectorCategory
    values: dict[str, str] = Field(default_factory=dict)


DetectorMetadata = Annotated[
    ModelErrorHandlingMetadata
    | ModelLoggingMetadata
    | ModelApiMetadata
    | ModelStructuralMetadata
    | ModelGenericMetadata,
    Field(discriminator="kind"),
]
"""Category-specific detector metadata, discriminated by ``kind``."""


# =============================================================================
# Detector Input / Output
# =============================================================================


class ModelDetectionContext(BaseModel):
    """Everything a detector is given for one file."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    file: ModelFileIdentity
    content: str
    project_root: str = Field(default=".")


class ModelDetectorResult(BaseModel):
    """One detector's result for one file.

    Empty results are valid. Detectors may also return ``None`` or raise;
    the worker tolerates both.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    observations: list[ModelPatternObservation] = Field(default_factory=list)
    violations: list[ModelRawViolation] = Field(default_factory=list)
    confidence: float = Field(default=1.0, ge=0.0, le=1.0)
    metadata: DetectorMetadata | None = Field(default=None)

    @property
    def is_empty(self) -> bool:
        return not self.observations and not self.violations


__all__ = [
    "DetectorMetadata",
    "ModelApiMetadata",
    "ModelDetectionContext",
    "ModelDetectorResult",
    "ModelErrorHandlingMetadata",
    "ModelGenericMetadata",
    "ModelLoggingMetadata",
    "ModelStructuralMetadata",
]
