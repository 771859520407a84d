# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Approved variants: intentional, human-approved deviations from a pattern.

A variant scopes a pattern id to the whole project, a directory, a file or a
glob, optionally narrowed to explicit locations. Active variants suppress
matching violations from the surfaced set; the deviations still count in
pattern statistics.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from omnidrift.enums import EnumVariantScope


class ModelVariantLocation(BaseModel):
    """An exact location covered by a variant (zero-indexed).

    ``character`` of ``None`` covers any column on the line.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    file: str = Field(..., min_length=1)
    line: int = Field(..., ge=0)
    character: int | None = Field(default=None, ge=0)


class ModelVariant(BaseModel):
    """An approval record for an intentional deviation.

    Attributes:
        id: Unique variant id.
        pattern_id: Pattern the deviation is approved for.
        name: Short name.
        reason: Human-supplied justification. Required.
        approver: Who approved the deviation.
        created_at: Approval timestamp.
        updated_at: Last modification timestamp.
        scope: Where the variant applies.
        scope_value: Directory, file or glob for non-global scopes.
        locations: When non-empty, only these locations inside the scope
            are covered.
        active: Inactive variants never suppress anything.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(..., min_length=1)
    pattern_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    reason: str = Field(..., min_length=1)
    approver: str = Field(default="unknown", min_length=1)
    created_at: datetime
    updated_at: datetime
    scope: EnumVariantScope
    scope_value: str | None = None
    locations: list[ModelVariantLocation] = Field(default_factory=list)
    active: bool = True

    @model_validator(mode="after")
    def _validate_scope_value(self) -> ModelVariant:
        if self.scope != EnumVariantScope.GLOBAL and not self.scope_value:
            raise ValueError(
                f"scope_value is required for {self.scope.value} scope"
            )
        return self


class ModelVariantQuery(BaseModel):
    """Filter for ``VariantManager.query``; unset fields match everything."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    pattern_ids: list[str] | None = None
    scopes: list[EnumVariantScope] | None = None
    active: bool | None = None
    file: str | None = None
    directory: str | None = None
    search: str | None = None


class ModelVariantStats(BaseModel):
    """Counts over all known variants."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    total: int = Field(default=0, ge=0)
    active: int = Field(default=0, ge=0)
    inactive: int = Field(default=0, ge=0)
    by_scope: dict[EnumVariantScope, int] = Field(default_factory=dict)
    by_pattern: dict[str, int] = Field(default_factory=dict)
    patterns_with_variants: int = Field(default=0, ge=0)


__all__ = [
    "ModelVariant",
    "ModelVariantLocation",
    "ModelVariantQuery",
    "ModelVariantStats",
]
