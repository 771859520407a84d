# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Quick-fix models: candidates, ranked fixes, impact and validation results."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from omnidrift.enums import EnumFixType, EnumQuickFixKind
from omnidrift.models.model_range import ModelWorkspaceEdit


class ModelFixCandidate(BaseModel):
    """An unranked transform proposal for one violation.

    Produced by fix strategies, or supplied by the caller as an explicit
    transform definition. Ranking turns candidates into ``ModelQuickFix``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    title: str = Field(..., min_length=1)
    fix_type: EnumFixType
    kind: EnumQuickFixKind = EnumQuickFixKind.QUICKFIX
    edit: ModelWorkspaceEdit = Field(default_factory=ModelWorkspaceEdit)
    confidence: float = Field(..., ge=0.0, le=1.0)
    preview: str | None = None


class ModelQuickFix(BaseModel):
    """A ranked candidate transform resolving a violation.

    Attributes:
        title: Human-readable title for the fix.
        kind: Editor code-action kind.
        fix_type: Transform performed.
        edit: Concrete text changes.
        is_preferred: Whether this is the one-click fix. At most one fix per
            violation has this set.
        confidence: How safely the fix preserves program semantics.
        preview: Unified diff of the change, when content was available.
        violation_id: Violation this fix addresses.
        rank: Zero-based position in the ranked candidate list.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    title: str = Field(..., min_length=1)
    kind: EnumQuickFixKind
    fix_type: EnumFixType
    edit: ModelWorkspaceEdit
    is_preferred: bool = False
    confidence: float = Field(..., ge=0.0, le=1.0)
    preview: str | None = None
    violation_id: str = Field(..., min_length=1)
    rank: int = Field(default=0, ge=0)

    def to_code_action(self) -> dict[str, Any]:
        """Convert to an editor code-action dictionary.

        Edit keys stay relative paths; the editor integration is responsible
        for turning them into document URIs.
        """
        return {
            "title": self.title,
            "kind": self.kind.value,
            "isPreferred": self.is_preferred,
            "edit": {
                "changes": {
                    file: [
                        {
                            "range": {
                                "start": {
                                    "line": edit.range.start.line,
                                    "character": edit.range.start.character,
                                },
                                "end": {
                                    "line": edit.range.end.line,
                                    "character": edit.range.end.character,
                                },
                            },
                            "newText": edit.new_text,
                        }
                        for edit in edits
                    ]
                    for file, edits in self.edit.changes.items()
                }
            },
        }


class ModelQuickFixResult(BaseModel):
    """Ranked quick fixes for a single violation."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    violation_id: str = Field(..., min_length=1)
    fixes: list[ModelQuickFix] = Field(default_factory=list)
    failed_strategies: list[EnumFixType] = Field(default_factory=list)

    @model_validator(mode="after")
    def _validate_single_preferred(self) -> ModelQuickFixResult:
        preferred = [fix for fix in self.fixes if fix.is_preferred]
        if len(preferred) > 1:
            raise ValueError(
                f"At most one preferred fix allowed for violation '{self.violation_id}'"
            )
        return self

    @property
    def has_fixes(self) -> bool:
        return bool(self.fixes)

    @property
    def preferred_fix(self) -> ModelQuickFix | None:
        for fix in self.fixes:
            if fix.is_preferred:
                return fix
        return None


class ModelFixImpact(BaseModel):
    """Estimated impact of applying a fix."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    files_affected: int = Field(..., ge=0)
    lines_changed: int = Field(..., ge=0)
    risk_level: Literal["low", "medium", "high"]
    breaking_change: bool


class ModelFixValidation(BaseModel):
    """Result of validating a fix against file content."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    valid: bool
    errors: list[str] = Field(default_factory=list)


__all__ = [
    "ModelFixCandidate",
    "ModelFixImpact",
    "ModelFixValidation",
    "ModelQuickFix",
    "ModelQuickFixResult",
]
