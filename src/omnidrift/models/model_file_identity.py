# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""File identity as handed to the engine by the file/scanning layer."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ModelFileIdentity(BaseModel):
    """Identity of one file to scan.

    The engine never walks directories or parses source text itself; it only
    needs to know where a file is, how to refer to it, and which detectors
    apply to its language.

    Attributes:
        path: Absolute (or root-joined) path used to read the file.
        relative_path: Forward-slash path relative to the project root. This
            is the identity used in every observation, violation and id.
        language: Detected language identifier (``"unknown"`` if none).
        content_hash: Optional SHA-256 of the content, if already known.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    path: str = Field(..., min_length=1)
    relative_path: str = Field(..., min_length=1)
    language: str = Field(default="unknown")
    content_hash: str | None = Field(default=None)


__all__ = ["ModelFileIdentity"]
