# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Scope of an approved variant (intentional deviation)."""

from __future__ import annotations

from enum import Enum


class EnumVariantScope(str, Enum):
    """Where an approved variant applies.

    Attributes:
        GLOBAL: Every file in the project.
        DIRECTORY: Every file below ``scope_value`` (a relative directory).
        FILE: Exactly the file ``scope_value``.
        GLOB: Files whose relative path matches the ``scope_value`` pattern.
    """

    GLOBAL = "global"
    DIRECTORY = "directory"
    FILE = "file"
    GLOB = "glob"


__all__ = ["EnumVariantScope"]
