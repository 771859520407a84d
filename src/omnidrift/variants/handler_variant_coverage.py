# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Pure coverage checks: does an approved variant cover a location?

Paths are compared after ``normalize_path``. Glob scopes use
``fnmatch.fnmatchcase`` so matching does not depend on the platform's case
rules.
"""

from __future__ import annotations

from fnmatch import fnmatchcase

from omnidrift.enums import EnumVariantScope
from omnidrift.models import ModelVariant
from omnidrift.utils import normalize_path


def scope_matches_file(variant: ModelVariant, file: str) -> bool:
    """Whether ``file`` falls inside the variant's scope (ignores locations)."""
    path = normalize_path(file)
    scope_value = normalize_path(variant.scope_value or "")
    if variant.scope == EnumVariantScope.GLOBAL:
        return True
    if variant.scope == EnumVariantScope.DIRECTORY:
        directory = scope_value.rstrip("/")
        return path == directory or path.startswith(f"{directory}/")
    if variant.scope == EnumVariantScope.FILE:
        return path == scope_value
    if variant.scope == EnumVariantScope.GLOB:
        return fnmatchcase(path, scope_value)
    return False


def covers_location(
    variant: ModelVariant,
    pattern_id: str,
    file: str,
    line: int,
    character: int | None = None,
) -> bool:
    """Whether an active variant covers a location of ``pattern_id``.

    With explicit ``locations`` only those lines (and characters, when
    given on both sides) inside the scope are covered.
    """
    if not variant.active or variant.pattern_id != pattern_id:
        return False
    if not scope_matches_file(variant, file):
        return False
    if not variant.locations:
        return True
    path = normalize_path(file)
    for location in variant.locations:
        if normalize_path(location.file) != path or location.line != line:
            continue
        if location.character is None or character is None:
            return True
        if location.character == character:
            return True
    return False


__all__ = ["covers_location", "scope_matches_file"]
