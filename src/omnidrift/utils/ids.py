# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Deterministic identifier and hashing helpers."""

from __future__ import annotations

import hashlib
from datetime import UTC, datetime
from pathlib import PurePosixPath

from omnidrift.constants import (
    LANGUAGE_BY_EXTENSION,
    UNKNOWN_LANGUAGE,
    VIOLATION_ID_PREFIX,
)


def generate_entity_id(prefix: str, *components: object) -> str:
    """Generate a deterministic entity ID from components.

    Args:
        prefix: ID prefix (e.g., 'vio', 'pat').
        components: Components to hash for uniqueness; converted with ``str``.

    Returns:
        ``{prefix}_{first 16 hex chars of sha256(components joined by ':')}``.
    """
    combined = ":".join(str(c) for c in components)
    hash_value = hashlib.sha256(combined.encode("utf-8")).hexdigest()[:16]
    return f"{prefix}_{hash_value}"


def generate_violation_id(
    file: str,
    pattern_id: str,
    start_line: int,
    start_character: int,
    end_line: int,
    end_character: int,
) -> str:
    """Stable violation id derived from ``(file, pattern_id, range)``.

    Rescanning unchanged code yields the same id, which is what lets the
    tracker count occurrences instead of reporting duplicates.
    """
    return generate_entity_id(
        VIOLATION_ID_PREFIX,
        normalize_path(file),
        pattern_id,
        f"{start_line}.{start_character}-{end_line}.{end_character}",
    )


def compute_content_hash(content: str) -> str:
    """Compute the SHA-256 hex digest of text content."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def normalize_path(path: str) -> str:
    """Normalize a relative path to forward slashes without a leading './'."""
    normalized = path.replace("\\", "/")
    while normalized.startswith("./"):
        normalized = normalized[2:]
    return normalized


def detect_language(path: str) -> str:
    """Language identifier from the file extension, or ``"unknown"``."""
    suffix = PurePosixPath(normalize_path(path)).suffix.lower()
    return LANGUAGE_BY_EXTENSION.get(suffix, UNKNOWN_LANGUAGE)


def utc_now() -> datetime:
    """Get current UTC time with timezone info."""
    return datetime.now(UTC)


__all__ = [
    "compute_content_hash",
    "detect_language",
    "generate_entity_id",
    "generate_violation_id",
    "normalize_path",
    "utc_now",
]
