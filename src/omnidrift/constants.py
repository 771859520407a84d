# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Project-wide constants for OmniDrift."""

from __future__ import annotations

from typing import Final

DEFAULT_IGNORE_PATTERNS: Final[tuple[str, ...]] = (
    "node_modules/**",
    ".git/**",
    "dist/**",
    "build/**",
    "coverage/**",
    ".drift/**",
)
"""Ignore globs applied to relative paths unless the project overrides them."""

LANGUAGE_BY_EXTENSION: Final[dict[str, str]] = {
    ".ts": "typescript",
    ".tsx": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".py": "python",
    ".pyw": "python",
    ".java": "java",
    ".cs": "csharp",
    ".php": "php",
    ".go": "go",
    ".rs": "rust",
    ".cpp": "cpp",
    ".cc": "cpp",
    ".hpp": "cpp",
    ".h": "cpp",
    ".css": "css",
    ".scss": "css",
    ".sass": "css",
    ".less": "css",
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".md": "markdown",
    ".mdx": "markdown",
    ".html": "html",
    ".htm": "html",
    ".vue": "vue",
    ".svelte": "svelte",
}
"""File extension (lower-case, with dot) to language identifier."""

UNKNOWN_LANGUAGE: Final[str] = "unknown"

VIOLATION_ID_PREFIX: Final[str] = "vio"
"""Prefix of deterministic violation ids (``vio_<16 hex chars>``)."""

VARIANT_INDEX_VERSION: Final[str] = "1.0.0"
"""Schema version written to the variant index file."""


__all__ = [
    "DEFAULT_IGNORE_PATTERNS",
    "LANGUAGE_BY_EXTENSION",
    "UNKNOWN_LANGUAGE",
    "VARIANT_INDEX_VERSION",
    "VIOLATION_ID_PREFIX",
]
