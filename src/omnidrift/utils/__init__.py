# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Shared utilities for OmniDrift."""

from omnidrift.utils.ids import (
    compute_content_hash,
    detect_language,
    generate_entity_id,
    generate_violation_id,
    normalize_path,
    utc_now,
)
from omnidrift.utils.log_sanitizer import sanitize_message

__all__ = [
    "compute_content_hash",
    "detect_language",
    "generate_entity_id",
    "generate_violation_id",
    "normalize_path",
    "sanitize_message",
    "utc_now",
]
