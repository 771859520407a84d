# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Redaction of secrets from free-form error text.

Detector exceptions and I/O errors can echo file content into their message.
Before such text is logged or surfaced in ``ModelScanError.message`` it is run
through ``sanitize_message``.

Usage:
    from omnidrift.utils.log_sanitizer import sanitize_message

    sanitize_message("token sk-1234567890abcdefghijkl leaked")
    # 'token [API_KEY] leaked'
"""

from __future__ import annotations

import re
from typing import Final

MAX_MESSAGE_LENGTH: Final[int] = 500
"""Sanitized messages are truncated to this many characters."""

_REDACTIONS: Final[tuple[tuple[re.Pattern[str], str], ...]] = (
    (re.compile(r"\bsk-[A-Za-z0-9_-]{16,}\b"), "[API_KEY]"),
    (re.compile(r"\bgh[pousr]_[A-Za-z0-9]{20,}\b"), "[GITHUB_TOKEN]"),
    (re.compile(r"\bAKIA[0-9A-Z]{16}\b"), "[AWS_ACCESS_KEY]"),
    (re.compile(r"(?i)\bbearer\s+[A-Za-z0-9._~+/=-]{8,}"), "Bearer [TOKEN]"),
    (re.compile(r"(?i)(://[^:/\s]+:)[^@/\s]+@"), r"\1[PASSWORD]@"),
    (
        re.compile(r"(?i)\b(password|passwd|secret|api_key|apikey|token)\s*[=:]\s*\S+"),
        r"\1=[REDACTED]",
    ),
)


def sanitize_message(message: str) -> str:
    """Redact known secret shapes and cap the length of ``message``."""
    sanitized = message
    for pattern, replacement in _REDACTIONS:
        sanitized = pattern.sub(replacement, sanitized)
    if len(sanitized) > MAX_MESSAGE_LENGTH:
        sanitized = sanitized[: MAX_MESSAGE_LENGTH - 3] + "..."
    return sanitized


__all__ = ["MAX_MESSAGE_LENGTH", "sanitize_message"]
