# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Violation severity enum for OmniDrift.

Severity levels, from most to least severe:

    ERROR   - blocks commits and merges
    WARNING - displayed but does not block
    INFO    - informational only
    HINT    - subtle suggestion

The numeric rank is exposed through ``EnumSeverity.rank`` so that callers can
compare severities without depending on declaration order.
"""

from __future__ import annotations

from enum import Enum


class EnumSeverity(str, Enum):
    """Severity of a surfaced violation.

    Example:
        >>> EnumSeverity.ERROR.rank > EnumSeverity.WARNING.rank
        True
        >>> EnumSeverity("hint")
        <EnumSeverity.HINT: 'hint'>
    """

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    HINT = "hint"

    @property
    def rank(self) -> int:
        """Numeric rank, higher is more severe (error=4 ... hint=1)."""
        return _SEVERITY_RANKS[self]

    def is_more_severe_than(self, other: EnumSeverity) -> bool:
        return self.rank > other.rank


_SEVERITY_RANKS: dict[EnumSeverity, int] = {
    EnumSeverity.ERROR: 4,
    EnumSeverity.WARNING: 3,
    EnumSeverity.INFO: 2,
    EnumSeverity.HINT: 1,
}


__all__ = ["EnumSeverity"]
