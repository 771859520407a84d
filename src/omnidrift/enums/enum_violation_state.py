# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Violation lifecycle state enum.

Lifecycle Flow:
    NEW -> ESCALATED* -> SUPPRESSED | RESOLVED | IGNORED

SUPPRESSED, RESOLVED and IGNORED are terminal for one incarnation of a
violation. A resolved violation that reappears starts again at NEW with the
same deterministic id, so previously persisted history can be reattached.
"""

from __future__ import annotations

from enum import Enum


class EnumViolationState(str, Enum):
    """State of a tracked violation."""

    NEW = "new"
    ESCALATED = "escalated"
    SUPPRESSED = "suppressed"
    RESOLVED = "resolved"
    IGNORED = "ignored"

    @property
    def is_terminal(self) -> bool:
        return self in _TERMINAL_STATES

    @property
    def is_active(self) -> bool:
        """Whether a violation in this state is part of the surfaced set."""
        return self in (EnumViolationState.NEW, EnumViolationState.ESCALATED)

    def can_transition_to(self, target: EnumViolationState) -> bool:
        """Check if a transition to ``target`` is valid.

        Terminal states may only restart at NEW (the deviation reappeared or
        the suppressing variant was withdrawn).

        Example:
            >>> EnumViolationState.NEW.can_transition_to(EnumViolationState.ESCALATED)
            True
            >>> EnumViolationState.RESOLVED.can_transition_to(EnumViolationState.ESCALATED)
            False
        """
        return target in _VALID_TRANSITIONS[self]


_TERMINAL_STATES: frozenset[EnumViolationState] = frozenset(
    {
        EnumViolationState.SUPPRESSED,
        EnumViolationState.RESOLVED,
        EnumViolationState.IGNORED,
    }
)

_VALID_TRANSITIONS: dict[EnumViolationState, frozenset[EnumViolationState]] = {
    EnumViolationState.NEW: frozenset(
        {
            EnumViolationState.NEW,
            EnumViolationState.ESCALATED,
            EnumViolationState.SUPPRESSED,
            EnumViolationState.RESOLVED,
            EnumViolationState.IGNORED,
        }
    ),
    EnumViolationState.ESCALATED: frozenset(
        {
            EnumViolationState.ESCALATED,
            EnumViolationState.SUPPRESSED,
            EnumViolationState.RESOLVED,
            EnumViolationState.IGNORED,
        }
    ),
    EnumViolationState.SUPPRESSED: frozenset(
        {EnumViolationState.SUPPRESSED, EnumViolationState.NEW}
    ),
    EnumViolationState.RESOLVED: frozenset(
        {EnumViolationState.RESOLVED, EnumViolationState.NEW}
    ),
    EnumViolationState.IGNORED: frozenset(
        {EnumViolationState.IGNORED, EnumViolationState.NEW}
    ),
}


__all__ = ["EnumViolationState"]
