# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Root exceptions for OmniDrift.

Subsystem-specific exceptions live beside their handlers (for example
``omnidrift.rules.exceptions``) and all derive from ``OmniDriftError`` so that
callers can catch everything raised by the engine with one clause.

Error taxonomy:
    - Per-file scan errors are never raised; they are reported as ``ModelScanError``.
    - Rule evaluation errors are reported, and only non-recoverable ones raise
      ``RuleEvaluationAbortedError``.
    - Configuration errors raise ``ConfigurationError`` before any scan starts.
    - Quick-fix failures degrade to "no quick fix" and are only logged.
"""

from __future__ import annotations


class OmniDriftError(Exception):
    """Base class for every exception raised by OmniDrift."""


class ConfigurationError(OmniDriftError):
    """Raised when project, severity or escalation configuration is malformed.

    Configuration errors are fatal: they abort before scanning starts. When
    the error originates from Pydantic validation, the ``ValidationError`` is
    chained as ``__cause__``.
    """


__all__ = ["ConfigurationError", "OmniDriftError"]
