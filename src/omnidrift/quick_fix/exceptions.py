# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Exceptions for quick-fix generation and application."""

from __future__ import annotations

from omnidrift.exceptions import OmniDriftError


class QuickFixError(OmniDriftError):
    """Raised when a fix strategy or edit application fails.

    The generator catches this (and any other strategy exception), logs it
    and leaves the violation without that fix. It never fails evaluation.
    """


class InvalidEditError(QuickFixError):
    """Raised when an edit cannot be applied to the given content."""


__all__ = ["InvalidEditError", "QuickFixError"]
