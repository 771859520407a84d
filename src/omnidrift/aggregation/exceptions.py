# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Exceptions for pattern aggregation."""

from __future__ import annotations

from omnidrift.exceptions import OmniDriftError


class AggregationValidationError(OmniDriftError):
    """Raised when malformed observation data reaches the aggregator.

    This indicates a bug in a detector or in result merging (for example the
    same pattern id reported under two categories) and is non-recoverable:
    retrying with the same observations fails the same way.

    Example:
        >>> raise AggregationValidationError("total must be positive, got 0")
        AggregationValidationError: total must be positive, got 0
    """


__all__ = ["AggregationValidationError"]
