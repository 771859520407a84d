# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Pattern aggregator and confidence engine."""

from omnidrift.aggregation.exceptions import AggregationValidationError
from omnidrift.aggregation.handler_aggregation import (
    aggregate_pattern,
    aggregate_patterns,
)
from omnidrift.aggregation.handler_confidence_scoring import (
    compute_confidence,
    compute_sample_factor,
)
from omnidrift.aggregation.presets import (
    DEFAULT_AUTO_APPROVE_THRESHOLD,
    DEFAULT_MIN_OCCURRENCES,
    SAMPLE_SIZE_PRIOR,
    SMALL_SAMPLE_CONFIDENCE_CAP,
)

__all__ = [
    "DEFAULT_AUTO_APPROVE_THRESHOLD",
    "DEFAULT_MIN_OCCURRENCES",
    "SAMPLE_SIZE_PRIOR",
    "SMALL_SAMPLE_CONFIDENCE_CAP",
    "AggregationValidationError",
    "aggregate_pattern",
    "aggregate_patterns",
    "compute_confidence",
    "compute_sample_factor",
]
