# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Shared test fakes and builders for omnidrift tests.

Modules:
    fakes: Fake detectors, an in-memory file reader, model builders and a
        deterministic clock.
"""

from tests.fixtures.fakes import (
    InMemoryFileReader,
    MarkerDetector,
    NonRecoverableDetectorError,
    RaisingDetector,
    TickingClock,
    error_handling_style_observations,
    make_candidate,
    make_identity,
    make_observation,
    make_raw_violation,
    make_violation,
)

__all__ = [
    "InMemoryFileReader",
    "MarkerDetector",
    "NonRecoverableDetectorError",
    "RaisingDetector",
    "TickingClock",
    "error_handling_style_observations",
    "make_candidate",
    "make_identity",
    "make_observation",
    "make_raw_violation",
    "make_violation",
]
