# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Shared pytest fixtures for omnidrift tests."""

from __future__ import annotations

import pytest

from omnidrift.models import ModelSeverityConfig
from omnidrift.severity import SeverityManager
from tests.fixtures import MarkerDetector, TickingClock


@pytest.fixture
def clock() -> TickingClock:
    """Clock that advances one second per call."""
    return TickingClock()


@pytest.fixture
def marker_detector() -> MarkerDetector:
    """Marker detector labelling the try/catch and .catch() error-handling variants."""
    return MarkerDetector(
        labels={"try-catch": "try/catch", "promise-catch": ".catch() chaining"}
    )


@pytest.fixture
def severity_manager() -> SeverityManager:
    """Severity manager with defaults (warning, escalation disabled)."""
    return SeverityManager(ModelSeverityConfig())
