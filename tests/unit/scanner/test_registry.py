# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Unit tests for DetectorRegistry."""

from __future__ import annotations

import pytest

from omnidrift.exceptions import ConfigurationError
from omnidrift.protocols import ProtocolDetector
from omnidrift.scanner import DetectorRegistration, DetectorRegistry
from tests.fixtures import MarkerDetector


@pytest.mark.unit
class TestDetectorRegistry:
    """Tests for registry construction and instantiation."""

    def test_sorted_by_id(self) -> None:
        """Registrations are kept in detector id order."""
        registry = DetectorRegistry.from_factories(
            {
                "styling/b": lambda: MarkerDetector("styling/b"),
                "errors/a": lambda: MarkerDetector("errors/a"),
            }
        )

        assert registry.detector_ids == ["errors/a", "styling/b"]
        assert len(registry) == 2
        assert "errors/a" in registry
        assert "missing" not in registry

    def test_duplicate_ids_rejected(self) -> None:
        """The same id cannot be registered twice."""
        with pytest.raises(ConfigurationError, match="Duplicate"):
            DetectorRegistry(
                (
                    DetectorRegistration("x", MarkerDetector),
                    DetectorRegistration("x", MarkerDetector),
                )
            )

    def test_empty_id_rejected(self) -> None:
        """Detector ids must be non-empty."""
        with pytest.raises(ConfigurationError):
            DetectorRegistry((DetectorRegistration("", MarkerDetector),))

    def test_register_returns_new_registry(self) -> None:
        """register leaves the original registry untouched."""
        registry = DetectorRegistry()

        extended = registry.register("test/markers", MarkerDetector)

        assert len(registry) == 0
        assert extended.detector_ids == ["test/markers"]

    def test_instantiate_builds_fresh_instances(self) -> None:
        """Each call to instantiate runs the factories again."""
        registry = DetectorRegistry.from_factories({"test/markers": MarkerDetector})

        ((_, first),) = registry.instantiate()
        ((_, second),) = registry.instantiate()

        assert isinstance(first, ProtocolDetector)
        assert first is not second

    def test_from_detectors_shares_instance(self) -> None:
        """Ready-made detectors are returned as-is."""
        detector = MarkerDetector()
        registry = DetectorRegistry.from_detectors([detector])

        ((detector_id, built),) = registry.instantiate()

        assert detector_id == "test/markers"
        assert built is detector

    def test_failing_factory(self) -> None:
        """A factory that raises becomes a ConfigurationError."""

        def broken() -> MarkerDetector:
            raise ValueError("no grammar")

        registry = DetectorRegistry.from_factories({"broken": broken})

        with pytest.raises(ConfigurationError, match="no grammar") as exc_info:
            registry.instantiate()
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_non_detector_rejected(self) -> None:
        """A factory must return something satisfying ProtocolDetector."""
        registry = DetectorRegistry.from_factories({"odd": object})  # type: ignore[dict-item]

        with pytest.raises(ConfigurationError, match="not a detector"):
            registry.instantiate()
