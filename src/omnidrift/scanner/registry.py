# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Immutable detector registry.

The registry is built once and passed into the scanner. It holds factories
rather than instances so that every worker owns its own detector set and no
detector state is shared across workers.

Usage:
    registry = DetectorRegistry.from_factories(
        {"errors/try-catch-style": TryCatchDetector}
    )
    scanner = ScannerService(registry, worker_count=4)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field

from omnidrift.exceptions import ConfigurationError
from omnidrift.protocols import ProtocolDetector

logger = logging.getLogger(__name__)

DetectorFactory = Callable[[], ProtocolDetector]


@dataclass(frozen=True)
class DetectorRegistration:
    """A detector id bound to the factory that builds it."""

    detector_id: str
    factory: DetectorFactory


@dataclass(frozen=True)
class DetectorRegistry:
    """Ordered, immutable set of detector registrations.

    Attributes:
        registrations: Registrations sorted by detector id.
    """

    registrations: tuple[DetectorRegistration, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        ids = [r.detector_id for r in self.registrations]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ConfigurationError(f"Duplicate detector ids: {duplicates}")
        if any(not i for i in ids):
            raise ConfigurationError("Detector ids must be non-empty")
        object.__setattr__(
            self,
            "registrations",
            tuple(sorted(self.registrations, key=lambda r: r.detector_id)),
        )

    @classmethod
    def from_factories(cls, factories: Mapping[str, DetectorFactory]) -> DetectorRegistry:
        return cls(
            tuple(
                DetectorRegistration(detector_id=detector_id, factory=factory)
                for detector_id, factory in factories.items()
            )
        )

    @classmethod
    def from_detectors(cls, detectors: Iterable[ProtocolDetector]) -> DetectorRegistry:
        """Register ready-made instances, shared by every worker.

        Only use this for detectors that are stateless across files.
        """
        return cls(
            tuple(
                DetectorRegistration(
                    detector_id=detector.detector_id,
                    factory=lambda detector=detector: detector,
                )
                for detector in detectors
            )
        )

    def register(self, detector_id: str, factory: DetectorFactory) -> DetectorRegistry:
        """Return a new registry with one more registration."""
        return DetectorRegistry(
            (*self.registrations, DetectorRegistration(detector_id, factory))
        )

    @property
    def detector_ids(self) -> list[str]:
        return [r.detector_id for r in self.registrations]

    def __len__(self) -> int:
        return len(self.registrations)

    def __contains__(self, detector_id: object) -> bool:
        return detector_id in self.detector_ids

    def instantiate(self) -> list[tuple[str, ProtocolDetector]]:
        """Build a fresh detector set, in detector id order.

        Raises:
            ConfigurationError: If a factory fails or returns an object that
                does not satisfy ``ProtocolDetector``.
        """
        detectors: list[tuple[str, ProtocolDetector]] = []
        for registration in self.registrations:
            try:
                detector = registration.factory()
            except Exception as e:
                raise ConfigurationError(
                    f"Failed to build detector {registration.detector_id}: {e}"
                ) from e
            if not isinstance(detector, ProtocolDetector):
                raise ConfigurationError(
                    f"Factory for {registration.detector_id} returned "
                    f"{type(detector).__name__}, which is not a detector"
                )
            if detector.detector_id != registration.detector_id:
                logger.warning(
                    "Detector registered as %s reports id %s",
                    registration.detector_id,
                    detector.detector_id,
                )
            detectors.append((registration.detector_id, detector))
        return detectors


__all__ = ["DetectorFactory", "DetectorRegistration", "DetectorRegistry"]
