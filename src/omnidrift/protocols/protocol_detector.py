# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Detector and file reader protocols.

Detectors are external collaborators. Each worker instantiates its own set
through the registry factories and calls them synchronously, one file at a
time, so implementations must not share mutable state across files.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from omnidrift.enums import EnumDetectorCategory
    from omnidrift.models import ModelDetectionContext, ModelDetectorResult


@runtime_checkable
class ProtocolDetector(Protocol):
    """A narrow extractor of pattern observations from one file.

    ``detect`` may return ``None``, an empty result, or raise; the worker
    tolerates all three. An exception carrying ``recoverable = False`` marks
    the whole file as failed.
    """

    @property
    def detector_id(self) -> str:
        """Unique detector id (e.g. ``"errors/try-catch-style"``)."""
        ...

    @property
    def category(self) -> EnumDetectorCategory:
        ...

    @property
    def languages(self) -> frozenset[str]:
        """Languages the detector applies to; empty means every language."""
        ...

    def warm_up(self) -> None:
        """Load or initialize anything the detector needs, once per worker."""
        ...

    def detect(self, context: ModelDetectionContext) -> ModelDetectorResult | None:
        ...


@runtime_checkable
class ProtocolFileReader(Protocol):
    """Reads file content for the scanner."""

    def read_text(self, path: str) -> str:
        """Return the decoded text of ``path``.

        Raises:
            OSError: On any I/O failure (including permission errors).
            UnicodeDecodeError: If the file is not valid text.
        """
        ...


__all__ = ["ProtocolDetector", "ProtocolFileReader"]
