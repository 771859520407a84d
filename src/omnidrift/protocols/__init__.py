# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Protocols for the engine's external collaborators.

Detectors, file readers, repositories and AI capability registries are all
injected through these interfaces, so tests can pass simple fakes.
"""

from omnidrift.protocols.protocol_ai import ProtocolAiCapabilities
from omnidrift.protocols.protocol_detector import ProtocolDetector, ProtocolFileReader
from omnidrift.protocols.protocol_repositories import (
    ProtocolPatternRepository,
    ProtocolVariantRepository,
    ProtocolViolationRepository,
)

__all__ = [
    "ProtocolAiCapabilities",
    "ProtocolDetector",
    "ProtocolFileReader",
    "ProtocolPatternRepository",
    "ProtocolVariantRepository",
    "ProtocolViolationRepository",
]
