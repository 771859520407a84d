# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""AI capability availability protocol.

The engine only asks whether an explanation or fix capability is registered
for a category. It never calls the capability itself.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from omnidrift.enums import EnumDetectorCategory


@runtime_checkable
class ProtocolAiCapabilities(Protocol):
    """Which AI collaborators are registered, per category."""

    def can_explain(self, category: EnumDetectorCategory) -> bool:
        ...

    def can_fix(self, category: EnumDetectorCategory) -> bool:
        ...


__all__ = ["ProtocolAiCapabilities"]
