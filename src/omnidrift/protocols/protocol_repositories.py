# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Repository protocols for the persistence collaborator.

The engine never issues storage-specific queries. It works with plain models
through these narrow interfaces, so the backing store is swappable. In-memory
adapters live in ``omnidrift.repositories``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from omnidrift.enums import EnumDetectorCategory
    from omnidrift.models import (
        ModelAggregatedPattern,
        ModelVariant,
        ModelViolationRecord,
    )


@runtime_checkable
class ProtocolPatternRepository(Protocol):
    """Storage for aggregated patterns, keyed by pattern id."""

    async def create(self, pattern: ModelAggregatedPattern) -> None:
        """Store a new pattern; raises ``KeyError`` if the id exists."""
        ...

    async def get(self, pattern_id: str) -> ModelAggregatedPattern | None:
        ...

    async def update(self, pattern: ModelAggregatedPattern) -> None:
        """Replace an existing pattern; raises ``KeyError`` if missing."""
        ...

    async def delete(self, pattern_id: str) -> bool:
        ...

    async def list_by_category(
        self, category: EnumDetectorCategory
    ) -> list[ModelAggregatedPattern]:
        ...

    async def replace_all(self, patterns: list[ModelAggregatedPattern]) -> None:
        """Atomically replace the stored set with the result of a full pass."""
        ...


@runtime_checkable
class ProtocolViolationRepository(Protocol):
    """Storage for violation history records."""

    async def upsert(self, record: ModelViolationRecord) -> None:
        ...

    async def get(self, violation_id: str) -> ModelViolationRecord | None:
        ...

    async def delete(self, violation_id: str) -> bool:
        ...

    async def list_active(self) -> list[ModelViolationRecord]:
        """Records whose state is still surfaced (new or escalated)."""
        ...

    async def list_by_file(self, file: str) -> list[ModelViolationRecord]:
        ...

    async def list_all(self) -> list[ModelViolationRecord]:
        ...


@runtime_checkable
class ProtocolVariantRepository(Protocol):
    """Storage for approved variants; loaded and saved as a whole."""

    async def load_all(self) -> list[ModelVariant]:
        ...

    async def save_all(self, variants: list[ModelVariant]) -> None:
        ...


__all__ = [
    "ProtocolPatternRepository",
    "ProtocolVariantRepository",
    "ProtocolViolationRepository",
]
