# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""In-memory repository adapters.

These implement the repository protocols with plain dictionaries and are what
the pipeline uses when no durable store is injected. Stored models are
frozen, so returning them directly cannot corrupt repository state.

Usage:
    >>> from omnidrift.repositories import InMemoryPatternRepository
    >>> repo = InMemoryPatternRepository()
    >>> await repo.replace_all(results.patterns)
"""

from __future__ import annotations

from omnidrift.enums import EnumDetectorCategory
from omnidrift.models import ModelAggregatedPattern, ModelVariant, ModelViolationRecord


class InMemoryPatternRepository:
    """Pattern storage keyed by pattern id."""

    def __init__(self) -> None:
        self._patterns: dict[str, ModelAggregatedPattern] = {}

    async def create(self, pattern: ModelAggregatedPattern) -> None:
        if pattern.id in self._patterns:
            raise KeyError(f"Pattern already exists: {pattern.id}")
        self._patterns[pattern.id] = pattern

    async def get(self, pattern_id: str) -> ModelAggregatedPattern | None:
        return self._patterns.get(pattern_id)

    async def update(self, pattern: ModelAggregatedPattern) -> None:
        if pattern.id not in self._patterns:
            raise KeyError(f"Pattern not found: {pattern.id}")
        self._patterns[pattern.id] = pattern

    async def delete(self, pattern_id: str) -> bool:
        return self._patterns.pop(pattern_id, None) is not None

    async def list_by_category(
        self, category: EnumDetectorCategory
    ) -> list[ModelAggregatedPattern]:
        return [
            pattern
            for _, pattern in sorted(self._patterns.items())
            if pattern.category == category
        ]

    async def list_all(self) -> list[ModelAggregatedPattern]:
        return [pattern for _, pattern in sorted(self._patterns.items())]

    async def replace_all(self, patterns: list[ModelAggregatedPattern]) -> None:
        self._patterns = {pattern.id: pattern for pattern in patterns}


class InMemoryViolationRepository:
    """Violation history storage keyed by violation id."""

    def __init__(self) -> None:
        self._records: dict[str, ModelViolationRecord] = {}

    async def upsert(self, record: ModelViolationRecord) -> None:
        self._records[record.id] = record

    async def get(self, violation_id: str) -> ModelViolationRecord | None:
        return self._records.get(violation_id)

    async def delete(self, violation_id: str) -> bool:
        return self._records.pop(violation_id, None) is not None

    async def list_active(self) -> list[ModelViolationRecord]:
        return [r for r in await self.list_all() if r.state.is_active]

    async def list_by_file(self, file: str) -> list[ModelViolationRecord]:
        return [r for r in await self.list_all() if r.file == file]

    async def list_all(self) -> list[ModelViolationRecord]:
        return [record for _, record in sorted(self._records.items())]


class InMemoryVariantRepository:
    """Variant storage; ``save_all`` replaces the stored set."""

    def __init__(self, variants: list[ModelVariant] | None = None) -> None:
        self._variants: list[ModelVariant] = list(variants or [])
        self.save_count = 0

    async def load_all(self) -> list[ModelVariant]:
        return list(self._variants)

    async def save_all(self, variants: list[ModelVariant]) -> None:
        self._variants = list(variants)
        self.save_count += 1


__all__ = [
    "InMemoryPatternRepository",
    "InMemoryVariantRepository",
    "InMemoryViolationRepository",
]
