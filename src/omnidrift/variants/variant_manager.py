# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Variant manager: CRUD, queries and suppression checks for approved variants.

Variants are created and removed only by explicit approver action. The
manager keeps them in memory; ``load`` and ``save`` go through an injected
``ProtocolVariantRepository`` so the backing store is swappable.

Usage:
    manager = VariantManager(repository=JsonFileVariantRepository(".drift/variants"))
    await manager.load()
    manager.create(
        pattern_id="error-handling-style",
        name="legacy client",
        reason="Generated code, regenerated on every release",
        scope=EnumVariantScope.DIRECTORY,
        scope_value="src/generated",
    )
    await manager.save()
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Callable, Iterable
from datetime import datetime
from typing import Any, Final
from uuid import uuid4

from pydantic import ValidationError

from omnidrift.enums import EnumVariantScope
from omnidrift.models import (
    ModelVariant,
    ModelVariantLocation,
    ModelVariantQuery,
    ModelVariantStats,
    ModelViolationCandidate,
)
from omnidrift.protocols import ProtocolVariantRepository
from omnidrift.utils import normalize_path, utc_now
from omnidrift.variants.exceptions import (
    InvalidVariantInputError,
    VariantNotFoundError,
)
from omnidrift.variants.handler_variant_coverage import (
    covers_location,
    scope_matches_file,
)

logger = logging.getLogger(__name__)

VARIANT_ID_PREFIX: Final[str] = "var"

_IMMUTABLE_FIELDS: Final[frozenset[str]] = frozenset({"id", "pattern_id", "created_at"})


def _generate_variant_id() -> str:
    return f"{VARIANT_ID_PREFIX}_{uuid4().hex[:16]}"


def _require_text(field: str, value: str | None) -> str:
    if value is None or not value.strip():
        raise InvalidVariantInputError(f"Variant {field} is required")
    return value.strip()


class VariantManager:
    """In-memory registry of approved variants.

    Args:
        repository: Optional persistence collaborator.
        clock: Returns the current time; injectable for tests.
        id_factory: Returns a new variant id.
    """

    def __init__(
        self,
        repository: ProtocolVariantRepository | None = None,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = _generate_variant_id,
    ) -> None:
        self._repository = repository
        self._clock = clock
        self._id_factory = id_factory
        self._variants: dict[str, ModelVariant] = {}

    # =========================================================================
    # Persistence
    # =========================================================================

    async def load(self) -> int:
        """Replace in-memory variants with the repository's; returns the count."""
        if self._repository is None:
            return len(self._variants)
        variants = await self._repository.load_all()
        self._variants = {variant.id: variant for variant in variants}
        logger.debug("Loaded %d variants", len(self._variants))
        return len(self._variants)

    async def save(self) -> None:
        if self._repository is None:
            return
        await self._repository.save_all(self.get_all())
        logger.debug("Saved %d variants", len(self._variants))

    # =========================================================================
    # CRUD
    # =========================================================================

    def create(
        self,
        *,
        pattern_id: str,
        name: str,
        reason: str,
        scope: EnumVariantScope = EnumVariantScope.GLOBAL,
        scope_value: str | None = None,
        locations: Iterable[ModelVariantLocation] = (),
        approver: str = "unknown",
    ) -> ModelVariant:
        """Approve a deviation.

        Raises:
            InvalidVariantInputError: If name, reason or pattern id is blank,
                or a non-global scope has no ``scope_value``.
        """
        pattern_id = _require_text("pattern id", pattern_id)
        name = _require_text("name", name)
        reason = _require_text("reason", reason)
        if scope != EnumVariantScope.GLOBAL:
            scope_value = normalize_path(_require_text("scope value", scope_value))
        now = self._clock()
        try:
            variant = ModelVariant(
                id=self._id_factory(),
                pattern_id=pattern_id,
                name=name,
                reason=reason,
                approver=approver or "unknown",
                created_at=now,
                updated_at=now,
                scope=scope,
                scope_value=scope_value,
                locations=list(locations),
            )
        except ValidationError as e:
            raise InvalidVariantInputError(str(e)) from e
        self._variants[variant.id] = variant
        logger.info(
            "Approved variant %s for pattern %s (%s)",
            variant.id,
            pattern_id,
            scope.value,
            extra={"pattern_id": pattern_id},
        )
        return variant

    def get(self, variant_id: str) -> ModelVariant | None:
        return self._variants.get(variant_id)

    def get_or_raise(self, variant_id: str) -> ModelVariant:
        variant = self._variants.get(variant_id)
        if variant is None:
            raise VariantNotFoundError(variant_id)
        return variant

    def has(self, variant_id: str) -> bool:
        return variant_id in self._variants

    def update(self, variant_id: str, **changes: Any) -> ModelVariant:
        """Update mutable fields of a variant.

        Raises:
            VariantNotFoundError: If the variant does not exist.
            InvalidVariantInputError: If an immutable field is changed or the
                result is invalid.
        """
        current = self.get_or_raise(variant_id)
        forbidden = _IMMUTABLE_FIELDS & {
            key for key, value in changes.items() if getattr(current, key, None) != value
        }
        if forbidden:
            raise InvalidVariantInputError(
                f"Cannot change immutable variant fields: {sorted(forbidden)}"
            )
        for field in ("name", "reason"):
            if field in changes:
                changes[field] = _require_text(field, changes[field])
        data = {**current.model_dump(), **changes, "updated_at": self._clock()}
        try:
            updated = ModelVariant.model_validate(data)
        except ValidationError as e:
            raise InvalidVariantInputError(str(e)) from e
        self._variants[variant_id] = updated
        return updated

    def delete(self, variant_id: str) -> bool:
        removed = self._variants.pop(variant_id, None)
        if removed is not None:
            logger.info("Deleted variant %s", variant_id)
        return removed is not None

    def activate(self, variant_id: str) -> ModelVariant:
        return self.update(variant_id, active=True)

    def deactivate(self, variant_id: str) -> ModelVariant:
        return self.update(variant_id, active=False)

    # =========================================================================
    # Queries
    # =========================================================================

    def get_all(self) -> list[ModelVariant]:
        """All variants ordered by creation time, then id."""
        return sorted(self._variants.values(), key=lambda v: (v.created_at, v.id))

    def get_active(self) -> list[ModelVariant]:
        return [v for v in self.get_all() if v.active]

    def get_by_pattern(self, pattern_id: str) -> list[ModelVariant]:
        return [v for v in self.get_all() if v.pattern_id == pattern_id]

    def get_by_file(self, file: str) -> list[ModelVariant]:
        return [v for v in self.get_all() if scope_matches_file(v, file)]

    def query(self, query: ModelVariantQuery | None = None) -> list[ModelVariant]:
        """Variants matching every set field of ``query``."""
        if query is None:
            return self.get_all()
        results = self.get_all()
        if query.pattern_ids is not None:
            wanted = set(query.pattern_ids)
            results = [v for v in results if v.pattern_id in wanted]
        if query.scopes is not None:
            scopes = set(query.scopes)
            results = [v for v in results if v.scope in scopes]
        if query.active is not None:
            results = [v for v in results if v.active == query.active]
        if query.file is not None:
            results = [v for v in results if scope_matches_file(v, query.file)]
        if query.directory is not None:
            results = [v for v in results if _matches_directory(v, query.directory)]
        if query.search:
            needle = query.search.lower()
            results = [
                v for v in results if needle in v.name.lower() or needle in v.reason.lower()
            ]
        return results

    # =========================================================================
    # Coverage
    # =========================================================================

    def is_location_covered(
        self, pattern_id: str, file: str, line: int, character: int | None = None
    ) -> bool:
        return self.get_covering_variant(pattern_id, file, line, character) is not None

    def get_covering_variant(
        self, pattern_id: str, file: str, line: int, character: int | None = None
    ) -> ModelVariant | None:
        """First active variant (by creation order) covering the location."""
        for variant in self.get_all():
            if covers_location(variant, pattern_id, file, line, character):
                return variant
        return None

    def is_suppressed(self, candidate: ModelViolationCandidate) -> bool:
        """Whether an approved variant suppresses a violation candidate."""
        return self.is_location_covered(
            candidate.pattern_id,
            candidate.file,
            candidate.range.start.line,
            candidate.range.start.character,
        )

    # =========================================================================
    # Statistics
    # =========================================================================

    def stats(self) -> ModelVariantStats:
        variants = self.get_all()
        active = sum(1 for v in variants if v.active)
        by_pattern = Counter(v.pattern_id for v in variants)
        return ModelVariantStats(
            total=len(variants),
            active=active,
            inactive=len(variants) - active,
            by_scope=dict(Counter(v.scope for v in variants)),
            by_pattern=dict(sorted(by_pattern.items())),
            patterns_with_variants=len(by_pattern),
        )


def _matches_directory(variant: ModelVariant, directory: str) -> bool:
    if variant.scope == EnumVariantScope.GLOBAL:
        return True
    if variant.scope != EnumVariantScope.DIRECTORY:
        return False
    target = normalize_path(directory).rstrip("/")
    scope_value = normalize_path(variant.scope_value or "").rstrip("/")
    return target == scope_value or target.startswith(f"{scope_value}/")


__all__ = ["VARIANT_ID_PREFIX", "VariantManager"]
