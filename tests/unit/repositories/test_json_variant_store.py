# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Unit tests for the JSON-file variant repository."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path

import pytest

from omnidrift.constants import VARIANT_INDEX_VERSION
from omnidrift.enums import EnumVariantScope
from omnidrift.exceptions import ConfigurationError
from omnidrift.models import ModelVariant, ModelVariantLocation
from omnidrift.repositories import JsonFileVariantRepository
from tests.fixtures import TickingClock


def _variant(variant_id: str = "var_001") -> ModelVariant:
    created = datetime(2025, 1, 1, tzinfo=UTC)
    return ModelVariant(
        id=variant_id,
        pattern_id="error-handling-style",
        name="legacy",
        reason="Generated code",
        approver="alice",
        created_at=created,
        updated_at=created,
        scope=EnumVariantScope.FILE,
        scope_value="src/a.ts",
        locations=[ModelVariantLocation(file="src/a.ts", line=3)],
    )


@pytest.mark.unit
class TestJsonFileVariantRepository:
    """Tests for JsonFileVariantRepository."""

    @pytest.mark.asyncio
    async def test_missing_index_loads_empty(self, tmp_path: Path) -> None:
        """No index file means no variants."""
        repository = JsonFileVariantRepository(tmp_path / "variants")

        assert await repository.load_all() == []

    @pytest.mark.asyncio
    async def test_roundtrip(self, tmp_path: Path, clock: TickingClock) -> None:
        """Saved variants load back unchanged."""
        repository = JsonFileVariantRepository(tmp_path / "variants", clock=clock)

        await repository.save_all([_variant()])

        assert await repository.load_all() == [_variant()]

    @pytest.mark.asyncio
    async def test_index_format(self, tmp_path: Path, clock: TickingClock) -> None:
        """The index carries version, last_updated and variants."""
        repository = JsonFileVariantRepository(tmp_path, clock=clock)

        await repository.save_all([_variant()])

        data = json.loads(repository.index_path.read_text(encoding="utf-8"))
        assert data["version"] == VARIANT_INDEX_VERSION
        assert data["last_updated"].startswith("2025-01-01T00:00:00")
        assert data["variants"][0]["id"] == "var_001"
        assert data["variants"][0]["scope"] == "file"

    @pytest.mark.asyncio
    async def test_backups_rotated(self, tmp_path: Path, clock: TickingClock) -> None:
        """Each overwrite backs up the previous index, keeping max_backups."""
        repository = JsonFileVariantRepository(tmp_path, max_backups=2, clock=clock)

        for index in range(5):
            await repository.save_all([_variant(f"var_{index:03d}")])

        backups = repository.list_backups()
        assert len(backups) == 2
        newest = json.loads(backups[-1].read_text(encoding="utf-8"))
        assert newest["variants"][0]["id"] == "var_003"

    @pytest.mark.asyncio
    async def test_malformed_json(self, tmp_path: Path) -> None:
        """Unparseable index files are configuration errors."""
        (tmp_path / "index.json").write_text("{not json", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="Malformed"):
            await JsonFileVariantRepository(tmp_path).load_all()

    @pytest.mark.asyncio
    async def test_missing_variants_list(self, tmp_path: Path) -> None:
        """An index without a variants list is rejected."""
        (tmp_path / "index.json").write_text('{"version": "1.0.0"}', encoding="utf-8")

        with pytest.raises(ConfigurationError, match="variants"):
            await JsonFileVariantRepository(tmp_path).load_all()

    @pytest.mark.asyncio
    async def test_invalid_variant(self, tmp_path: Path) -> None:
        """A variant missing required fields is rejected."""
        payload = {"version": VARIANT_INDEX_VERSION, "variants": [{"id": "var_1"}]}
        (tmp_path / "index.json").write_text(json.dumps(payload), encoding="utf-8")

        with pytest.raises(ConfigurationError, match="Invalid variant"):
            await JsonFileVariantRepository(tmp_path).load_all()
