# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""JSON-file variant repository.

Layout under the configured directory::

    index.json              {"version", "last_updated", "variants": [...]}
    backups/index-<ts>.json copy of the previous index, written before overwrite

Blocking file I/O runs in a worker thread via ``asyncio.to_thread``. Writes go
to a temporary file that is then renamed over ``index.json``.
"""

from __future__ import annotations

import asyncio
import json
import logging
import shutil
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Final

from pydantic import ValidationError

from omnidrift.constants import VARIANT_INDEX_VERSION
from omnidrift.exceptions import ConfigurationError
from omnidrift.models import ModelVariant
from omnidrift.utils import utc_now

logger = logging.getLogger(__name__)

INDEX_FILE_NAME: Final[str] = "index.json"
BACKUP_DIR_NAME: Final[str] = "backups"
DEFAULT_MAX_BACKUPS: Final[int] = 5
"""Oldest backups beyond this count are removed after each save."""


class JsonFileVariantRepository:
    """Persist approved variants as a JSON index file.

    Args:
        directory: Directory holding ``index.json`` (created on first save).
        max_backups: Number of backups kept.
        clock: Timestamp source for ``last_updated`` and backup names.
    """

    def __init__(
        self,
        directory: str | Path,
        max_backups: int = DEFAULT_MAX_BACKUPS,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._directory = Path(directory)
        self._max_backups = max_backups
        self._clock = clock

    @property
    def index_path(self) -> Path:
        return self._directory / INDEX_FILE_NAME

    @property
    def backup_dir(self) -> Path:
        return self._directory / BACKUP_DIR_NAME

    async def load_all(self) -> list[ModelVariant]:
        return await asyncio.to_thread(self._load_sync)

    async def save_all(self, variants: list[ModelVariant]) -> None:
        await asyncio.to_thread(self._save_sync, list(variants))

    def _load_sync(self) -> list[ModelVariant]:
        if not self.index_path.exists():
            return []
        try:
            with self.index_path.open(encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Malformed variant index {self.index_path}: {e}") from e
        if not isinstance(data, dict) or not isinstance(data.get("variants"), list):
            raise ConfigurationError(
                f"Variant index {self.index_path} must contain a 'variants' list"
            )
        if data.get("version") != VARIANT_INDEX_VERSION:
            logger.warning(
                "Variant index version %s differs from %s",
                data.get("version"),
                VARIANT_INDEX_VERSION,
            )
        try:
            return [ModelVariant.model_validate(item) for item in data["variants"]]
        except ValidationError as e:
            raise ConfigurationError(f"Invalid variant in {self.index_path}") from e

    def _save_sync(self, variants: list[ModelVariant]) -> None:
        self._directory.mkdir(parents=True, exist_ok=True)
        now = self._clock()
        if self.index_path.exists():
            self._write_backup(now)
        payload = {
            "version": VARIANT_INDEX_VERSION,
            "last_updated": now.isoformat(),
            "variants": [variant.model_dump(mode="json") for variant in variants],
        }
        tmp_path = self.index_path.with_suffix(".json.tmp")
        with tmp_path.open("w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, sort_keys=True)
            f.write("\n")
        tmp_path.replace(self.index_path)
        logger.debug("Wrote %d variants to %s", len(variants), self.index_path)

    def _write_backup(self, now: datetime) -> None:
        self.backup_dir.mkdir(parents=True, exist_ok=True)
        stamp = now.strftime("%Y%m%dT%H%M%S%fZ")
        shutil.copy2(self.index_path, self.backup_dir / f"index-{stamp}.json")
        backups = sorted(self.backup_dir.glob("index-*.json"))
        for stale in backups[: max(0, len(backups) - self._max_backups)]:
            stale.unlink()

    def list_backups(self) -> list[Path]:
        if not self.backup_dir.exists():
            return []
        return sorted(self.backup_dir.glob("index-*.json"))


__all__ = ["INDEX_FILE_NAME", "JsonFileVariantRepository"]
