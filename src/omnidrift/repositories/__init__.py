# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Repository adapters implementing the persistence protocols."""

from omnidrift.repositories.adapter_in_memory import (
    InMemoryPatternRepository,
    InMemoryVariantRepository,
    InMemoryViolationRepository,
)
from omnidrift.repositories.adapter_json_variant_store import (
    INDEX_FILE_NAME,
    JsonFileVariantRepository,
)

__all__ = [
    "INDEX_FILE_NAME",
    "InMemoryPatternRepository",
    "InMemoryVariantRepository",
    "InMemoryViolationRepository",
    "JsonFileVariantRepository",
]
