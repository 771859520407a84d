# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Variant manager: approved deviations and violation suppression."""

from omnidrift.variants.exceptions import (
    InvalidVariantInputError,
    VariantNotFoundError,
)
from omnidrift.variants.handler_variant_coverage import (
    covers_location,
    scope_matches_file,
)
from omnidrift.variants.variant_manager import VARIANT_ID_PREFIX, VariantManager

__all__ = [
    "VARIANT_ID_PREFIX",
    "InvalidVariantInputError",
    "VariantManager",
    "VariantNotFoundError",
    "covers_location",
    "scope_matches_file",
]
