# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Exceptions for approved-variant management."""

from __future__ import annotations

from omnidrift.exceptions import OmniDriftError


class VariantNotFoundError(OmniDriftError, KeyError):
    """Raised when a variant id does not exist.

    Attributes:
        variant_id: The id that was looked up.
    """

    def __init__(self, variant_id: str) -> None:
        self.variant_id = variant_id
        super().__init__(f"Variant not found: {variant_id}")

    def __str__(self) -> str:
        return f"Variant not found: {self.variant_id}"


class InvalidVariantInputError(OmniDriftError, ValueError):
    """Raised when variant input is missing required fields or changes
    immutable ones (id, pattern id, creation time)."""


__all__ = ["InvalidVariantInputError", "VariantNotFoundError"]
