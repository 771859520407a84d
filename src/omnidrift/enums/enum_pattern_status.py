# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Status of an aggregated pattern within one scan pass."""

from __future__ import annotations

from enum import Enum


class EnumPatternStatus(str, Enum):
    """Pattern status.

    Attributes:
        DISCOVERED: Learned from the code, confidence below the auto-approval
            threshold.
        APPROVED: Confidence reached the configured auto-approval threshold.
    """

    DISCOVERED = "discovered"
    APPROVED = "approved"


__all__ = ["EnumPatternStatus"]
