# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Detector category enum.

Every pattern belongs to exactly one category, inherited from the detector
that observed it. Categories drive category-level severity overrides and the
availability of explanation/fix capabilities.
"""

from __future__ import annotations

from enum import Enum


class EnumDetectorCategory(str, Enum):
    """Category of a detector and of the patterns it observes."""

    ACCESSIBILITY = "accessibility"
    API = "api"
    AUTH = "auth"
    COMPONENTS = "components"
    CONFIG = "config"
    DATA_ACCESS = "data-access"
    DOCUMENTATION = "documentation"
    ERRORS = "errors"
    LOGGING = "logging"
    PERFORMANCE = "performance"
    SECURITY = "security"
    STRUCTURAL = "structural"
    STYLING = "styling"
    TESTING = "testing"
    TYPES = "types"


__all__ = ["EnumDetectorCategory"]
