# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Quick-fix generator: ranked, previewable code transforms per violation."""

from omnidrift.quick_fix.exceptions import InvalidEditError, QuickFixError
from omnidrift.quick_fix.handler_text_edits import apply_text_edits, unified_diff
from omnidrift.quick_fix.quick_fix_generator import (
    DEFAULT_MAX_FIXES_PER_VIOLATION,
    DEFAULT_MIN_FIX_CONFIDENCE,
    QuickFixGenerator,
    rank_candidates,
    validate_edit,
)
from omnidrift.quick_fix.strategies import (
    DEFAULT_STRATEGIES,
    DeleteFixStrategy,
    ExtractFixStrategy,
    FixContext,
    FixStrategyBase,
    ImportFixStrategy,
    MoveFixStrategy,
    RenameFixStrategy,
    ReplaceFixStrategy,
    WrapFixStrategy,
    convert_case,
)

__all__ = [
    "DEFAULT_MAX_FIXES_PER_VIOLATION",
    "DEFAULT_MIN_FIX_CONFIDENCE",
    "DEFAULT_STRATEGIES",
    "DeleteFixStrategy",
    "ExtractFixStrategy",
    "FixContext",
    "FixStrategyBase",
    "ImportFixStrategy",
    "InvalidEditError",
    "MoveFixStrategy",
    "QuickFixError",
    "QuickFixGenerator",
    "RenameFixStrategy",
    "ReplaceFixStrategy",
    "WrapFixStrategy",
    "apply_text_edits",
    "convert_case",
    "rank_candidates",
    "unified_diff",
    "validate_edit",
]
