# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Exceptions for rule evaluation."""

from __future__ import annotations

from omnidrift.exceptions import OmniDriftError
from omnidrift.models import ModelRuleEvaluationError, ModelRuleEvaluationSummary


class RuleEvaluationAbortedError(OmniDriftError):
    """Raised when a non-recoverable evaluation error aborts a pass.

    Attributes:
        errors: Every evaluation error recorded before the abort, the fatal
            one last.
        summary: Counts collected up to the abort.
    """

    def __init__(
        self,
        errors: list[ModelRuleEvaluationError],
        summary: ModelRuleEvaluationSummary,
    ) -> None:
        self.errors = errors
        self.summary = summary
        fatal = errors[-1].message if errors else "unknown error"
        super().__init__(f"Rule evaluation aborted: {fatal}")


__all__ = ["RuleEvaluationAbortedError"]
