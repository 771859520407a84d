# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Severity manager: configuration holder around ``resolve_severity``.

The manager holds no occurrence counters. Callers (the rule engine, through
the violation tracker) pass the count in, which keeps resolution idempotent.
Override setters swap in a new immutable config.
"""

from __future__ import annotations

from collections.abc import Iterable

from omnidrift.enums import EnumDetectorCategory, EnumSeverity
from omnidrift.models import (
    DEFAULT_SEVERITY_CONFIG,
    ModelEscalationRule,
    ModelSeverityConfig,
    ModelViolation,
)
from omnidrift.severity.handler_severity import (
    is_blocking_severity,
    resolve_base_severity,
    resolve_severity,
)


class SeverityManager:
    """Resolve violation severities against a project's configuration.

    Example:
        >>> manager = SeverityManager()
        >>> manager.set_category_override(EnumDetectorCategory.SECURITY, EnumSeverity.ERROR)
        >>> manager.resolve("p", EnumDetectorCategory.SECURITY, 1)
        <EnumSeverity.ERROR: 'error'>
    """

    def __init__(self, config: ModelSeverityConfig | None = None) -> None:
        self._config = config or DEFAULT_SEVERITY_CONFIG

    @property
    def config(self) -> ModelSeverityConfig:
        return self._config

    def resolve(
        self,
        pattern_id: str,
        category: EnumDetectorCategory | str,
        occurrence_count: int,
        severity_hint: EnumSeverity | None = None,
    ) -> EnumSeverity:
        return resolve_severity(
            pattern_id, category, occurrence_count, self._config, severity_hint
        )

    def base_severity(
        self, pattern_id: str, category: EnumDetectorCategory | str
    ) -> EnumSeverity:
        """Severity ignoring escalation."""
        return resolve_base_severity(pattern_id, category, self._config)

    # =========================================================================
    # Configuration updates
    # =========================================================================

    def set_pattern_override(self, pattern_id: str, severity: EnumSeverity) -> None:
        self._config = self._config.model_copy(
            update={"overrides": {**self._config.overrides, pattern_id: severity}}
        )

    def remove_pattern_override(self, pattern_id: str) -> None:
        overrides = {k: v for k, v in self._config.overrides.items() if k != pattern_id}
        self._config = self._config.model_copy(update={"overrides": overrides})

    def set_category_override(
        self, category: EnumDetectorCategory, severity: EnumSeverity
    ) -> None:
        self._config = self._config.model_copy(
            update={
                "category_overrides": {
                    **self._config.category_overrides,
                    category.value: severity,
                }
            }
        )

    def remove_category_override(self, category: EnumDetectorCategory) -> None:
        overrides = {
            k: v for k, v in self._config.category_overrides.items() if k != category.value
        }
        self._config = self._config.model_copy(update={"category_overrides": overrides})

    def set_escalation_enabled(self, enabled: bool) -> None:
        escalation = self._config.escalation.model_copy(update={"enabled": enabled})
        self._config = self._config.model_copy(update={"escalation": escalation})

    def add_escalation_rule(self, rule: ModelEscalationRule) -> None:
        """Add a rule, keeping rules sorted by effective ``after_count``."""
        escalation = self._config.escalation
        rules = sorted(
            [*escalation.rules, rule],
            key=escalation.effective_after_count,
        )
        self._config = self._config.model_copy(
            update={"escalation": escalation.model_copy(update={"rules": rules})}
        )

    # =========================================================================
    # Blocking
    # =========================================================================

    @staticmethod
    def is_blocking(severity: EnumSeverity) -> bool:
        return is_blocking_severity(severity)

    @staticmethod
    def has_blocking_violations(violations: Iterable[ModelViolation]) -> bool:
        return any(is_blocking_severity(v.severity) for v in violations)

    @staticmethod
    def blocking_violation_count(violations: Iterable[ModelViolation]) -> int:
        return sum(1 for v in violations if is_blocking_severity(v.severity))


__all__ = ["SeverityManager"]
