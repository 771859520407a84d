# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Unit tests for SeverityManager."""

from __future__ import annotations

import pytest

from omnidrift.enums import EnumDetectorCategory, EnumSeverity
from omnidrift.models import ModelEscalationRule
from omnidrift.severity import SeverityManager
from tests.fixtures import make_violation


@pytest.mark.unit
class TestSeverityManager:
    """Tests for runtime configuration updates and blocking checks."""

    def test_pattern_override_roundtrip(self, severity_manager: SeverityManager) -> None:
        """Overrides can be set and removed."""
        severity_manager.set_pattern_override("p", EnumSeverity.ERROR)
        assert severity_manager.resolve("p", EnumDetectorCategory.ERRORS, 1) is (
            EnumSeverity.ERROR
        )

        severity_manager.remove_pattern_override("p")
        assert severity_manager.resolve("p", EnumDetectorCategory.ERRORS, 1) is (
            EnumSeverity.WARNING
        )

    def test_category_override(self, severity_manager: SeverityManager) -> None:
        """Category overrides apply to every pattern in the category."""
        severity_manager.set_category_override(EnumDetectorCategory.AUTH, EnumSeverity.ERROR)

        assert severity_manager.base_severity("any", EnumDetectorCategory.AUTH) is (
            EnumSeverity.ERROR
        )

        severity_manager.remove_category_override(EnumDetectorCategory.AUTH)
        assert severity_manager.config.category_overrides == {}

    def test_enable_escalation(self, severity_manager: SeverityManager) -> None:
        """Default rules take effect once escalation is enabled."""
        assert severity_manager.resolve("p", EnumDetectorCategory.ERRORS, 10) is (
            EnumSeverity.WARNING
        )

        severity_manager.set_escalation_enabled(True)

        assert severity_manager.resolve("p", EnumDetectorCategory.ERRORS, 10) is (
            EnumSeverity.ERROR
        )

    def test_add_rule_keeps_order(self, severity_manager: SeverityManager) -> None:
        """Added rules are merged into after_count order."""
        severity_manager.add_escalation_rule(
            ModelEscalationRule(
                from_severity=EnumSeverity.WARNING,
                to_severity=EnumSeverity.ERROR,
                after_count=2,
            )
        )

        counts = [
            severity_manager.config.escalation.effective_after_count(rule)
            for rule in severity_manager.config.escalation.rules
        ]
        assert counts == sorted(counts)
        assert counts[0] == 2

    def test_blocking(self) -> None:
        """Only errors block."""
        violations = [
            make_violation(severity=EnumSeverity.ERROR),
            make_violation(severity=EnumSeverity.WARNING, line=1),
        ]

        assert SeverityManager.is_blocking(EnumSeverity.ERROR) is True
        assert SeverityManager.is_blocking(EnumSeverity.WARNING) is False
        assert SeverityManager.has_blocking_violations(violations) is True
        assert SeverityManager.blocking_violation_count(violations) == 1
