# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Severity configuration: defaults, overrides and escalation rules.

Resolution order (highest precedence first):
    1. Per-pattern override (``overrides``)
    2. Per-category override (``category_overrides``)
    3. Global default (``default``, ``warning`` unless configured)

Escalation rules are applied afterwards in ascending ``after_count`` order.

Invariants (enforced at validation time):
    - ``from_severity != to_severity`` for every rule
    - every rule raises severity (escalation never auto-downgrades)
    - rules are stored sorted by ``after_count`` ascending
"""

from __future__ import annotations

from typing import Final

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)

from omnidrift.enums import EnumSeverity

DEFAULT_ESCALATION_THRESHOLD: Final[int] = 10
"""Occurrence count used by rules that do not set ``after_count``."""


class ModelEscalationRule(BaseModel):
    """Raise ``from_severity`` to ``to_severity`` once enough occurrences accrue.

    ``after_count`` is compared against the number of *prior* recorded
    occurrences of the violation; ``None`` means "use the escalation
    threshold".
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    from_severity: EnumSeverity = Field(..., alias="from")
    to_severity: EnumSeverity = Field(..., alias="to")
    after_count: int | None = Field(default=None, ge=1, alias="afterCount")

    @model_validator(mode="after")
    def _validate_direction(self) -> ModelEscalationRule:
        if self.from_severity == self.to_severity:
            raise ValueError(
                f"Escalation rule must change severity, got {self.from_severity.value} -> "
                f"{self.to_severity.value}"
            )
        if not self.to_severity.is_more_severe_than(self.from_severity):
            raise ValueError(
                f"Escalation rule must raise severity, got {self.from_severity.value} -> "
                f"{self.to_severity.value}"
            )
        return self


class ModelEscalationConfig(BaseModel):
    """Occurrence-based escalation settings."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    enabled: bool = True
    threshold: int = Field(default=DEFAULT_ESCALATION_THRESHOLD, ge=1)
    rules: list[ModelEscalationRule] = Field(default_factory=list)

    @field_validator("rules")
    @classmethod
    def _sort_rules(
        cls, rules: list[ModelEscalationRule], info: ValidationInfo
    ) -> list[ModelEscalationRule]:
        threshold = info.data.get("threshold", DEFAULT_ESCALATION_THRESHOLD)
        return sorted(
            rules,
            key=lambda rule: rule.after_count if rule.after_count is not None else threshold,
        )

    def effective_after_count(self, rule: ModelEscalationRule) -> int:
        return rule.after_count if rule.after_count is not None else self.threshold


DEFAULT_ESCALATION_RULES: Final[tuple[ModelEscalationRule, ...]] = (
    ModelEscalationRule(
        from_severity=EnumSeverity.HINT,
        to_severity=EnumSeverity.INFO,
        after_count=DEFAULT_ESCALATION_THRESHOLD,
    ),
    ModelEscalationRule(
        from_severity=EnumSeverity.INFO,
        to_severity=EnumSeverity.WARNING,
        after_count=DEFAULT_ESCALATION_THRESHOLD,
    ),
    ModelEscalationRule(
        from_severity=EnumSeverity.WARNING,
        to_severity=EnumSeverity.ERROR,
        after_count=DEFAULT_ESCALATION_THRESHOLD,
    ),
)
"""Default escalation chain, inactive unless escalation is enabled."""


class ModelSeverityConfig(BaseModel):
    """Severity resolution configuration.

    Attributes:
        default: Global default severity.
        overrides: Severity per pattern id.
        category_overrides: Severity per category value (e.g. ``"security"``).
        escalation: Escalation settings; disabled by default.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    default: EnumSeverity = EnumSeverity.WARNING
    overrides: dict[str, EnumSeverity] = Field(default_factory=dict)
    category_overrides: dict[str, EnumSeverity] = Field(
        default_factory=dict, alias="categoryOverrides"
    )
    escalation: ModelEscalationConfig = Field(
        default_factory=lambda: ModelEscalationConfig(
            enabled=False, rules=list(DEFAULT_ESCALATION_RULES)
        )
    )


DEFAULT_SEVERITY_CONFIG: Final[ModelSeverityConfig] = ModelSeverityConfig()


__all__ = [
    "DEFAULT_ESCALATION_RULES",
    "DEFAULT_ESCALATION_THRESHOLD",
    "DEFAULT_SEVERITY_CONFIG",
    "ModelEscalationConfig",
    "ModelEscalationRule",
    "ModelSeverityConfig",
]
