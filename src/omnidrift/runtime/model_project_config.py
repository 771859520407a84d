# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Project configuration model.

Controls worker count, ignore rules, incremental analysis, the confidence
and significance thresholds, quick-fix limits, severity resolution, AI
availability flags and the log level.

Design Decisions:
    - Uses Pydantic for validation and serialization
    - Supports environment variable interpolation (e.g., ${DRIFT_WORKERS})
    - Supports loading from YAML files and from environment variables
    - Every validation failure surfaces as ``ConfigurationError`` so that a
      malformed configuration aborts before scanning starts

Example:
    # Load from YAML
    config = ModelProjectConfig.from_yaml(".drift/config.yaml")

    # Load from environment
    config = ModelProjectConfig.from_environment()
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from omnidrift.aggregation.presets import (
    DEFAULT_AUTO_APPROVE_THRESHOLD,
    DEFAULT_MIN_OCCURRENCES,
)
from omnidrift.constants import DEFAULT_IGNORE_PATTERNS
from omnidrift.enums import EnumDetectorCategory, EnumLogLevel
from omnidrift.exceptions import ConfigurationError
from omnidrift.models import ModelSeverityConfig
from omnidrift.quick_fix import (
    DEFAULT_MAX_FIXES_PER_VIOLATION,
    DEFAULT_MIN_FIX_CONFIDENCE,
)

_ENV_VAR_PATTERN = re.compile(r"\$\{([A-Z_][A-Z0-9_]*)\}")


class ModelProjectConfig(BaseModel):
    """Per-project engine configuration.

    Attributes:
        worker_count: Scanner pool size; ``None`` uses available parallelism.
        ignore_patterns: Globs of relative paths the scanner skips.
        incremental: Enables ``ScanPipeline.rescan_files``.
        min_occurrences: Significance floor for patterns.
        auto_approve_threshold: Confidence at which a pattern is approved.
        min_fix_confidence: Floor for quick-fix candidates.
        max_fixes_per_violation: Candidates kept per violation.
        severity: Severity resolution and escalation.
        ai_explain_categories: Categories with a registered explanation
            capability.
        ai_fix_categories: Categories with a registered fix capability.
        ignored_pattern_ids: Patterns excluded from surfacing.
        log_level: Level applied to the ``omnidrift`` logger.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    worker_count: int | None = Field(default=None, ge=1)
    ignore_patterns: list[str] = Field(default_factory=lambda: list(DEFAULT_IGNORE_PATTERNS))
    incremental: bool = False
    min_occurrences: int = Field(default=DEFAULT_MIN_OCCURRENCES, ge=1)
    auto_approve_threshold: float = Field(
        default=DEFAULT_AUTO_APPROVE_THRESHOLD, ge=0.0, le=1.0
    )
    min_fix_confidence: float = Field(default=DEFAULT_MIN_FIX_CONFIDENCE, ge=0.0, le=1.0)
    max_fixes_per_violation: int = Field(default=DEFAULT_MAX_FIXES_PER_VIOLATION, ge=1)
    severity: ModelSeverityConfig = Field(default_factory=ModelSeverityConfig)
    ai_explain_categories: list[EnumDetectorCategory] = Field(default_factory=list)
    ai_fix_categories: list[EnumDetectorCategory] = Field(default_factory=list)
    ignored_pattern_ids: list[str] = Field(default_factory=list)
    log_level: EnumLogLevel = EnumLogLevel.INFO

    # ==========================================
    # Validation
    # ==========================================

    @classmethod
    def load(cls, data: dict[str, Any]) -> ModelProjectConfig:
        """Validate a configuration dict.

        Raises:
            ConfigurationError: If validation fails; the ``ValidationError``
                is chained as ``__cause__``.
        """
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid project configuration: {e}") from e

    # ==========================================
    # Environment Variable Interpolation
    # ==========================================

    @staticmethod
    def _interpolate_env_vars(value: Any) -> Any:
        """Recursively replace ``${VAR_NAME}`` references.

        Raises:
            ConfigurationError: If a referenced variable is not set.
        """
        if isinstance(value, str):
            for var_name in _ENV_VAR_PATTERN.findall(value):
                env_value = os.environ.get(var_name)
                if env_value is None:
                    raise ConfigurationError(
                        f"Environment variable '{var_name}' is not set "
                        f"(referenced in value: {value})"
                    )
                value = value.replace(f"${{{var_name}}}", env_value)
            return value
        if isinstance(value, dict):
            return {k: ModelProjectConfig._interpolate_env_vars(v) for k, v in value.items()}
        if isinstance(value, list):
            return [ModelProjectConfig._interpolate_env_vars(item) for item in value]
        return value

    # ==========================================
    # Factory Methods
    # ==========================================

    @classmethod
    def from_yaml(
        cls,
        path: str | Path,
        *,
        interpolate_env: bool = True,
    ) -> ModelProjectConfig:
        """Load configuration from a YAML file.

        Raises:
            ConfigurationError: If the file is missing, is not valid YAML, is
                not a mapping, references an unset variable, or fails
                validation.
        """
        path = Path(path)
        if not path.exists():
            raise ConfigurationError(f"Configuration file not found: {path}")

        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Malformed YAML in {path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration in {path} must be a mapping, got {type(data).__name__}"
            )
        if interpolate_env:
            data = cls._interpolate_env_vars(data)
        return cls.load(data)

    @classmethod
    def from_environment(cls, prefix: str = "OMNIDRIFT_") -> ModelProjectConfig:
        """Load configuration from environment variables.

        Supported variables (with the default prefix):
        - OMNIDRIFT_WORKER_COUNT
        - OMNIDRIFT_INCREMENTAL
        - OMNIDRIFT_MIN_OCCURRENCES
        - OMNIDRIFT_AUTO_APPROVE_THRESHOLD
        - OMNIDRIFT_MIN_FIX_CONFIDENCE
        - OMNIDRIFT_IGNORE_PATTERNS (comma-separated)
        - OMNIDRIFT_IGNORED_PATTERN_IDS (comma-separated)
        - OMNIDRIFT_LOG_LEVEL
        - OMNIDRIFT_DEFAULT_SEVERITY
        - OMNIDRIFT_ESCALATION_ENABLED

        Raises:
            ConfigurationError: If a value fails validation.
        """
        config_data: dict[str, Any] = {}

        if worker_count := os.environ.get(f"{prefix}WORKER_COUNT"):
            config_data["worker_count"] = worker_count

        if incremental := os.environ.get(f"{prefix}INCREMENTAL"):
            config_data["incremental"] = incremental.lower() in ("true", "1", "yes")

        if min_occurrences := os.environ.get(f"{prefix}MIN_OCCURRENCES"):
            config_data["min_occurrences"] = min_occurrences

        if threshold := os.environ.get(f"{prefix}AUTO_APPROVE_THRESHOLD"):
            config_data["auto_approve_threshold"] = threshold

        if min_fix := os.environ.get(f"{prefix}MIN_FIX_CONFIDENCE"):
            config_data["min_fix_confidence"] = min_fix

        if ignore := os.environ.get(f"{prefix}IGNORE_PATTERNS"):
            config_data["ignore_patterns"] = _split_list(ignore)

        if ignored_ids := os.environ.get(f"{prefix}IGNORED_PATTERN_IDS"):
            config_data["ignored_pattern_ids"] = _split_list(ignored_ids)

        if log_level := os.environ.get(f"{prefix}LOG_LEVEL"):
            config_data["log_level"] = log_level.upper()

        # Severity configuration
        severity_data: dict[str, Any] = {}
        if default_severity := os.environ.get(f"{prefix}DEFAULT_SEVERITY"):
            severity_data["default"] = default_severity.lower()
        if escalation := os.environ.get(f"{prefix}ESCALATION_ENABLED"):
            defaults = ModelSeverityConfig().escalation
            severity_data["escalation"] = {
                "enabled": escalation.lower() in ("true", "1", "yes"),
                "threshold": defaults.threshold,
                "rules": [rule.model_dump() for rule in defaults.rules],
            }
        if severity_data:
            config_data["severity"] = severity_data

        return cls.load(config_data)


def _split_list(raw: str) -> list[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


__all__ = ["ModelProjectConfig"]
