# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Unit tests for ModelProjectConfig loading and validation."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from omnidrift.constants import DEFAULT_IGNORE_PATTERNS
from omnidrift.enums import EnumDetectorCategory, EnumLogLevel, EnumSeverity
from omnidrift.exceptions import ConfigurationError
from omnidrift.runtime import ModelProjectConfig


@pytest.mark.unit
class TestDefaults:
    """Tests for default configuration values."""

    def test_defaults(self) -> None:
        """An empty config uses the engine defaults."""
        config = ModelProjectConfig()

        assert config.worker_count is None
        assert config.ignore_patterns == list(DEFAULT_IGNORE_PATTERNS)
        assert config.min_occurrences == 3
        assert config.incremental is False
        assert config.severity.default == EnumSeverity.WARNING
        assert config.severity.escalation.enabled is False
        assert config.log_level == EnumLogLevel.INFO

    @pytest.mark.parametrize(
        "data",
        [
            {"worker_count": 0},
            {"auto_approve_threshold": 1.5},
            {"min_occurrences": 0},
            {"unknown_key": True},
            {"severity": {"default": "fatal"}},
        ],
    )
    def test_invalid_values(self, data: dict[str, object]) -> None:
        """Invalid values raise ConfigurationError chained to pydantic."""
        with pytest.raises(ConfigurationError) as exc_info:
            ModelProjectConfig.load(data)
        assert isinstance(exc_info.value.__cause__, ValidationError)

    def test_invalid_escalation_rule(self) -> None:
        """A downgrading escalation rule is rejected."""
        data = {
            "severity": {
                "escalation": {
                    "enabled": True,
                    "rules": [{"from": "error", "to": "warning", "afterCount": 3}],
                }
            }
        }

        with pytest.raises(ConfigurationError, match="raise severity"):
            ModelProjectConfig.load(data)


@pytest.mark.unit
class TestFromYaml:
    """Tests for YAML loading."""

    def test_load(self, tmp_path: Path) -> None:
        """A YAML file is validated into a config."""
        path = tmp_path / "config.yaml"
        path.write_text(
            "worker_count: 4\n"
            "ignore_patterns:\n"
            "  - vendor/**\n"
            "ai_explain_categories: [security]\n"
            "severity:\n"
            "  default: info\n"
            "  overrides:\n"
            "    api/envelope: error\n"
            "  categoryOverrides:\n"
            "    security: error\n"
            "  escalation:\n"
            "    enabled: true\n"
            "    rules:\n"
            "      - from: info\n"
            "        to: warning\n"
            "        afterCount: 5\n",
            encoding="utf-8",
        )

        config = ModelProjectConfig.from_yaml(path)

        assert config.worker_count == 4
        assert config.ignore_patterns == ["vendor/**"]
        assert config.ai_explain_categories == [EnumDetectorCategory.SECURITY]
        assert config.severity.default == EnumSeverity.INFO
        assert config.severity.overrides == {"api/envelope": EnumSeverity.ERROR}
        assert config.severity.category_overrides == {"security": EnumSeverity.ERROR}
        assert config.severity.escalation.rules[0].after_count == 5

    def test_env_interpolation(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """${VAR} references are replaced from the environment."""
        monkeypatch.setenv("DRIFT_WORKERS", "6")
        path = tmp_path / "config.yaml"
        path.write_text("worker_count: ${DRIFT_WORKERS}\n", encoding="utf-8")

        assert ModelProjectConfig.from_yaml(path).worker_count == 6

    def test_unset_variable(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Referencing an unset variable is a configuration error."""
        monkeypatch.delenv("DRIFT_MISSING", raising=False)
        path = tmp_path / "config.yaml"
        path.write_text("log_level: ${DRIFT_MISSING}\n", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="DRIFT_MISSING"):
            ModelProjectConfig.from_yaml(path)

    def test_interpolation_disabled(self, tmp_path: Path) -> None:
        """With interpolation off the reference is validated literally."""
        path = tmp_path / "config.yaml"
        path.write_text("ignore_patterns: ['${NOT_A_VAR}']\n", encoding="utf-8")

        config = ModelProjectConfig.from_yaml(path, interpolate_env=False)

        assert config.ignore_patterns == ["${NOT_A_VAR}"]

    def test_empty_file(self, tmp_path: Path) -> None:
        """An empty file yields the defaults."""
        path = tmp_path / "config.yaml"
        path.write_text("", encoding="utf-8")

        assert ModelProjectConfig.from_yaml(path) == ModelProjectConfig()

    @pytest.mark.parametrize(
        "content",
        ["worker_count: [unclosed\n", "- just\n- a list\n"],
    )
    def test_malformed(self, tmp_path: Path, content: str) -> None:
        """Malformed YAML and non-mapping documents are rejected."""
        path = tmp_path / "config.yaml"
        path.write_text(content, encoding="utf-8")

        with pytest.raises(ConfigurationError):
            ModelProjectConfig.from_yaml(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file is a configuration error."""
        with pytest.raises(ConfigurationError, match="not found"):
            ModelProjectConfig.from_yaml(tmp_path / "absent.yaml")


@pytest.mark.unit
class TestFromEnvironment:
    """Tests for environment loading."""

    def test_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Prefixed variables populate the config."""
        monkeypatch.setenv("OMNIDRIFT_WORKER_COUNT", "2")
        monkeypatch.setenv("OMNIDRIFT_INCREMENTAL", "yes")
        monkeypatch.setenv("OMNIDRIFT_IGNORE_PATTERNS", "a/**, b/**,")
        monkeypatch.setenv("OMNIDRIFT_LOG_LEVEL", "debug")
        monkeypatch.setenv("OMNIDRIFT_DEFAULT_SEVERITY", "ERROR")
        monkeypatch.setenv("OMNIDRIFT_ESCALATION_ENABLED", "true")

        config = ModelProjectConfig.from_environment()

        assert config.worker_count == 2
        assert config.incremental is True
        assert config.ignore_patterns == ["a/**", "b/**"]
        assert config.log_level == EnumLogLevel.DEBUG
        assert config.severity.default == EnumSeverity.ERROR
        assert config.severity.escalation.enabled is True
        assert len(config.severity.escalation.rules) == 3

    def test_custom_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Only variables with the given prefix are read."""
        monkeypatch.setenv("OMNIDRIFT_WORKER_COUNT", "2")
        monkeypatch.setenv("DRIFT_WORKER_COUNT", "8")

        assert ModelProjectConfig.from_environment(prefix="DRIFT_").worker_count == 8

    def test_invalid_value(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Invalid environment values raise ConfigurationError."""
        monkeypatch.setenv("OMNIDRIFT_MIN_OCCURRENCES", "zero")

        with pytest.raises(ConfigurationError):
            ModelProjectConfig.from_environment()
