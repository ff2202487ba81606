"""Tests for issue_analyzer/config/settings.py Pydantic models.

Tests cover:
- Model defaults and validation
- Provider-specific validation for Anthropic
- AppSettings loading from YAML with environment interpolation
- Short-name environment overrides
"""

import pytest
import yaml
from pydantic import SecretStr, ValidationError

from issue_analyzer.config.settings import (
    AnthropicConfig,
    AppSettings,
    LLMConfig,
    LoggingConfig,
    ServerConfig,
    load_settings,
)
from issue_analyzer.enums import LLMProviderType
from issue_analyzer.exceptions import ConfigurationError


def write_yaml(path, data) -> str:
    path.write_text(yaml.safe_dump(data))
    return str(path)


class TestModels:
    def test_defaults(self):
        settings = AppSettings()

        assert settings.server.port == 8000
        assert settings.logging.level == "INFO"
        assert settings.llm.provider == LLMProviderType.MOCK
        assert settings.llm.mock_delay == 0.5
        assert settings.llm.anthropic.max_retries == 3
        assert settings.llm.anthropic.model == "claude-3-opus-20240229"
        assert settings.llm.anthropic.base_url == "https://api.anthropic.com/v1/messages"

    @pytest.mark.parametrize("port", [-1, 65536])
    def test_invalid_port(self, port):
        with pytest.raises(ValidationError):
            ServerConfig(port=port)

    def test_log_level_is_case_insensitive(self):
        assert LoggingConfig(level="debug").level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            LoggingConfig(level="verbose")

    def test_negative_max_retries_rejected(self):
        with pytest.raises(ValidationError):
            AnthropicConfig(max_retries=-1)

    def test_unknown_provider_rejected(self):
        with pytest.raises(ValidationError):
            LLMConfig(provider="openai")

    def test_anthropic_requires_api_key(self):
        with pytest.raises(ValidationError, match="api_key is required"):
            LLMConfig(provider="anthropic")

    def test_anthropic_requires_model(self):
        with pytest.raises(ValidationError, match="model is required"):
            LLMConfig(provider="anthropic", anthropic=AnthropicConfig(api_key=SecretStr("k"), model=""))

    def test_anthropic_valid(self):
        config = LLMConfig(provider="anthropic", anthropic={"api_key": "k"})

        assert config.provider == LLMProviderType.ANTHROPIC
        assert config.anthropic.api_key.get_secret_value() == "k"

    def test_api_key_is_masked(self):
        config = AnthropicConfig(api_key="super-secret")

        assert "super-secret" not in repr(config)


class TestFromYaml:
    def test_load_full_config(self, tmp_path):
        path = write_yaml(
            tmp_path / "config.yaml",
            {
                "server": {"host": "0.0.0.0", "port": 9000},
                "logging": {"level": "debug", "json_output": False},
                "llm": {"provider": "anthropic", "anthropic": {"api_key": "abc", "max_retries": 5}},
            },
        )

        settings = AppSettings.from_yaml(path)

        assert settings.server.host == "0.0.0.0"
        assert settings.server.port == 9000
        assert settings.logging.level == "DEBUG"
        assert settings.logging.json_output is False
        assert settings.llm.provider == LLMProviderType.ANTHROPIC
        assert settings.llm.anthropic.max_retries == 5

    def test_empty_file_uses_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert AppSettings.from_yaml(path).server.port == 8000

    def test_env_interpolation(self, tmp_path, monkeypatch):
        monkeypatch.setenv("TEST_ANTHROPIC_KEY", "from-env")
        path = tmp_path / "config.yaml"
        path.write_text(
            "# uses ${UNDEFINED_IN_COMMENT}\n"
            "llm:\n"
            "  provider: ${TEST_PROVIDER:-anthropic}\n"
            "  anthropic:\n"
            "    api_key: ${TEST_ANTHROPIC_KEY}\n"
        )

        settings = AppSettings.from_yaml(path)

        assert settings.llm.provider == LLMProviderType.ANTHROPIC
        assert settings.llm.anthropic.api_key.get_secret_value() == "from-env"

    def test_missing_env_var(self, tmp_path, monkeypatch):
        monkeypatch.delenv("TEST_MISSING_VAR", raising=False)
        path = tmp_path / "config.yaml"
        path.write_text("llm:\n  anthropic:\n    api_key: ${TEST_MISSING_VAR}\n")

        with pytest.raises(ConfigurationError, match="TEST_MISSING_VAR"):
            AppSettings.from_yaml(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            AppSettings.from_yaml(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("server: [unclosed\n")

        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            AppSettings.from_yaml(path)

    def test_non_mapping_yaml(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigurationError, match="YAML object"):
            AppSettings.from_yaml(path)

    def test_validation_failure(self, tmp_path):
        path = write_yaml(tmp_path / "config.yaml", {"llm": {"provider": "anthropic"}})

        with pytest.raises(ConfigurationError, match="Failed to validate"):
            AppSettings.from_yaml(path)


class TestEnvOverrides:
    def test_short_names(self):
        settings = AppSettings().apply_env_overrides(
            {
                "API_PORT": "9100",
                "LOG_LEVEL": "warning",
                "LLM_PROVIDER": "anthropic",
                "ANTHROPIC_API_KEY": "env-key",
                "ANTHROPIC_MODEL": "claude-env",
            }
        )

        assert settings.server.port == 9100
        assert settings.logging.level == "WARNING"
        assert settings.llm.provider == LLMProviderType.ANTHROPIC
        assert settings.llm.anthropic.api_key.get_secret_value() == "env-key"
        assert settings.llm.anthropic.model == "claude-env"

    def test_no_overrides_keeps_values(self):
        original = AppSettings(llm={"provider": "anthropic", "anthropic": {"api_key": "file-key"}})

        settings = original.apply_env_overrides({})

        assert settings.llm.anthropic.api_key.get_secret_value() == "file-key"
        assert settings.llm.provider == LLMProviderType.ANTHROPIC

    def test_invalid_override(self):
        with pytest.raises(ConfigurationError):
            AppSettings().apply_env_overrides({"LLM_PROVIDER": "anthropic"})

    def test_nested_prefixed_env_vars(self, monkeypatch):
        monkeypatch.setenv("ISSUE_ANALYZER_SERVER__PORT", "8123")

        assert AppSettings().server.port == 8123


class TestLoadSettings:
    def test_without_file(self):
        assert load_settings().llm.provider == LLMProviderType.MOCK

    def test_with_file_and_env(self, tmp_path, monkeypatch):
        path = write_yaml(tmp_path / "config.yaml", {"server": {"port": 7000}})
        monkeypatch.setenv("ANTHROPIC_MODEL", "claude-override")

        settings = load_settings(path)

        assert settings.server.port == 7000
        assert settings.llm.anthropic.model == "claude-override"
