"""
Configuration system using Pydantic for type-safe settings management.

Settings come from three layers, later ones winning:

1. Defaults declared on the models below (mock provider, port 8000).
2. An optional YAML file, with ``${VAR}`` / ``${VAR:-default}`` interpolation.
3. Environment variables: ``ISSUE_ANALYZER_*`` nested variables handled by
   pydantic-settings, plus the short names ``API_PORT``, ``LOG_LEVEL``,
   ``LLM_PROVIDER``, ``ANTHROPIC_API_KEY`` and ``ANTHROPIC_MODEL``.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, SecretStr, ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from issue_analyzer.enums import LLMProviderType
from issue_analyzer.exceptions import ConfigurationError

DEFAULT_ANTHROPIC_URL = "https://api.anthropic.com/v1/messages"
DEFAULT_ANTHROPIC_MODEL = "claude-3-opus-20240229"


class ServerConfig(BaseModel):
    """HTTP server binding."""

    host: str = Field(default="127.0.0.1", description="Interface to bind")
    port: int = Field(default=8000, ge=0, le=65535, description="TCP port to listen on")


class LoggingConfig(BaseModel):
    """Structured logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Minimum log level"
    )
    json_output: bool = Field(default=True, description="Emit JSON lines instead of console output")

    @model_validator(mode="before")
    @classmethod
    def normalize_level(cls, data: object) -> object:
        if isinstance(data, dict) and isinstance(data.get("level"), str):
            data = {**data, "level": data["level"].upper()}
        return data


class AnthropicConfig(BaseModel):
    """Anthropic Messages API configuration.

    Supports environment references for api_key:
    - api_key: "${ANTHROPIC_API_KEY}"
    """

    api_key: SecretStr = Field(default=SecretStr(""), description="Anthropic API key")
    model: str = Field(default=DEFAULT_ANTHROPIC_MODEL, description="Model identifier")
    max_retries: int = Field(default=3, ge=0, description="Maximum attempts per request")
    base_url: str = Field(default=DEFAULT_ANTHROPIC_URL, description="Messages endpoint URL")
    timeout: float = Field(default=60.0, gt=0, description="Request timeout in seconds")


class LLMConfig(BaseModel):
    """LLM client selection and provider settings."""

    provider: LLMProviderType = Field(default=LLMProviderType.MOCK, description="Which LLM client to use")
    anthropic: AnthropicConfig = Field(default_factory=AnthropicConfig)
    mock_delay: float = Field(default=0.5, ge=0.0, description="Simulated latency of the mock client in seconds")

    @model_validator(mode="after")
    def validate_provider_config(self) -> LLMConfig:
        """Ensure the selected provider has what it needs."""
        if self.provider == LLMProviderType.ANTHROPIC:
            if not self.anthropic.api_key.get_secret_value():
                raise ValueError("llm.anthropic.api_key is required when provider is set to anthropic")
            if not self.anthropic.model:
                raise ValueError("llm.anthropic.model is required when provider is set to anthropic")
        return self


class AppSettings(BaseSettings):
    """Main service settings."""

    model_config = SettingsConfigDict(
        env_prefix="ISSUE_ANALYZER_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    llm: LLMConfig = Field(default_factory=LLMConfig)

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> AppSettings:
        """Load settings from YAML file with environment variable interpolation.

        Args:
            config_path: Path to YAML configuration file

        Returns:
            AppSettings instance

        Raises:
            ConfigurationError: If config file is invalid or missing required fields
        """
        config_file = Path(config_path)
        if not config_file.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            yaml_content = config_file.read_text()
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file: {config_path}") from e

        try:
            yaml_content = cls._interpolate_env_vars(yaml_content)
        except ValueError as e:
            raise ConfigurationError(f"Invalid environment variable reference in config: {e}") from e

        try:
            config_dict = yaml.safe_load(yaml_content) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in {config_path}: {e}") from e
        if not isinstance(config_dict, dict):
            raise ConfigurationError("Configuration must be a YAML object, not a list or scalar")

        try:
            return cls(**config_dict)
        except ValidationError as e:
            raise ConfigurationError(f"Failed to validate configuration: {e}") from e

    def apply_env_overrides(self, environ: dict[str, str] | None = None) -> AppSettings:
        """Return a copy with the short-name environment overrides applied.

        Args:
            environ: Mapping to read from (defaults to ``os.environ``)

        Raises:
            ConfigurationError: If an override produces invalid settings
        """
        env = os.environ if environ is None else environ
        data = self.model_dump()

        if env.get("API_PORT"):
            data["server"]["port"] = env["API_PORT"]
        if env.get("LOG_LEVEL"):
            data["logging"]["level"] = env["LOG_LEVEL"]
        if env.get("LLM_PROVIDER"):
            data["llm"]["provider"] = env["LLM_PROVIDER"]
        if env.get("ANTHROPIC_API_KEY"):
            data["llm"]["anthropic"]["api_key"] = env["ANTHROPIC_API_KEY"]
        if env.get("ANTHROPIC_MODEL"):
            data["llm"]["anthropic"]["model"] = env["ANTHROPIC_MODEL"]

        try:
            return type(self).model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration from environment: {e}") from e

    @staticmethod
    def _interpolate_env_vars(content: str) -> str:
        """Interpolate ${VAR_NAME} placeholders with environment variables.

        Supports two syntaxes:
        - ${VAR_NAME} - Required environment variable (raises if not set)
        - ${VAR_NAME:-default} - Optional with default value

        YAML comment lines are left untouched.

        Raises:
            ValueError: If a required environment variable is not set
        """
        pattern = re.compile(r"\$\{([A-Z_][A-Z0-9_]*)(?::-([^}]*))?\}")

        def replace_var(match: re.Match[str]) -> str:
            var_name = match.group(1)
            default_value = match.group(2)
            value = os.getenv(var_name)

            if value is not None:
                return value
            elif default_value is not None:
                return default_value
            else:
                raise ValueError(f"Environment variable {var_name} is not set")

        def process_line(line: str) -> str:
            if line.lstrip().startswith("#"):
                return line
            return pattern.sub(replace_var, line)

        return "\n".join(process_line(line) for line in content.split("\n"))


def load_settings(config_path: str | Path | None = None) -> AppSettings:
    """Load settings from an optional YAML file plus environment overrides.

    Raises:
        ConfigurationError: If the file or the resulting settings are invalid
    """
    if config_path is not None:
        settings = AppSettings.from_yaml(config_path)
    else:
        try:
            settings = AppSettings()
        except ValidationError as e:
            raise ConfigurationError(f"Failed to validate configuration: {e}") from e
    return settings.apply_env_overrides()
