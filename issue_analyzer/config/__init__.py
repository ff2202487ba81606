"""Configuration system for the issue-analyzer service.

Key Components:
    - AppSettings: Main configuration container with YAML loading support
    - ServerConfig: HTTP binding
    - LoggingConfig: structlog level and renderer
    - LLMConfig / AnthropicConfig: LLM client selection and credentials

Example:
    >>> from issue_analyzer.config import load_settings
    >>> settings = load_settings("config.yaml")
    >>> settings.llm.provider
    <LLMProviderType.MOCK: 'mock'>
"""

from issue_analyzer.config.settings import (
    AnthropicConfig,
    AppSettings,
    LLMConfig,
    LoggingConfig,
    ServerConfig,
    load_settings,
)

__all__ = [
    "AnthropicConfig",
    "AppSettings",
    "LLMConfig",
    "LoggingConfig",
    "ServerConfig",
    "load_settings",
]
