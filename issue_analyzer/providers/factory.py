"""Factory for creating LLM client instances based on configuration."""

import structlog

from issue_analyzer.config.settings import LLMConfig
from issue_analyzer.enums import LLMProviderType
from issue_analyzer.providers.anthropic import AnthropicLLMClient
from issue_analyzer.providers.base import LLMClient
from issue_analyzer.providers.mock import MockLLMClient

log = structlog.get_logger(__name__)


def create_llm_client(config: LLMConfig | None = None, provider: str | None = None) -> LLMClient:
    """Create the LLM client selected by configuration.

    Only the exact provider ``"anthropic"`` yields an AnthropicLLMClient.
    ``"mock"``, an empty or missing value, and unrecognized names all fall
    back to MockLLMClient.

    Args:
        config: LLM settings (defaults are used when None)
        provider: Provider name overriding ``config.provider``

    Returns:
        LLMClient instance

    Raises:
        ConfigurationError: If Anthropic is selected without an API key

    Example:
        >>> settings = load_settings("config.yaml")
        >>> client = create_llm_client(settings.llm)
        >>> analysis = await client.analyze_issue(issue)
    """
    if config is None:
        config = LLMConfig()

    provider_name = str(provider if provider is not None else config.provider or "")

    log.info("creating_llm_client", provider=provider_name or LLMProviderType.MOCK.value)

    if provider_name == LLMProviderType.ANTHROPIC.value:
        return AnthropicLLMClient.from_config(config.anthropic)

    if provider_name != LLMProviderType.MOCK.value:
        log.warning("unknown_llm_provider", provider=provider_name, fallback=LLMProviderType.MOCK.value)

    return MockLLMClient(delay=config.mock_delay)
